"""
pocketrocket - bootstrap the state backend and lifecycle of the operator stack.
"""

__version__ = "1.0.0"
