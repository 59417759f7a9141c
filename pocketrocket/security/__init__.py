"""
Security module for pocketrocket.

This module validates operator input before it reaches the
engine command line.
"""

from .sanitizer import InputSanitizer, SecurityError

__all__ = ["InputSanitizer", "SecurityError"]
