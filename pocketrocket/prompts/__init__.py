"""
Interactive surface for pocketrocket.

The bootstrap and lifecycle code only talks to a Prompter; how the
questions are rendered is up to the implementation.
"""

from .base import Prompter, is_affirmative, AFFIRMATIVE_TOKEN
from .console import ConsolePrompter

__all__ = ["Prompter", "ConsolePrompter", "is_affirmative", "AFFIRMATIVE_TOKEN"]
