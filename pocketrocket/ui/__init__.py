"""Qt dialogs for running the bootstrap outside a terminal."""

from .qt_prompter import QtPrompter

__all__ = ["QtPrompter"]
