"""
Abstract prompt provider.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

# The only answer accepted as a confirmation, compared case-insensitively
AFFIRMATIVE_TOKEN = "y"


def is_affirmative(answer: Optional[str]) -> bool:
    """Return True if the answer is the accepted confirmation token."""
    if answer is None:
        return False
    return answer.strip().lower() == AFFIRMATIVE_TOKEN


class Prompter(ABC):
    """
    Capability passed to the orchestrator and lifecycle controller
    for every question and every block of output.
    """

    @abstractmethod
    def ask(self, message: str, default: Optional[str] = None) -> str:
        """
        Ask for a single line of text.

        Returns the entered text, or ``default`` when the answer is
        blank and a default was given. Blank answers without a default
        come back as "".
        """

    @abstractmethod
    def choose(self, message: str, options: Sequence[str]) -> str:
        """Ask the operator to pick exactly one of ``options``."""

    @abstractmethod
    def confirm(
        self, message: str, destructive: bool = False, preview: Optional[str] = None
    ) -> bool:
        """
        Ask a yes/no question; anything but an explicit yes is a no.

        ``destructive`` marks questions that gate a destroy. ``preview``
        is the dry-run output the question is about, already passed to
        show(); implementations may present it again next to the question.
        """

    @abstractmethod
    def show(self, text: str):
        """Display a block of plain text verbatim."""

    @abstractmethod
    def warn(self, text: str):
        """Display a warning."""
