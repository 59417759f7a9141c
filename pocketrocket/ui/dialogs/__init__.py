"""Dialog windows for pocketrocket."""

from .confirm_dialog import ConfirmDialog

__all__ = ["ConfirmDialog"]
