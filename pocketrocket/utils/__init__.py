"""
Utility functions for pocketrocket.
"""

import subprocess
import sys

from .logger import setup_logging
from .validators import validate_pulumi_installed
from .interrupts import install_interrupt_watcher


def subprocess_creation_flags() -> int:
    """Return creationflags to hide console windows on Windows, 0 elsewhere."""
    if sys.platform == "win32":
        return subprocess.CREATE_NO_WINDOW
    return 0


__all__ = [
    "setup_logging",
    "validate_pulumi_installed",
    "install_interrupt_watcher",
    "subprocess_creation_flags",
]
