"""
Validation utilities for pocketrocket.
"""

import shutil
import subprocess
from typing import Tuple, Optional


def validate_pulumi_installed(pulumi_binary: str = "pulumi") -> Tuple[bool, Optional[str]]:
    """
    Check if the Pulumi CLI is installed and accessible.

    Args:
        pulumi_binary: Path or name of pulumi binary

    Returns:
        Tuple of (is_installed, version_string)
        If not installed, version_string is None
    """
    if not shutil.which(pulumi_binary):
        return False, None

    try:
        from . import subprocess_creation_flags
        result = subprocess.run(
            [pulumi_binary, "version"],
            capture_output=True,
            text=True,
            creationflags=subprocess_creation_flags(),
        )

        if result.returncode == 0:
            return True, result.stdout.strip().split('\n')[0]
        return False, None

    except OSError:
        return False, None
