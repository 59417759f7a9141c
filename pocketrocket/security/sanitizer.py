"""
Input sanitization and validation for pocketrocket.

This module provides input validation to prevent:
- Command injection through engine arguments
- Invalid Pulumi project and stack names
- Program directories that do not exist
"""

import os
import re


class SecurityError(Exception):
    """Raised when a security validation fails."""
    pass


class InputSanitizer:
    """
    Provides input validation and sanitization methods.

    All methods raise SecurityError if validation fails.
    """

    # Pulumi project names: letters, digits, underscores, hyphens, periods
    PROJECT_NAME_PATTERN = re.compile(r'^[A-Za-z0-9_.-]+$')

    # A single stack name segment; stacks may be qualified as org/project/stack
    STACK_SEGMENT_PATTERN = re.compile(r'^[A-Za-z0-9_.-]+$')

    MAX_PROJECT_NAME_LENGTH = 100
    MAX_STACK_SEGMENT_LENGTH = 100
    MAX_COMMAND_ARG_LENGTH = 10000

    @staticmethod
    def sanitize_path(path: str) -> str:
        """
        Validate and normalize a program directory path.

        Args:
            path: Path to validate

        Returns:
            Normalized absolute path

        Raises:
            SecurityError: If path is empty, missing or not a directory
        """
        if not path:
            raise SecurityError("Path cannot be empty")

        try:
            abs_path = os.path.realpath(os.path.expanduser(path))
        except (OSError, ValueError) as e:
            raise SecurityError(f"Invalid path: {e}")

        if not os.path.exists(abs_path):
            raise SecurityError(f"Path does not exist: {path}")

        if not os.path.isdir(abs_path):
            raise SecurityError(f"Path is not a directory: {path}")

        return abs_path

    @staticmethod
    def sanitize_project_name(name: str) -> str:
        """
        Validate a Pulumi project name.

        Rules:
        - Cannot be empty
        - Letters, digits, underscores, hyphens, periods only
        - Max length: 100 characters

        Raises:
            SecurityError: If name is invalid
        """
        if not name:
            raise SecurityError("Project name cannot be empty")

        if len(name) > InputSanitizer.MAX_PROJECT_NAME_LENGTH:
            raise SecurityError(
                f"Project name too long (max {InputSanitizer.MAX_PROJECT_NAME_LENGTH})"
            )

        if not InputSanitizer.PROJECT_NAME_PATTERN.match(name):
            raise SecurityError(
                f"Invalid project name '{name}': only letters, digits, "
                "underscores, hyphens and periods allowed"
            )

        return name

    @staticmethod
    def sanitize_stack_name(name: str) -> str:
        """
        Validate a Pulumi stack name.

        Accepts plain names ("prod") and fully qualified names
        ("organization/project/prod").

        Raises:
            SecurityError: If name is invalid
        """
        if not name:
            raise SecurityError("Stack name cannot be empty")

        if name.startswith("-"):
            raise SecurityError("Stack name cannot start with hyphen")

        segments = name.split("/")
        if len(segments) not in (1, 3):
            raise SecurityError(
                f"Invalid stack name '{name}': use 'stack' or 'org/project/stack'"
            )

        for segment in segments:
            if len(segment) > InputSanitizer.MAX_STACK_SEGMENT_LENGTH:
                raise SecurityError(
                    f"Stack name too long (max {InputSanitizer.MAX_STACK_SEGMENT_LENGTH})"
                )
            if not InputSanitizer.STACK_SEGMENT_PATTERN.match(segment):
                raise SecurityError(
                    f"Invalid stack name '{name}': only letters, digits, "
                    "underscores, hyphens and periods allowed"
                )

        return name

    @staticmethod
    def is_safe_command_arg(arg: str) -> bool:
        """
        Check if a command argument is safe to pass to subprocess.

        We always use shell=False; this rejects the remaining
        problematic inputs.

        Returns:
            True if safe, False otherwise
        """
        if '\x00' in arg:
            return False

        if len(arg) > InputSanitizer.MAX_COMMAND_ARG_LENGTH:
            return False

        return True
