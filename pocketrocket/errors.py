"""
Error taxonomy for pocketrocket.

Every component failure aborts the run upward; nothing here is retried.
"""

from typing import Optional


class PocketRocketError(Exception):
    """Base class for all bootstrap and lifecycle failures."""
    pass


class NoCandidatesAvailable(PocketRocketError):
    """Raised when reuse was requested but no existing resource was found."""

    def __init__(self, kind: str):
        super().__init__(f"No existing {kind} available to reuse")
        self.kind = kind


class InvalidLocator(PocketRocketError):
    """Raised when a backend locator cannot be built from its inputs."""
    pass


class InvalidAction(PocketRocketError):
    """Raised when the operator picks something that is not an action."""

    def __init__(self, action: str):
        super().__init__(f"Not a valid action: '{action}'")
        self.action = action


class OperationCancelled(PocketRocketError):
    """Raised when the operator declines a confirmation."""

    def __init__(self, stack: Optional[str] = None):
        message = "Process cancelled"
        if stack:
            message = f"Process cancelled on stack '{stack}'"
        super().__init__(message)
        self.stack = stack


class ProviderFailure(PocketRocketError):
    """Wraps an error raised by a collaborator (cloud API, engine, filesystem)."""

    def __init__(self, step: str, cause: Optional[BaseException] = None):
        message = f"Failed to {step}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)
        self.step = step
        self.cause = cause


class EngineFailure(PocketRocketError):
    """A stack operation returned a non-zero exit code."""

    action = "run stack operation"

    def __init__(self, stack: str, detail: str = ""):
        message = f"Failed to {self.action} for stack '{stack}'"
        if detail:
            message += f":\n{detail}"
        super().__init__(message)
        self.stack = stack
        self.detail = detail


class PreviewFailure(EngineFailure):
    action = "preview changes"


class ApplyFailure(EngineFailure):
    action = "update stack"


class DestroyFailure(EngineFailure):
    action = "destroy stack"
