"""
Core bootstrap and stack lifecycle functionality for pocketrocket.

This module provides the business logic:
- Resolving the state bucket and encryption key
- Building the backend locator
- Managing stacks and running stack operations
- Sequencing a full bootstrap run
"""

from .resolver import (
    Candidate,
    CreateNew,
    ENCRYPTION_KEY,
    RESOURCE_KINDS,
    ResourceChoice,
    ResourceKind,
    ResourceResolver,
    Reuse,
    STORAGE,
)
from .locator import BackendLocator, build_locator
from .workspace import StackInfo, StackManager, StackRef, WorkspaceHandle, create_workspace
from .pulumi_runner import CommandResult, PulumiRunner
from .lifecycle import Action, LifecycleController, LifecycleState
from .orchestrator import BootstrapOrchestrator

__all__ = [
    "Candidate",
    "CreateNew",
    "ENCRYPTION_KEY",
    "RESOURCE_KINDS",
    "ResourceChoice",
    "ResourceKind",
    "ResourceResolver",
    "Reuse",
    "STORAGE",
    "BackendLocator",
    "build_locator",
    "StackInfo",
    "StackManager",
    "StackRef",
    "WorkspaceHandle",
    "create_workspace",
    "CommandResult",
    "PulumiRunner",
    "Action",
    "LifecycleController",
    "LifecycleState",
    "BootstrapOrchestrator",
]
