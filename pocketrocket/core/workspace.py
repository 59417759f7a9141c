"""
Pulumi workspace and stack management.

Provides the workspace handle shared by every stack operation in a run,
and stack listing, selection and creation by wrapping the pulumi stack
CLI commands.
"""

import json
import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml

from ..errors import ProviderFailure
from ..security.sanitizer import InputSanitizer, SecurityError
from ..utils import subprocess_creation_flags
from .locator import BackendLocator

logger = logging.getLogger(__name__)

PROJECT_FILE = "Pulumi.yaml"


@dataclass(frozen=True)
class WorkspaceHandle:
    """Configured backend plus project identity. Read-only once built."""
    project: str
    locator: BackendLocator
    work_dir: str
    runtime: str = "python"
    aws_profile: Optional[str] = None
    aws_region: Optional[str] = None

    @property
    def backend_url(self) -> str:
        return self.locator.backend_url

    @property
    def secrets_provider(self) -> Optional[str]:
        return self.locator.secrets_provider

    def env(self) -> Dict[str, str]:
        """Environment for engine subprocesses."""
        env = dict(os.environ)
        env["PULUMI_BACKEND_URL"] = self.backend_url
        env["PULUMI_SKIP_UPDATE_CHECK"] = "true"
        # engine runs under the profile and region the backend was bootstrapped with
        if self.aws_profile:
            env["AWS_PROFILE"] = self.aws_profile
        if self.aws_region:
            env["AWS_REGION"] = self.aws_region
        return env


@dataclass(frozen=True)
class StackRef:
    """A named stack within a workspace."""
    name: str
    workspace: WorkspaceHandle


@dataclass
class StackInfo:
    """Information about a single stack as listed by the engine."""
    name: str
    is_current: bool = False
    last_update: Optional[str] = None
    update_in_progress: bool = False
    resource_count: Optional[int] = None


def create_workspace(
    project: str,
    locator: BackendLocator,
    work_dir: str,
    runtime: str = "python",
    aws_profile: Optional[str] = None,
    aws_region: Optional[str] = None,
) -> WorkspaceHandle:
    """
    Build the workspace handle and save its project settings.

    The project settings file in ``work_dir`` gets the project name,
    runtime and backend URL; any other keys already in it are kept.

    Raises:
        SecurityError: If the project name or work dir is invalid
        ProviderFailure: If the project settings cannot be written
    """
    InputSanitizer.sanitize_project_name(project)
    work_dir = InputSanitizer.sanitize_path(work_dir)
    handle = WorkspaceHandle(
        project=project,
        locator=locator,
        work_dir=work_dir,
        runtime=runtime,
        aws_profile=aws_profile,
        aws_region=aws_region,
    )

    project_file = Path(work_dir) / PROJECT_FILE
    try:
        settings = {}
        if project_file.exists():
            with open(project_file, "r") as f:
                settings = yaml.safe_load(f) or {}
            if not isinstance(settings, dict):
                raise ValueError(f"{PROJECT_FILE} must contain a mapping")

        settings["name"] = project
        settings.setdefault("runtime", runtime)
        settings["backend"] = {"url": handle.backend_url}

        with open(project_file, "w") as f:
            yaml.safe_dump(settings, f, default_flow_style=False, sort_keys=False)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ProviderFailure("save project settings", e) from e

    logger.info(f"Workspace for '{project}' uses backend {handle.backend_url}")
    return handle


class StackManager:
    """
    Manage the stacks of a workspace.

    All commands run synchronously and use the same security patterns
    as PulumiRunner: shell=False, validated args.
    """

    def __init__(self, workspace: WorkspaceHandle, pulumi_binary: str = "pulumi"):
        self.workspace = workspace
        self.pulumi_binary = pulumi_binary

    def _run(self, args: List[str]) -> Tuple[int, str, str]:
        """
        Run a pulumi subcommand in the workspace.

        Returns:
            (exit_code, stdout, stderr)
        """
        cmd = [
            self.pulumi_binary,
            f"--cwd={self.workspace.work_dir}",
            "--non-interactive",
        ] + args

        for arg in cmd:
            if not InputSanitizer.is_safe_command_arg(arg):
                raise SecurityError(f"Unsafe command argument: {arg}")

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                shell=False,
                env=self.workspace.env(),
                creationflags=subprocess_creation_flags(),
            )
            return result.returncode, result.stdout, result.stderr
        except OSError as e:
            return -1, "", str(e)

    def list_stacks(self) -> List[StackInfo]:
        """
        List all stacks of the workspace project.

        Raises:
            ProviderFailure: If the engine cannot list stacks
        """
        code, stdout, stderr = self._run(["stack", "ls", "--json"])
        if code != 0:
            logger.error(f"Failed to list stacks: {stderr}")
            raise ProviderFailure("list stacks", RuntimeError(stderr.strip()))

        try:
            entries = json.loads(stdout or "[]")
        except json.JSONDecodeError as e:
            raise ProviderFailure("parse stack list", e) from e

        stacks = []
        for entry in entries:
            stacks.append(StackInfo(
                name=entry["name"],
                is_current=bool(entry.get("current", False)),
                last_update=entry.get("lastUpdate"),
                update_in_progress=bool(entry.get("updateInProgress", False)),
                resource_count=entry.get("resourceCount"),
            ))
        return stacks

    def select_stack(self, name: str):
        """
        Select an existing stack.

        Raises:
            ProviderFailure: If the stack cannot be selected
        """
        InputSanitizer.sanitize_stack_name(name)
        code, stdout, stderr = self._run(["stack", "select", name])
        if code != 0:
            logger.error(f"Failed to load stack {name}: {stderr}")
            raise ProviderFailure(f"load stack '{name}'", RuntimeError(stderr.strip()))
        logger.info(f"Selected stack: {name}")

    def upsert_stack(self, name: str):
        """
        Select a stack, creating it first if it does not exist.

        New stacks get the workspace secrets provider when one is set.

        Raises:
            ProviderFailure: If the stack cannot be created or selected
        """
        InputSanitizer.sanitize_stack_name(name)
        args = ["stack", "select", "--create", name]
        secrets_provider = self.workspace.secrets_provider
        if secrets_provider:
            args.append(f"--secrets-provider={secrets_provider}")
        code, stdout, stderr = self._run(args)
        if code != 0:
            logger.error(f"Failed to construct stack {name}: {stderr}")
            raise ProviderFailure(f"construct stack '{name}'", RuntimeError(stderr.strip()))
        logger.info(f"Using stack: {name}")
