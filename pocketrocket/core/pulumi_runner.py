"""
Pulumi command execution with real-time output streaming.

This module executes the stack operations (preview, destroy preview,
up, destroy) with streaming callbacks and process management.
"""

import logging
import subprocess
import threading
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..security.sanitizer import InputSanitizer, SecurityError
from ..utils import subprocess_creation_flags
from .workspace import StackRef

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Result of a Pulumi command execution."""
    exit_code: int
    stdout: str
    stderr: str
    success: bool
    command: str  # operation name (e.g. "preview", "up")


class PulumiRunner:
    """
    Executes Pulumi stack operations with real-time output streaming.

    - shell=False always (no shell interpretation)
    - --non-interactive prevents engine prompts
    - --yes --skip-preview on mutating calls; the preview gate lives
      in the lifecycle controller
    - All command args validated via is_safe_command_arg()
    - No timeout: commands run to completion or interrupt
    """

    def __init__(self, pulumi_binary: str = "pulumi", color: str = "always"):
        self.pulumi_binary = pulumi_binary
        self.color = color

    def preview(
        self,
        stack: StackRef,
        output_callback: Optional[Callable[[str], None]] = None,
    ) -> CommandResult:
        """Run pulumi preview."""
        cmd = self._build_base_command(stack, "preview")
        return self._execute(cmd, stack, "preview", output_callback)

    def preview_destroy(
        self,
        stack: StackRef,
        output_callback: Optional[Callable[[str], None]] = None,
    ) -> CommandResult:
        """Run pulumi destroy --preview-only."""
        cmd = self._build_base_command(stack, "destroy")
        cmd.append("--preview-only")
        return self._execute(cmd, stack, "preview-destroy", output_callback)

    def up(
        self,
        stack: StackRef,
        output_callback: Optional[Callable[[str], None]] = None,
    ) -> CommandResult:
        """Run pulumi up."""
        cmd = self._build_base_command(stack, "up")
        cmd.extend(["--yes", "--skip-preview"])
        return self._execute(cmd, stack, "up", output_callback)

    def destroy(
        self,
        stack: StackRef,
        output_callback: Optional[Callable[[str], None]] = None,
    ) -> CommandResult:
        """Run pulumi destroy."""
        cmd = self._build_base_command(stack, "destroy")
        cmd.extend(["--yes", "--skip-preview"])
        return self._execute(cmd, stack, "destroy", output_callback)

    def _build_base_command(self, stack: StackRef, operation: str) -> List[str]:
        """Construct [binary, --cwd=dir, --non-interactive, operation, --stack=name, --color=x]."""
        InputSanitizer.sanitize_stack_name(stack.name)
        cmd = [
            self.pulumi_binary,
            f"--cwd={stack.workspace.work_dir}",
            "--non-interactive",
            operation,
            f"--stack={stack.name}",
            f"--color={self.color}",
        ]
        for arg in cmd:
            if not InputSanitizer.is_safe_command_arg(arg):
                raise SecurityError(f"Unsafe command argument: {arg}")
        return cmd

    def _execute(
        self,
        cmd: List[str],
        stack: StackRef,
        operation: str,
        output_callback: Optional[Callable[[str], None]] = None,
    ) -> CommandResult:
        """
        Execute a command with real-time output streaming.

        Uses shell=False and streams stdout/stderr line-by-line.
        """
        stdout_lines: List[str] = []
        stderr_lines: List[str] = []

        logger.debug(f"Running {operation} on stack {stack.name}")
        try:
            process = subprocess.Popen(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                shell=False,
                env=stack.workspace.env(),
                creationflags=subprocess_creation_flags(),
            )
        except OSError as e:
            logger.error(f"Failed to start {self.pulumi_binary}: {e}")
            return CommandResult(
                exit_code=-1,
                stdout="",
                stderr=str(e),
                success=False,
                command=operation,
            )

        def _read_stderr():
            assert process.stderr is not None
            for line in process.stderr:
                line = line.rstrip("\n")
                stderr_lines.append(line)
                if output_callback:
                    output_callback(line)

        stderr_thread = threading.Thread(target=_read_stderr, daemon=True)
        stderr_thread.start()

        assert process.stdout is not None
        for line in process.stdout:
            line = line.rstrip("\n")
            stdout_lines.append(line)
            if output_callback:
                output_callback(line)

        stderr_thread.join()
        exit_code = process.wait()

        logger.debug(f"{operation} on stack {stack.name} exited with {exit_code}")
        return CommandResult(
            exit_code=exit_code,
            stdout="\n".join(stdout_lines),
            stderr="\n".join(stderr_lines),
            success=exit_code == 0,
            command=operation,
        )
