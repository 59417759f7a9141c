"""
Stack lifecycle state machine.

Every mutating call is preceded by a preview and an explicit
confirmation. A decline short-circuits before anything is changed.
"""

import logging
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple, Type

from ..errors import (
    ApplyFailure,
    DestroyFailure,
    EngineFailure,
    InvalidAction,
    OperationCancelled,
    PreviewFailure,
)
from ..prompts import Prompter
from .pulumi_runner import CommandResult, PulumiRunner
from .workspace import StackManager, StackRef, WorkspaceHandle

logger = logging.getLogger(__name__)


class Action(Enum):
    LAUNCH = "launch"
    NUKE = "nuke"


# Accepted answers to the action prompt (lower-cased)
ACTION_ALIASES = {
    "l": Action.LAUNCH,
    "launch": Action.LAUNCH,
    "n": Action.NUKE,
    "nuke": Action.NUKE,
}


class LifecycleState(Enum):
    DISCOVERED = "discovered"
    PREVIEWED = "previewed"
    CONFIRMED = "confirmed"
    EXECUTING = "executing"
    DONE = "done"
    CANCELLED = "cancelled"


class LifecycleController:
    """
    Drives launch and nuke operations for the stacks of one workspace.

    Transitions are recorded in ``transitions`` as (stack name, state).
    """

    def __init__(
        self,
        workspace: WorkspaceHandle,
        stacks: StackManager,
        runner: PulumiRunner,
        prompter: Prompter,
        default_stack: str = "prod",
    ):
        self.workspace = workspace
        self.stacks = stacks
        self.runner = runner
        self.prompter = prompter
        self.default_stack = default_stack
        self.transitions: List[Tuple[str, LifecycleState]] = []

    def run(self) -> LifecycleState:
        """Discover stacks, pick an action and carry it out."""
        names = self.discover()
        action = self.choose_action(names)
        if action is Action.LAUNCH:
            return self.launch()
        return self.nuke(names)

    def discover(self) -> List[str]:
        """Return the names of all stacks known to the workspace."""
        names = [stack.name for stack in self.stacks.list_stacks()]
        logger.info(f"Discovered {len(names)} stack(s): {', '.join(names) or '-'}")
        return names

    def choose_action(self, names: Sequence[str]) -> Action:
        """
        Pick launch or nuke.

        With nothing deployed there is nothing to nuke, so launch is
        chosen without asking.

        Raises:
            InvalidAction: If the answer is not a known action
        """
        if not names:
            logger.info("No stacks found, launching")
            return Action.LAUNCH

        answer = self.prompter.ask("Enter action: [Launch/Nuke]")
        action = ACTION_ALIASES.get(answer.strip().lower())
        if action is None:
            raise InvalidAction(answer)
        return action

    def launch(self, name: Optional[str] = None) -> LifecycleState:
        """
        Deploy the operator stack.

        Raises:
            ProviderFailure: If the stack cannot be constructed
            PreviewFailure: If the dry run fails
            OperationCancelled: If the operator declines
            ApplyFailure: If the update fails
        """
        if name is None:
            name = self.prompter.ask("Enter the environment", default=self.default_stack)
            name = name or self.default_stack
        stack = StackRef(name=name, workspace=self.workspace)
        self._transition(stack, LifecycleState.DISCOVERED)

        self.stacks.upsert_stack(stack.name)

        self.prompter.show("🔸 Loading deployment preview")
        preview = self.runner.preview(stack)
        self._gate(stack, preview, "deployment", "Deploy the operator?", destructive=False)

        self._execute(stack, self.runner.up, ApplyFailure)
        return LifecycleState.DONE

    def nuke(self, names: Sequence[str]) -> LifecycleState:
        """
        Destroy every given stack in order.

        Stops at the first decline or failure; later stacks are left
        untouched.
        """
        for name in names:
            self.nuke_stack(name)
        return LifecycleState.DONE

    def nuke_stack(self, name: str) -> LifecycleState:
        """
        Destroy a single stack.

        Raises:
            ProviderFailure: If the stack cannot be loaded
            PreviewFailure: If the destroy dry run fails
            OperationCancelled: If the operator declines
            DestroyFailure: If the destroy fails
        """
        stack = StackRef(name=name, workspace=self.workspace)
        self._transition(stack, LifecycleState.DISCOVERED)

        self.stacks.select_stack(stack.name)

        self.prompter.show("🔸 Loading destruction preview")
        preview = self.runner.preview_destroy(stack)
        self._gate(stack, preview, "destruction", f"Destroy the stack '{name}'?", destructive=True)

        self._execute(stack, self.runner.destroy, DestroyFailure)
        return LifecycleState.DONE

    def _gate(
        self,
        stack: StackRef,
        preview: CommandResult,
        noun: str,
        question: str,
        destructive: bool,
    ):
        """Show the preview and require an explicit yes."""
        if not preview.success:
            raise PreviewFailure(stack.name, preview.stderr)
        self._transition(stack, LifecycleState.PREVIEWED)

        self.prompter.show("")
        self.prompter.show(preview.stdout)
        if preview.stderr:
            self.prompter.show("")
            self.prompter.warn(f"Anomalies detected in {noun} preview")
        self.prompter.show("")

        if not self.prompter.confirm(question, destructive=destructive, preview=preview.stdout):
            self._transition(stack, LifecycleState.CANCELLED)
            raise OperationCancelled(stack.name)
        self._transition(stack, LifecycleState.CONFIRMED)

    def _execute(
        self,
        stack: StackRef,
        operation: Callable[..., CommandResult],
        failure: Type[EngineFailure],
    ):
        self._transition(stack, LifecycleState.EXECUTING)
        result = operation(stack, output_callback=self.prompter.show)
        if not result.success:
            raise failure(stack.name, result.stderr)
        self._transition(stack, LifecycleState.DONE)

    def _transition(self, stack: StackRef, state: LifecycleState):
        logger.debug(f"Stack {stack.name}: {state.value}")
        self.transitions.append((stack.name, state))
