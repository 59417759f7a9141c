"""Shared fixtures: a scripted prompter and recording engine/provider stubs.

Nothing here talks to a terminal, Pulumi or AWS.
"""

import os
from typing import List, Optional, Sequence

import pytest

from pocketrocket.config import Settings
from pocketrocket.core.locator import build_locator
from pocketrocket.core.pulumi_runner import CommandResult
from pocketrocket.core.resolver import Candidate
from pocketrocket.core.workspace import StackInfo, WorkspaceHandle
from pocketrocket.errors import ProviderFailure
from pocketrocket.prompts import Prompter, is_affirmative

# Qt dialogs render off screen in tests
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


class ScriptedPrompter(Prompter):
    """Answers prompts from a fixed script, recording everything asked and shown."""

    def __init__(self, answers: Sequence[str] = ()):
        self.answers = list(answers)
        self.asked: List[str] = []
        self.shown: List[str] = []
        self.warnings: List[str] = []
        self.confirms: List[tuple] = []

    def _next(self, message: str) -> str:
        self.asked.append(message)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {message}")
        return self.answers.pop(0)

    def ask(self, message: str, default: Optional[str] = None) -> str:
        answer = self._next(message)
        if not answer and default:
            return default
        return answer

    def choose(self, message: str, options: Sequence[str]) -> str:
        return self._next(message)

    def confirm(
        self, message: str, destructive: bool = False, preview: Optional[str] = None
    ) -> bool:
        self.confirms.append((message, destructive, preview))
        return is_affirmative(self._next(message))

    def show(self, text: str):
        self.shown.append(text)

    def warn(self, text: str):
        self.warnings.append(text)


class FakeStacks:
    """Stand-in for StackManager sharing a call log with FakeRunner."""

    def __init__(self, names: Sequence[str] = (), calls: Optional[list] = None, fail_on=None):
        self.names = list(names)
        self.calls = calls if calls is not None else []
        self.fail_on = fail_on or {}

    def list_stacks(self):
        self.calls.append(("list", None))
        return [StackInfo(name=name) for name in self.names]

    def select_stack(self, name):
        self.calls.append(("select", name))
        if self.fail_on.get("select") == name:
            raise ProviderFailure(f"load stack '{name}'")

    def upsert_stack(self, name):
        self.calls.append(("upsert", name))


class FakeRunner:
    """Stand-in for PulumiRunner; results can be overridden per operation and stack."""

    def __init__(self, calls: Optional[list] = None, results: Optional[dict] = None):
        self.calls = calls if calls is not None else []
        self.results = results or {}

    def _result(self, operation, stack):
        self.calls.append((operation, stack.name))
        default = CommandResult(0, f"{operation} of {stack.name}", "", True, operation)
        return self.results.get((operation, stack.name), default)

    def preview(self, stack, output_callback=None):
        return self._result("preview", stack)

    def preview_destroy(self, stack, output_callback=None):
        return self._result("preview-destroy", stack)

    def up(self, stack, output_callback=None):
        return self._result("up", stack)

    def destroy(self, stack, output_callback=None):
        return self._result("destroy", stack)

    def count(self, operation):
        return sum(1 for op, _ in self.calls if op == operation)


class FakeProvider:
    """Records provider calls; returns canned buckets and keys."""

    def __init__(self, buckets=(), keys=(), location=None, key_id="key-1234"):
        self.buckets = [Candidate(identifier=b) for b in buckets]
        self.keys = [k if isinstance(k, Candidate) else Candidate(identifier=k) for k in keys]
        self.location = location
        self.key_id = key_id
        self.calls: List[tuple] = []

    def list_storage(self):
        self.calls.append(("list_storage",))
        return list(self.buckets)

    def create_storage(self, name, location=None):
        self.calls.append(("create_storage", name, location))
        return self.location if self.location is not None else f"/{name}"

    def list_keys(self):
        self.calls.append(("list_keys",))
        return list(self.keys)

    def create_key(self, name, description=""):
        self.calls.append(("create_key", name, description))
        return self.key_id


@pytest.fixture
def settings(tmp_path):
    """Settings backed by an empty temp config file location and a clean environment."""
    return Settings(config_file=str(tmp_path / "settings.json"), environ={})


@pytest.fixture
def workspace(tmp_path):
    return WorkspaceHandle(
        project="miam",
        locator=build_locator("state-bucket", "infra", "key-1234"),
        work_dir=str(tmp_path),
    )
