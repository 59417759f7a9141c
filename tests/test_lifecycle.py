"""Tests for the stack lifecycle state machine.

Stacks and runner are recording stubs, so every test can check exactly
which engine calls happened and in what order.
"""

import pytest

from pocketrocket.core.lifecycle import Action, LifecycleController, LifecycleState
from pocketrocket.core.pulumi_runner import CommandResult
from pocketrocket.errors import (
    ApplyFailure,
    DestroyFailure,
    InvalidAction,
    OperationCancelled,
    PreviewFailure,
    ProviderFailure,
)

from conftest import FakeRunner, FakeStacks, ScriptedPrompter


def _controller(workspace, names=(), answers=(), results=None, fail_on=None):
    calls = []
    stacks = FakeStacks(names, calls=calls, fail_on=fail_on)
    runner = FakeRunner(calls=calls, results=results)
    prompter = ScriptedPrompter(answers)
    controller = LifecycleController(workspace, stacks, runner, prompter)
    return controller, runner, prompter, calls


class TestDiscover:
    def test_no_stacks_launches_without_action_prompt(self, workspace):
        controller, runner, prompter, _ = _controller(workspace, answers=["", "y"])

        assert controller.run() is LifecycleState.DONE
        assert not any("action" in question for question in prompter.asked)
        assert runner.count("up") == 1

    @pytest.mark.parametrize("answer,action", [
        ("l", Action.LAUNCH), ("Launch", Action.LAUNCH), ("LAUNCH", Action.LAUNCH),
        ("n", Action.NUKE), ("nuke", Action.NUKE), (" Nuke ", Action.NUKE),
    ])
    def test_action_aliases(self, workspace, answer, action):
        controller, _, _, _ = _controller(workspace, answers=[answer])
        assert controller.choose_action(["prod"]) is action

    def test_invalid_action_has_no_side_effects(self, workspace):
        controller, runner, _, calls = _controller(workspace, names=["prod"], answers=["deploy"])

        with pytest.raises(InvalidAction):
            controller.run()
        assert calls == [("list", None)]


class TestLaunch:
    def test_confirm_applies_once(self, workspace):
        controller, runner, prompter, calls = _controller(workspace, answers=["dev", "y"])

        assert controller.launch() is LifecycleState.DONE
        assert runner.count("up") == 1
        assert calls == [("upsert", "dev"), ("preview", "dev"), ("up", "dev")]

    def test_decline_never_applies(self, workspace):
        controller, runner, _, _ = _controller(workspace, answers=["dev", "n"])

        with pytest.raises(OperationCancelled):
            controller.launch()
        assert runner.count("up") == 0

    @pytest.mark.parametrize("answer", ["", "yes", "N", "ok", "yy"])
    def test_anything_but_y_declines(self, workspace, answer):
        controller, runner, _, _ = _controller(workspace, answers=["dev", answer])

        with pytest.raises(OperationCancelled):
            controller.launch()
        assert runner.count("up") == 0

    def test_uppercase_y_confirms(self, workspace):
        controller, runner, _, _ = _controller(workspace, answers=["dev", "Y"])
        controller.launch()
        assert runner.count("up") == 1

    def test_blank_environment_uses_default(self, workspace):
        controller, _, _, calls = _controller(workspace, answers=["", "y"])
        controller.launch()
        assert calls[0] == ("upsert", "prod")

    def test_preview_shown_verbatim(self, workspace):
        preview = CommandResult(0, "+ 3 to create\n  ~ 1 to update", "", True, "preview")
        controller, _, prompter, _ = _controller(
            workspace, answers=["dev", "y"], results={("preview", "dev"): preview}
        )
        controller.launch()

        assert "+ 3 to create\n  ~ 1 to update" in prompter.shown
        assert prompter.warnings == []

    def test_anomalies_warn_but_do_not_block(self, workspace):
        preview = CommandResult(0, "plan", "warning: deprecated", True, "preview")
        controller, runner, prompter, _ = _controller(
            workspace, answers=["dev", "y"], results={("preview", "dev"): preview}
        )
        controller.launch()

        assert prompter.warnings == ["Anomalies detected in deployment preview"]
        assert runner.count("up") == 1

    def test_preview_failure_stops_before_confirm(self, workspace):
        failed = CommandResult(255, "", "error: no credentials", False, "preview")
        controller, runner, prompter, _ = _controller(
            workspace, answers=["dev"], results={("preview", "dev"): failed}
        )

        with pytest.raises(PreviewFailure) as exc:
            controller.launch()
        assert "no credentials" in str(exc.value)
        assert runner.count("up") == 0
        assert len(prompter.asked) == 1

    def test_apply_failure(self, workspace):
        failed = CommandResult(1, "", "update failed", False, "up")
        controller, _, _, _ = _controller(
            workspace, answers=["dev", "y"], results={("up", "dev"): failed}
        )

        with pytest.raises(ApplyFailure):
            controller.launch()

    def test_transitions_recorded(self, workspace):
        controller, _, _, _ = _controller(workspace, answers=["dev", "y"])
        controller.launch()

        assert [state for _, state in controller.transitions] == [
            LifecycleState.DISCOVERED,
            LifecycleState.PREVIEWED,
            LifecycleState.CONFIRMED,
            LifecycleState.EXECUTING,
            LifecycleState.DONE,
        ]

    def test_decline_ends_cancelled(self, workspace):
        controller, _, _, _ = _controller(workspace, answers=["dev", "n"])
        with pytest.raises(OperationCancelled):
            controller.launch()

        assert controller.transitions[-1] == ("dev", LifecycleState.CANCELLED)

    def test_preview_always_precedes_mutation(self, workspace):
        controller, _, _, calls = _controller(workspace, answers=["dev", "y"])
        controller.launch()

        operations = [op for op, _ in calls]
        assert operations.index("preview") < operations.index("up")


class TestNuke:
    def test_destroys_every_stack_in_order(self, workspace):
        controller, runner, _, calls = _controller(
            workspace, names=["dev", "prod"], answers=["nuke", "y", "y"]
        )

        assert controller.run() is LifecycleState.DONE
        assert [c for c in calls if c[0] != "list"] == [
            ("select", "dev"), ("preview-destroy", "dev"), ("destroy", "dev"),
            ("select", "prod"), ("preview-destroy", "prod"), ("destroy", "prod"),
        ]

    def test_decline_halts_remaining_stacks(self, workspace):
        controller, runner, _, calls = _controller(
            workspace, names=["a", "b", "c"], answers=["n", "y", "n"]
        )

        with pytest.raises(OperationCancelled) as exc:
            controller.run()
        assert exc.value.stack == "b"
        destroyed = [name for op, name in calls if op == "destroy"]
        assert destroyed == ["a"]
        assert ("select", "c") not in calls

    def test_failure_halts_remaining_stacks(self, workspace):
        failed = CommandResult(1, "", "resource in use", False, "destroy")
        controller, _, _, calls = _controller(
            workspace, names=["a", "b", "c"], answers=["n", "y", "y", "y"],
            results={("destroy", "a"): failed},
        )

        with pytest.raises(DestroyFailure):
            controller.run()
        assert [name for op, name in calls if op == "destroy"] == ["a"]

    def test_select_failure_propagates(self, workspace):
        controller, runner, _, _ = _controller(
            workspace, names=["a", "b"], answers=["n"], fail_on={"select": "a"}
        )

        with pytest.raises(ProviderFailure):
            controller.run()
        assert runner.count("preview-destroy") == 0

    def test_destroy_confirm_is_destructive(self, workspace):
        controller, _, prompter, _ = _controller(workspace, names=["prod"], answers=["n", "y"])
        controller.run()

        message, destructive, _ = prompter.confirms[-1]
        assert message == "Destroy the stack 'prod'?"
        assert destructive is True

    def test_deploy_confirm_is_not_destructive(self, workspace):
        controller, _, prompter, _ = _controller(workspace, answers=["", "y"])
        controller.launch()

        assert prompter.confirms == [("Deploy the operator?", False, "preview of prod")]

    def test_confirm_receives_the_stack_preview(self, workspace):
        controller, _, prompter, _ = _controller(
            workspace, names=["a", "b"], answers=["n", "y", "y"]
        )
        controller.run()

        previews = [preview for _, _, preview in prompter.confirms]
        assert previews == ["preview-destroy of a", "preview-destroy of b"]

    def test_destroy_preview_failure(self, workspace):
        failed = CommandResult(1, "", "boom", False, "preview-destroy")
        controller, runner, _, _ = _controller(
            workspace, names=["prod"], answers=["n"], results={("preview-destroy", "prod"): failed}
        )

        with pytest.raises(PreviewFailure):
            controller.run()
        assert runner.count("destroy") == 0


class TestEndToEndScenarios:
    def test_empty_workspace_launch(self, workspace):
        controller, runner, prompter, _ = _controller(workspace, names=[], answers=["", "y"])

        assert controller.run() is LifecycleState.DONE
        assert runner.count("preview") == 1
        assert runner.count("up") == 1
        assert prompter.warnings == []

    def test_nuke_prod_declined(self, workspace):
        controller, runner, _, calls = _controller(workspace, names=["prod"], answers=["nuke", "n"])

        with pytest.raises(OperationCancelled):
            controller.run()
        assert ("preview-destroy", "prod") in calls
        assert runner.count("destroy") == 0
