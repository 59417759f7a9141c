"""Tests for the confirmation token and the click console prompter."""

from unittest.mock import patch

import pytest

from pocketrocket.prompts import ConsolePrompter, is_affirmative


@pytest.mark.parametrize("answer,expected", [
    ("y", True),
    ("Y", True),
    (" y ", True),
    ("yes", False),
    ("n", False),
    ("", False),
    (None, False),
])
def test_is_affirmative(answer, expected):
    assert is_affirmative(answer) is expected


class TestConsolePrompter:
    @patch("pocketrocket.prompts.console.click.prompt", return_value="  miam ")
    def test_ask_strips(self, mock_prompt):
        assert ConsolePrompter().ask("Enter the project name") == "miam"

    @patch("pocketrocket.prompts.console.click.prompt", return_value="")
    def test_ask_blank_uses_default(self, mock_prompt):
        assert ConsolePrompter().ask("Enter the environment", default="prod") == "prod"
        assert "[prod]" in mock_prompt.call_args[0][0]

    @patch("pocketrocket.prompts.console.click.prompt", return_value="")
    def test_ask_blank_without_default(self, mock_prompt):
        assert ConsolePrompter().ask("Specify s3 bucket prefix") == ""

    @patch("pocketrocket.prompts.console.click.prompt", return_value=2)
    def test_choose_by_number(self, mock_prompt):
        assert ConsolePrompter().choose("Select bucket", ["a", "b", "c"]) == "b"

    @patch("pocketrocket.prompts.console.click.prompt", return_value="Y")
    def test_confirm_case_insensitive(self, mock_prompt):
        assert ConsolePrompter().confirm("Deploy the operator?") is True

    @patch("pocketrocket.prompts.console.click.prompt", return_value="yes")
    def test_confirm_only_accepts_single_token(self, mock_prompt):
        assert ConsolePrompter().confirm("Deploy the operator?") is False

    def test_show_and_warn(self, capsys):
        prompter = ConsolePrompter()
        prompter.show("preview body")
        prompter.warn("Anomalies detected in deployment preview")
        out = capsys.readouterr().out
        assert "preview body" in out
        assert "Anomalies detected in deployment preview" in out
