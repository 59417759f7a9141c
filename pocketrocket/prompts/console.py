"""
Terminal prompt provider built on click.
"""

from typing import Optional, Sequence

import click

from .base import Prompter, is_affirmative


class ConsolePrompter(Prompter):
    """Renders prompts on the terminal the way the bootstrap wizard always has."""

    def ask(self, message: str, default: Optional[str] = None) -> str:
        suffix = f" [{default}]" if default else ""
        answer = click.prompt(
            f"🔹 {message}{suffix}",
            default="",
            show_default=False,
            prompt_suffix=" ",
        )
        answer = answer.strip()
        if not answer and default:
            return default
        return answer

    def choose(self, message: str, options: Sequence[str]) -> str:
        click.echo(f"🔹 {message}:")
        for index, option in enumerate(options, start=1):
            click.echo(f"   {index}. {option}")
        picked = click.prompt(
            "   Enter a number",
            type=click.IntRange(1, len(options)),
            prompt_suffix=" ",
        )
        return options[picked - 1]

    def confirm(
        self, message: str, destructive: bool = False, preview: Optional[str] = None
    ) -> bool:
        text = f"🔹 {message} [y/N]"
        if destructive:
            text = click.style(text, fg="red", bold=True)
        answer = click.prompt(text, default="", show_default=False, prompt_suffix=" ")
        return is_affirmative(answer)

    def show(self, text: str):
        click.echo(text)

    def warn(self, text: str):
        click.secho(f"⚠️ {text}", fg="yellow")
