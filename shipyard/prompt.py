"""Interactive selection prompts.

Pipeline commands only prompt through the Prompter protocol so that tests
and non-interactive callers can answer questions without a terminal.
"""

from collections.abc import Sequence
from typing import Protocol

import click

from shipyard.exceptions import ShipyardError


class Prompter(Protocol):
    def select_one(self, message: str, help_text: str, options: Sequence[str]) -> str:
        """Ask the user to pick exactly one of ``options``."""
        ...

    def select_many(self, message: str, help_text: str, options: Sequence[str], finish_option: str) -> list[str]:
        """Ask the user to pick options one at a time, in order, until ``finish_option``."""
        ...


class ClickPrompter:
    """Prompter that prints numbered options and reads the number with click."""

    def select_one(self, message: str, help_text: str, options: Sequence[str]) -> str:
        if not options:
            raise ShipyardError("no options to select from")

        click.echo()
        click.echo(click.style(message, bold=True))
        if help_text:
            click.echo(click.style(help_text, dim=True))
        click.echo()
        choices = []
        for idx, option in enumerate(options, start=1):
            click.echo(f"  {idx}. {option}")
            choices.append(str(idx))
        click.echo()

        choice = click.prompt(
            "Select an option",
            type=click.Choice(choices),
            default="1",
            show_choices=False,
        )
        return options[int(choice) - 1]

    def select_many(self, message: str, help_text: str, options: Sequence[str], finish_option: str) -> list[str]:
        selected: list[str] = []
        remaining = list(options)
        while remaining:
            prompt = message if not selected else f"{message} (selected: {', '.join(selected)})"
            # The first pick is mandatory; afterwards the user may stop.
            choice = self.select_one(prompt, help_text, remaining if not selected else [finish_option, *remaining])
            if choice == finish_option and selected:
                break
            selected.append(choice)
            remaining.remove(choice)
        return selected
