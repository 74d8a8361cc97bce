"""Injectable interactive input.

Workflows never call click.prompt directly; they receive a Prompter so that
tests can drive them with scripted answers.
"""

from typing import Protocol

import click


class Prompter(Protocol):
    def ask(self, text: str, default: str | None = None, hide_input: bool = False) -> str: ...

    def confirm(self, text: str, default: bool = False) -> bool: ...


class ClickPrompter:
    """Prompter backed by the terminal.

    Answers are returned verbatim. Confirmation phrases are compared exactly,
    so callers strip only the answers that are data.
    """

    def ask(self, text: str, default: str | None = None, hide_input: bool = False) -> str:
        value = click.prompt(
            f"  {text}",
            default=default if default is not None else "",
            show_default=default is not None and default != "",
            hide_input=hide_input,
        )
        return str(value)

    def confirm(self, text: str, default: bool = False) -> bool:
        return click.confirm(f"  {text}", default=default)
