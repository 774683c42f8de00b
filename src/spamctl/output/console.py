"""Rich Console factory and theme for spamctl output.

Consoles render into a StringIO buffer so renderers keep the
``format_result() -> str`` contract.  Outside a terminal (tests, pipes)
Rich drops color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

SPAM_THEME = Theme(
    {
        "spam.ok": "bold green",
        "spam.error": "bold red",
        "spam.warning": "bold yellow",
        "spam.op": "bold cyan",
        "spam.key": "dim",
        "spam.name": "bold",
        "spam.id": "bold blue",
        "spam.status.up-to-date": "green",
        "spam.status.outdated": "yellow",
        "spam.status.not-installed": "red",
        "spam.status.obsolete": "magenta",
        "spam.status.unknown": "dim",
        "spam.status.not-set": "dim",
        "spam.change.added": "green",
        "spam.change.removed": "red",
        "spam.change.unchanged": "dim",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=SPAM_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str) -> str:
    return f"spam.status.{status}" if status else ""


def style_for_change(change: str) -> str:
    return f"spam.change.{change}" if change else ""
