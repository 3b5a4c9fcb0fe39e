"""Rich Console factory and theme for snipvault output.

Consoles render into a StringIO buffer so every renderer returns a string.
Rich drops color codes on its own when stdout is not a terminal.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

SNIP_THEME = Theme(
    {
        "snip.ok": "bold green",
        "snip.error": "bold red",
        "snip.warning": "bold yellow",
        "snip.op": "bold cyan",
        "snip.key": "dim",
        "snip.id": "bold blue",
        "snip.path": "dim",
        "snip.title": "bold",
        "snip.category": "magenta",
        "snip.favorite": "yellow",
        "snip.muted": "dim italic",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console writing to an in-memory buffer."""
    return Console(
        file=StringIO(),
        theme=SNIP_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
