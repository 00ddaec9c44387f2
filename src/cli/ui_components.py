"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from visual details.
- Error messages go through one place, so every command reports them the same way.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.text import Text


def print_error(console: Console, message: str) -> None:
    """Print `error: <message>`.

    Messages are escaped: they often contain `[...]` (argument lists) that Rich
    would otherwise read as markup.
    """

    console.print(f"[bold red]error:[/bold red] {escape(message)}", soft_wrap=True, highlight=False)


def print_usage_hint(console: Console, command_path: str) -> None:
    hint = Text.assemble("See '", (f"{command_path} --help", "bold"), "' for usage.")
    console.print(hint, soft_wrap=True, highlight=False)
