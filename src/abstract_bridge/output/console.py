"""Rich Console factory, theme, and line helpers for abstract-bridge output.

Consoles render to a StringIO buffer so ``format_result()`` can return a
string. In non-TTY environments (tests, pipes) Rich drops color codes on
its own. Status, warning, and hint lines are printed only through the
helpers here so human output keeps one shape across every command.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

BRIDGE_THEME = Theme(
    {
        "bridge.ok": "bold green",
        "bridge.error": "bold red",
        "bridge.error.config": "bold magenta",
        "bridge.error.deadline": "bold yellow",
        "bridge.warning": "bold yellow",
        "bridge.op": "bold cyan",
        "bridge.key": "dim",
        "bridge.id": "bold blue",
        "bridge.hint": "italic",
    }
)

# Error codes are exception class names (see ServiceError.code).
_ERROR_STYLES: dict[str, str] = {
    "ConfigurationError": "bridge.error.config",
    "ExecutableNotFound": "bridge.error.config",
    "InvocationTimeoutError": "bridge.error.deadline",
    "InvocationCancelledError": "bridge.error.deadline",
}

_ID_FIELDS = frozenset({"id", "sha"})


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=BRIDGE_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_error(code: str) -> str:
    """Return the Rich style for an error code, ``bridge.error`` by default."""
    return _ERROR_STYLES.get(code, "bridge.error")


def style_for_field(name: str) -> str:
    """Identifier fields (ids and shas) are highlighted; others are plain."""
    if name in _ID_FIELDS or name.endswith(("Id", "Sha")):
        return "bridge.id"
    return ""


def print_status(
    console: Console,
    op: str,
    *,
    ok: bool,
    code: str = "",
    message: str = "",
) -> None:
    """``OK: <op>`` or ``ERROR: <op> - <message>``, styled by error code."""
    if ok:
        console.print(f"[bridge.ok]OK:[/] [bridge.op]{escape(op)}[/]")
        return
    style = style_for_error(code)
    console.print(f"[{style}]ERROR:[/] [bridge.op]{escape(op)}[/] - {escape(message)}")


def print_warning(console: Console, warning: str) -> None:
    console.print(f"[bridge.warning]WARNING:[/] {escape(warning)}")


def print_hint(console: Console, hint: str) -> None:
    console.print(f"[bridge.hint]hint: {escape(hint)}[/]")
