"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich tables and key/value
lines) or machines (--json). Record lists become a table whose columns are
the scalar fields of the first records; nested values are shown as
compact JSON.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.table import Table

from abstract_bridge.output.console import (
    create_console,
    get_output,
    print_hint,
    print_status,
    print_warning,
    style_for_field,
)

if TYPE_CHECKING:
    from rich.console import Console

    from abstract_bridge.services.result import ServiceResult

_MAX_COLUMNS = 6


def _cell(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return _json.dumps(value, separators=(",", ":"))
    return "" if value is None else str(value)


def _columns(items: list[Any]) -> list[str]:
    columns: list[str] = []
    for item in items[:10]:
        if not isinstance(item, dict):
            continue
        for key, value in item.items():
            if key not in columns and not isinstance(value, (dict, list)):
                columns.append(key)
    return columns[:_MAX_COLUMNS]


def _render_items(console: Console, items: list[Any]) -> None:
    columns = _columns(items)
    if not columns:
        for item in items:
            console.print(f"  {escape(_cell(item))}")
        return
    table = Table(show_edge=False, header_style="bridge.key")
    for column in columns:
        table.add_column(column, style=style_for_field(column))
    for item in items:
        row = item if isinstance(item, dict) else {}
        table.add_row(*(escape(_cell(row.get(column))) for column in columns))
    console.print(table)


def _render_data(console: Console, data: dict[str, Any]) -> None:
    items = data.get("items")
    if isinstance(items, list):
        _render_items(console, items)
        console.print(f"[bridge.key]count:[/] {data.get('count', len(items))}")
        return
    for key, value in data.items():
        text = escape(_cell(value))
        style = style_for_field(key)
        if style:
            text = f"[{style}]{text}[/]"
        console.print(f"  [bridge.key]{escape(key)}:[/] {text}")


def format_result(
    result: ServiceResult,
    *,
    json_output: bool = False,
    no_color: bool = False,
) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        json_output: If True, return JSON; otherwise return human-readable text.
        no_color: Strip ANSI styling from human output.
    """
    if json_output:
        return result.model_dump_json(indent=2)

    console = create_console(no_color=no_color)
    if result.ok:
        print_status(console, result.op, ok=True)
        if result.data:
            _render_data(console, result.data)
        for warning in result.warnings:
            print_warning(console, warning)
    elif result.error is None:
        print_status(console, result.op, ok=False, message="Unknown error")
    else:
        error = result.error
        print_status(console, result.op, ok=False, code=error.code, message=error.message)
        hint = error.detail.get("hint")
        if hint:
            print_hint(console, str(hint))
    return get_output(console).rstrip("\n")
