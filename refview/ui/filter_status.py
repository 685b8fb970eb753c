"""Status bar rendering of filter compile errors."""

from __future__ import annotations

from collections.abc import Iterable

from rich.markup import escape as escape_markup

from refview.filtering.errors import FilterError


def format_filter_errors(errors: Iterable[FilterError]) -> str:
    """Render errors as Rich markup, one ``line:col: message`` per line.

    Messages quote user input, so they are escaped before markup is added.
    """
    lines = []
    for error in errors:
        lines.append(f"[bold $error]{error.pos}[/] {escape_markup(error.message)}")
    return "\n".join(lines)
