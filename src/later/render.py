"""
Terminal rendering of to-do lists.

Output is styled with ``click.style``; ``click.echo`` strips the styling when
the output is not a terminal.
"""

from datetime import datetime
from typing import Iterator, Optional

import click

from later.models import Entry, Sublist, TemporalValue, Urgency

INDENT = "   "

URGENCY_COLORS = {
    Urgency.OVERDUE: "red",
    Urgency.DUE_SOON: "yellow",
    Urgency.UPCOMING: "green",
}

def date_tag(value: TemporalValue, now: Optional[datetime] = None) -> str:
    """Relative description in parentheses, colored by urgency."""
    return click.style(f"({value.describe(now)})", fg=URGENCY_COLORS[value.urgency(now)])

def _with_date(text: str, value: Optional[TemporalValue], now: Optional[datetime]) -> str:
    if value is None:
        return text
    return f"{text} {date_tag(value, now)}"

def entry_line(entry: Entry, now: Optional[datetime] = None) -> str:
    return _with_date(entry.title, entry.date, now)

def header_line(sublist: Sublist, now: Optional[datetime] = None) -> str:
    """One-line summary of a list, used when listing every named list."""
    return _with_date(f"{click.style('->', fg='blue')} {sublist.title}", sublist.date, now)

def iter_lines(sublist: Sublist, depth: int = 0, now: Optional[datetime] = None,
               indent: str = INDENT) -> Iterator[str]:
    """
    Yield the styled lines of ``sublist`` in pre-order.

    The first line is the list title; children follow, each prefixed by
    ``indent * depth`` and a marker: ``"<i>)"`` for entries and
    ``"<i>--->"`` for sublists, whose own lines continue one level deeper.
    """
    title = click.style(sublist.title, underline=True)
    yield _with_date(f"{indent if depth == 0 else ''}{title}", sublist.date, now)

    prefix = indent * depth
    for i, item in enumerate(sublist.items):
        if isinstance(item, Sublist):
            marker = click.style(f"{i}--->", fg="blue")
            nested = iter_lines(item, depth + 1, now, indent)
            yield f"{prefix}{marker} {next(nested)}"
            yield from nested
        else:
            marker = click.style(f"{i})", fg="cyan")
            yield f"{prefix}{marker} {entry_line(item, now)}"

def render(sublist: Sublist, now: Optional[datetime] = None, indent: str = INDENT) -> str:
    """Render a whole list as text ending in a single newline."""
    return "\n".join(iter_lines(sublist, now=now, indent=indent)) + "\n"
