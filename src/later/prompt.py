"""
Interactive prompts for item details and confirmations.

Only the command line layer calls into this module; the tree operations
take the returned values as plain input.
"""

from typing import Optional, Tuple, Union

import click

from later.models import Entry, Sublist, TemporalValue, from_parts, parse_date, parse_time
from later.recovery import ParseError

# typed at a date or time prompt to drop the current value
CLEAR = "-"

class _PartType(click.ParamType):
    """Blank or "-" means no value; anything else must parse."""

    def __init__(self, parser):
        self.parser = parser

    def convert(self, value, param, ctx):
        if value is None or not isinstance(value, str):
            return value
        if value.strip() in ("", CLEAR):
            return None
        try:
            return self.parser(value)
        except ParseError as e:
            self.fail(str(e), param, ctx)

class TitleType(click.ParamType):
    name = "title"

    def convert(self, value, param, ctx):
        if not value.strip():
            self.fail("Please give the new item a title.", param, ctx)
        return value

class DateType(_PartType):
    name = "date"

    def __init__(self):
        super().__init__(parse_date)

class TimeType(_PartType):
    name = "time"

    def __init__(self):
        super().__init__(parse_time)

def prompt_for_info(existing: Union[Entry, Sublist, None] = None) -> Tuple[str, Optional[TemporalValue]]:
    """
    Ask for a title, a date and a time.

    The title is asked for until it is non-empty. Date and time are asked for
    until they parse or are left blank. When editing, the current values are
    the defaults and "-" clears them.
    """
    current_title = existing.title if existing else None
    current_date = existing.date if existing else None

    title = click.prompt("title", default=current_title, type=TitleType())

    date_default = current_date.date_string() if current_date else ""
    day = click.prompt("date (?)", default=date_default, show_default=bool(date_default),
                       type=DateType())

    time_default = current_date.time_string() if current_date else ""
    clock = click.prompt("time (?)", default=time_default, show_default=bool(time_default),
                         type=TimeType())

    return title, from_parts(day, clock)

def confirm(question: str, default: bool) -> bool:
    """Ask a yes/no question. Only "y" (any case) is yes; empty input takes the default."""
    choices = "Y/n" if default else "y/N"
    answer = click.prompt(f"{question} ({choices})", default="", show_default=False)
    if not answer:
        return default
    return answer.strip().lower() == "y"
