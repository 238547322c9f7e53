from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Annotated, Dict, List, Literal, Optional, Tuple, Union
import re

from later.recovery import DuplicateNameError, NotFoundError, ParseError, ReservedNameError

DEFAULT_LIST = "to-do"

DATE_FORMAT = "%Y/%m/%d"
TIME_FORMAT = "%H:%M"

RELATIVE_DAYS = {-1: "Yesterday", 0: "Today", 1: "Tomorrow"}

class Urgency(Enum):
    OVERDUE = "overdue"
    DUE_SOON = "due_soon"
    UPCOMING = "upcoming"

def _local_now(now: Optional[datetime] = None) -> datetime:
    """Aware local datetime; a naive value is taken as local wall time."""
    return (now or datetime.now()).astimezone()

def parse_date(text: str) -> date:
    """Parse a yyyy/mm/dd date."""
    try:
        return datetime.strptime(text.strip(), DATE_FORMAT).date()
    except ValueError as e:
        raise ParseError(f"Error parsing date '{text}' (format: yyyy/mm/dd)") from e

def parse_time(text: str) -> time:
    """Parse an hh:mm (24h) time."""
    try:
        return datetime.strptime(text.strip(), TIME_FORMAT).time()
    except ValueError as e:
        raise ParseError(f"Error parsing time '{text}' (format: hh:mm)") from e

class TemporalBase(BaseModel):
    """Shared behaviour of the date-only and date-with-time values."""

    model_config = ConfigDict(frozen=True)

    @property
    def day(self) -> date:
        raise NotImplementedError

    @property
    def clock(self) -> Optional[time]:
        return None

    def date_string(self) -> str:
        return self.day.strftime(DATE_FORMAT)

    def time_string(self) -> str:
        if self.clock is None:
            return ""
        return self.clock.strftime(TIME_FORMAT)

    def remaining(self, now: Optional[datetime] = None) -> timedelta:
        raise NotImplementedError

    def urgency(self, now: Optional[datetime] = None) -> Urgency:
        """Classify how pressing the value is relative to now."""
        remaining = self.remaining(now)
        if remaining < timedelta(0):
            return Urgency.OVERDUE
        if remaining < timedelta(days=1):
            return Urgency.DUE_SOON
        return Urgency.UPCOMING

    def describe(self, now: Optional[datetime] = None) -> str:
        """
        Human label relative to now, e.g. "Tomorrow", "upcoming Friday, 02:30pm"
        or "March 03; in 2 weeks".
        """
        today = _local_now(now).date()
        day = self.day
        days = (day - today).days

        suffix = ""
        if days in RELATIVE_DAYS:
            label = RELATIVE_DAYS[days]
        elif 1 <= days <= 7:
            label = f"upcoming {day:%A}"
        elif -7 <= days <= -1:
            label = f"recent {day:%A}"
        else:
            if day.year == today.year:
                label = day.strftime("%B %d")
            else:
                label = day.strftime("%B %d %Y")
            if abs(days) >= 14:
                amount, unit = abs(days) // 7, "weeks"
            else:
                amount, unit = abs(days), "days"
            suffix = f"; {amount} {unit} ago" if days < 0 else f"; in {amount} {unit}"

        if self.clock is not None:
            label = f"{label}, {self.clock.strftime('%I:%M%p').lower()}"
        return f"{label}{suffix}"

    def sort_key(self) -> Tuple[date, bool, time]:
        # date-only sorts before any time on the same day
        return (self.day, self.clock is not None, self.clock or time.min)

UNDATED_SORT_KEY = (date.max, False, time.min)

class DateOnly(TemporalBase):
    kind: Literal["date"] = "date"
    value: date = Field(description="Calendar date")

    @property
    def day(self) -> date:
        return self.value

    def remaining(self, now: Optional[datetime] = None) -> timedelta:
        return self.value - _local_now(now).date()

class DateTime(TemporalBase):
    kind: Literal["datetime"] = "datetime"
    value: datetime = Field(description="Local date and time of day")

    @field_validator('value')
    @classmethod
    def ensure_local_zone(cls, v):
        # naive values are local wall time
        if v.tzinfo is None:
            return v.astimezone()
        return v

    @property
    def local(self) -> datetime:
        return self.value.astimezone()

    @property
    def day(self) -> date:
        return self.local.date()

    @property
    def clock(self) -> Optional[time]:
        return self.local.time()

    def remaining(self, now: Optional[datetime] = None) -> timedelta:
        return self.value - _local_now(now)

TemporalValue = Annotated[Union[DateOnly, DateTime], Field(discriminator="kind")]

def from_parts(day: Optional[date] = None, clock: Optional[time] = None) -> Optional[TemporalValue]:
    """Build a temporal value from an optional date and an optional time of day."""
    if day is None and clock is None:
        return None
    if clock is None:
        return DateOnly(value=day)
    if day is None:
        day = date.today()
    return DateTime(value=datetime.combine(day, clock).astimezone())

class IndexPath(tuple):
    """Immutable sequence of non-negative positions, one per nesting level."""

    PATH_PATTERN = re.compile(r'^\d+(?:,\d+)*$')

    def __new__(cls, segments=()):
        segments = tuple(segments)
        for segment in segments:
            if isinstance(segment, bool) or not isinstance(segment, int) or segment < 0:
                raise ParseError(f"Invalid index segment: {segment!r}")
        return super().__new__(cls, segments)

    @classmethod
    def parse(cls, text: str) -> 'IndexPath':
        """Parse the comma-separated form, e.g. "1,3,0"."""
        compact = "".join(text.split())
        if not cls.PATH_PATTERN.match(compact):
            raise ParseError(f"Invalid index '{text}' (expected comma-separated integers, e.g. 1,3,0)")
        return cls(int(part) for part in compact.split(','))

    @classmethod
    def validate_path(cls, text: str) -> bool:
        """Validate if a path string is properly formatted."""
        try:
            cls.parse(text)
            return True
        except ParseError:
            return False

    def __str__(self) -> str:
        return ",".join(str(segment) for segment in self)

    def __repr__(self) -> str:
        return f"IndexPath({str(self)!r})"

class Entry(BaseModel):
    """A leaf to-do item."""

    model_config = ConfigDict(validate_assignment=True)

    kind: Literal["entry"] = "entry"
    title: str = Field(min_length=1, description="What needs doing")
    date: Optional[TemporalValue] = Field(default=None, description="When it is due")

    def promote(self) -> 'Sublist':
        """Turn this entry into an empty sublist with the same title and date."""
        return Sublist(title=self.title, date=self.date)

class Sublist(BaseModel):
    """A to-do item with ordered children; also the root of every named list."""

    model_config = ConfigDict(validate_assignment=True)

    kind: Literal["list"] = "list"
    title: str = Field(min_length=1, description="Name of the list")
    date: Optional[TemporalValue] = Field(default=None, description="When the list is due")
    items: List['Node'] = Field(
        default_factory=list,
        description="Children in display order"
    )

    def demote(self) -> Entry:
        """Turn this sublist back into an entry with the same title and date."""
        return Entry(title=self.title, date=self.date)

Node = Annotated[Union[Entry, Sublist], Field(discriminator="kind")]

Sublist.model_rebuild()

def default_list(now: Optional[datetime] = None) -> Sublist:
    """The list created when no default list exists yet."""
    return Sublist(
        title=DEFAULT_LIST,
        items=[Entry(title="Hello, world!", date=DateTime(value=_local_now(now)))]
    )

class ListCollection(RootModel[Dict[str, Sublist]]):
    """Every named to-do list, keyed by its unique name."""

    root: Dict[str, Sublist] = Field(default_factory=dict)

    def __contains__(self, name: str) -> bool:
        return name in self.root

    def __len__(self) -> int:
        return len(self.root)

    def ensure_default(self, now: Optional[datetime] = None) -> bool:
        """Create the default list if it is missing. Returns True if it was created."""
        if DEFAULT_LIST in self.root:
            return False
        self.root[DEFAULT_LIST] = default_list(now)
        return True

    def get(self, name: str) -> Sublist:
        try:
            return self.root[name]
        except KeyError:
            raise NotFoundError(f"List '{name}' not found!") from None

    def add(self, name: str, date: Optional[TemporalValue] = None) -> Sublist:
        if name in self.root:
            raise DuplicateNameError(f"The list '{name}' already exists")
        new_list = Sublist(title=name, date=date)
        self.root[name] = new_list
        return new_list

    def check_removable(self, name: str) -> None:
        if name == DEFAULT_LIST:
            raise ReservedNameError("You cannot remove the default to-do list!")
        if name not in self.root:
            raise NotFoundError(f"The to-do list '{name}' does not currently exist")

    def remove(self, name: str) -> Sublist:
        self.check_removable(name)
        return self.root.pop(name)

    def edit(self, name: str, title: str, date: Optional[TemporalValue] = None) -> Sublist:
        """Rename and/or redate a list. The default list keeps its name."""
        if name not in self.root:
            raise NotFoundError(f"The to-do list '{name}' does not currently exist")
        if title != name:
            if name == DEFAULT_LIST:
                raise ReservedNameError("You cannot rename the default to-do list!")
            if title in self.root:
                raise DuplicateNameError(f"The list '{title}' already exists")

        edited = self.root[name]
        edited.title = title
        edited.date = date
        if title != name:
            del self.root[name]
            self.root[title] = edited
        return edited

    def named_lists(self) -> List[Sublist]:
        """Every list except the default one, sorted by name."""
        return [self.root[name] for name in sorted(self.root) if name != DEFAULT_LIST]
