"""
later - a hierarchical to-do list manager.

Lists hold entries and nested sublists addressed by comma-separated index
paths such as ``1,3,0``:
List → Sublist → ... → Entry
"""

from .version import VERSION
from .models import (
    DEFAULT_LIST,
    Urgency,
    DateOnly,
    DateTime,
    Entry,
    Sublist,
    IndexPath,
    ListCollection,
    from_parts,
)
from .data import DataCore

__version__ = VERSION

__all__ = [
    "VERSION",
    "DEFAULT_LIST",
    "Urgency",
    "DateOnly",
    "DateTime",
    "Entry",
    "Sublist",
    "IndexPath",
    "ListCollection",
    "from_parts",
    "DataCore",
]
