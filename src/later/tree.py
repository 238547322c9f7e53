"""
Path addressed operations on a to-do tree.

A path is a sequence of child positions, one per nesting level. Every
function walks it with an explicit ``depth`` into the same immutable path,
so the caller's path is never consumed.
"""

from typing import Optional, Sequence

from later.models import Node, Sublist, TemporalValue, UNDATED_SORT_KEY
from later.recovery import MoveFailedError, PathIndexError
from later.logs import get_logger

log = get_logger("tree")

def _child(parent: Sublist, i: int) -> Node:
    if i >= len(parent.items):
        raise PathIndexError(PathIndexError.TOO_BIG)
    return parent.items[i]

def _promote(parent: Sublist, i: int) -> Sublist:
    promoted = parent.items[i].promote()
    parent.items[i] = promoted
    log.debug(f"Promoted entry '{promoted.title}' to a sublist")
    return promoted

def _demote(parent: Sublist, i: int) -> None:
    demoted = parent.items[i].demote()
    parent.items[i] = demoted
    log.debug(f"Demoted empty sublist '{demoted.title}' to an entry")

def _require_path(path: Sequence[int]) -> None:
    if not path:
        raise PathIndexError("empty index")

def add_item(parent: Sublist, item: Node, path: Sequence[int] = (), depth: int = 0) -> None:
    """
    Append ``item`` to the level addressed by ``path``.

    Every segment descends; an entry reached by the last segment is promoted
    to a sublist so the item can be appended into it.
    """
    if depth == len(path):
        parent.items.append(item)
        return

    i = path[depth]
    child = _child(parent, i)
    if isinstance(child, Sublist):
        add_item(child, item, path, depth + 1)
    elif depth == len(path) - 1:
        add_item(_promote(parent, i), item, path, depth + 1)
    else:
        raise PathIndexError(PathIndexError.NON_LIST)

def insert_item(parent: Sublist, item: Node, path: Sequence[int], depth: int = 0) -> None:
    """
    Insert ``item`` so that it ends up at ``path``.

    The last segment is a position in ``0..len(children)``; the segments
    before it descend, promoting an entry found directly above the position.
    """
    _require_path(path)
    i = path[depth]

    if depth == len(path) - 1:
        if i > len(parent.items):
            raise PathIndexError(PathIndexError.TOO_BIG)
        parent.items.insert(i, item)
        return

    child = _child(parent, i)
    if isinstance(child, Sublist):
        insert_item(child, item, path, depth + 1)
    elif depth == len(path) - 2:
        # a promoted entry is empty, so only position 0 exists inside it
        if path[depth + 1] > 0:
            raise PathIndexError(PathIndexError.TOO_BIG)
        insert_item(_promote(parent, i), item, path, depth + 1)
    else:
        raise PathIndexError(PathIndexError.NON_LIST)

def remove_item(parent: Sublist, path: Sequence[int], depth: int = 0) -> Node:
    """
    Remove and return the node at ``path``.

    A sublist left without children by the removal is demoted to an entry.
    """
    _require_path(path)
    i = path[depth]
    child = _child(parent, i)

    if depth == len(path) - 1:
        return parent.items.pop(i)

    if not isinstance(child, Sublist):
        raise PathIndexError(PathIndexError.NON_LIST)

    removed = remove_item(child, path, depth + 1)
    if not child.items:
        _demote(parent, i)
    return removed

def get_item(parent: Sublist, path: Sequence[int]) -> Node:
    """Return the node at ``path`` without changing the tree."""
    _require_path(path)
    node = parent
    for i in path:
        if not isinstance(node, Sublist):
            raise PathIndexError(PathIndexError.NON_LIST)
        node = _child(node, i)
    return node

def edit_item(parent: Sublist, path: Sequence[int], title: str, date: Optional[TemporalValue]) -> Node:
    """Replace the title and date of the node at ``path``."""
    node = get_item(parent, path)
    node.title = title
    node.date = date
    return node

def move_item(parent: Sublist, from_path: Sequence[int], to_path: Sequence[int]) -> Node:
    """
    Move the node at ``from_path`` to ``to_path``.

    ``to_path`` addresses the tree as it is after the removal. If the item
    cannot be inserted there it is put back where it came from and
    MoveFailedError is raised.
    """
    item = remove_item(parent, from_path)
    try:
        insert_item(parent, item, to_path)
    except PathIndexError as e:
        insert_item(parent, item, from_path)
        log.debug(f"Move to {list(to_path)} failed, restored item at {list(from_path)}")
        raise MoveFailedError(f"Cannot move item '{item.title}': {e}") from e
    log.debug(f"Moved '{item.title}' from {list(from_path)} to {list(to_path)}")
    return item

def sort_key(node: Node):
    if node.date is None:
        return UNDATED_SORT_KEY
    return node.date.sort_key()

def sort_items(parent: Sublist) -> None:
    """Sort every level by date, nested levels first. Undated items go last."""
    for child in parent.items:
        if isinstance(child, Sublist):
            sort_items(child)
    parent.items.sort(key=sort_key)
