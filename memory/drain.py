"""Free-function entry points for draining a sequence at sorted positions."""

from __future__ import annotations
from contextlib import contextmanager
from typing import Iterable, Iterator

from control.window import ReentrantDrainError
from memory.buffer import ListTarget
from memory.compactor import SortedDrainMixin

# ids of plain lists with a drain in progress; each call builds a fresh
# ListTarget, so their own windows cannot see each other
_draining_lists: set = set()


def as_target(collection) -> SortedDrainMixin:
    """Return something with the ``drain_at_sorted*`` methods for `collection`.

    Plain lists are wrapped in a new `ListTarget` on every call so they are
    compacted in place. Only the free functions below detect a nested drain
    of the same list; appends made to the list directly during a drain are
    not detectable.
    """
    if isinstance(collection, SortedDrainMixin):
        return collection
    if isinstance(collection, list):
        return ListTarget(collection)
    raise TypeError(f"cannot drain a {type(collection).__name__}; "
                    "expected a list or a SortedDrainMixin target")


@contextmanager
def _exclusive(collection) -> Iterator[None]:
    if not isinstance(collection, list):
        yield
        return
    key = id(collection)
    if key in _draining_lists:
        raise ReentrantDrainError("drain already in progress on this list")
    _draining_lists.add(key)
    try:
        yield
    finally:
        _draining_lists.discard(key)


def drain_at_sorted_unchecked(collection, positions: Iterable[int]) -> None:
    """Remove the elements at `positions` from `collection` in one pass.

    The caller guarantees the positions are strictly ascending, unique and
    within bounds. Breaking that gives unspecified results. Capacity is
    kept only for `ContiguousBuffer`; a plain list's allocation is left to
    CPython, which may shrink it when the list is truncated.
    """
    target = as_target(collection)
    with _exclusive(collection):
        target.drain_at_sorted_unchecked(positions)


def drain_at_sorted(collection, positions: Iterable[int]) -> None:
    """Like `drain_at_sorted_unchecked`, but validates `positions` first.

    Raises `control.preconditions.UnsortedPositionsError`,
    `DuplicatePositionError` or `PositionOutOfRangeError`; `collection` is
    left untouched when it does.
    """
    target = as_target(collection)
    with _exclusive(collection):
        target.drain_at_sorted(positions)
