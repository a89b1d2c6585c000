from __future__ import annotations
import logging
import operator
from dataclasses import dataclass
from typing import Iterable, List, Optional

log = logging.getLogger(__name__)

class PositionError(ValueError):
    """A removal position that breaks the sorted/unique/in-range contract."""
    def __init__(self, message: str, position: int, index: int):
        super().__init__(message)
        self.position = position
        self.index = index

class UnsortedPositionsError(PositionError):
    pass

class DuplicatePositionError(PositionError):
    pass

class PositionOutOfRangeError(PositionError):
    pass

@dataclass
class Bounds:
    length: int

class PositionGuard:
    """Validates removal positions one at a time.

    Checks run in a fixed order per position: range, then duplicate, then
    ordering against the previously accepted position.
    """
    def __init__(self, bounds: Bounds):
        self.bounds = bounds
        self.reset()
    def reset(self):
        self.last: Optional[int] = None
        self.accepted = 0
    def consume(self, position) -> int:
        p = operator.index(position)
        self._check(p)
        self.last = p
        self.accepted += 1
        return p
    def _check(self, p: int):
        i = self.accepted
        if p < 0 or p >= self.bounds.length:
            raise PositionOutOfRangeError(
                f"position {p} at index {i} is outside [0, {self.bounds.length})", p, i)
        if self.last is None:
            return
        if p == self.last:
            raise DuplicatePositionError(f"position {p} at index {i} is repeated", p, i)
        if p < self.last:
            raise UnsortedPositionsError(
                f"position {p} at index {i} comes after {self.last}", p, i)
    def status(self) -> str:
        return f"accepted={self.accepted} last={self.last} length={self.bounds.length}"

def check_positions(positions: Iterable[int], length: int) -> List[int]:
    guard = PositionGuard(Bounds(length))
    checked = []
    try:
        for p in positions:
            checked.append(guard.consume(p))
    except PositionError as e:
        log.debug("rejected removal set: %s (%s)", e, guard.status())
        raise
    return checked
