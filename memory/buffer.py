from __future__ import annotations
from typing import Any, Callable, Iterable, Iterator, List, Optional

import numpy as np

from control.window import DrainWindow
from memory.compactor import SortedDrainMixin

Finalizer = Callable[[Any], None]

class ContiguousBuffer(SortedDrainMixin):
    """Growable sequence over a single numpy array.

    ``len()`` is the logical length; ``capacity`` is the size of the backing
    array. Appends double the array when full. Nothing shrinks it.
    """
    def __init__(self, capacity: int=8, dtype=object, finalizer: Optional[Finalizer]=None):
        if capacity < 0:
            raise ValueError(f"capacity must be >= 0, got {capacity}")
        self._data = np.empty(capacity, dtype=dtype)
        self._length = 0
        self.finalizer = finalizer
        self.window = DrainWindow()

    @classmethod
    def from_iterable(cls, values: Iterable[Any], dtype=object,
                      finalizer: Optional[Finalizer]=None) -> "ContiguousBuffer":
        values = list(values)
        buf = cls(len(values), dtype=dtype, finalizer=finalizer)
        buf.extend(values)
        return buf

    @property
    def capacity(self) -> int:
        return len(self._data)

    @property
    def dtype(self):
        return self._data.dtype

    def __len__(self) -> int:
        return self._length

    def __iter__(self) -> Iterator[Any]:
        return iter(self.tolist())

    def __getitem__(self, key):
        if isinstance(key, slice):
            return self._data[:self._length][key].tolist()
        i = key + self._length if key < 0 else key
        if i < 0 or i >= self._length:
            raise IndexError(f"index {key} out of range for length {self._length}")
        return self._data[i]

    def __eq__(self, other) -> bool:
        if isinstance(other, ContiguousBuffer):
            return self.tolist() == other.tolist()
        if isinstance(other, (list, tuple)):
            return self.tolist() == list(other)
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        return f"ContiguousBuffer({self.tolist()!r}, capacity={self.capacity})"

    def tolist(self) -> List[Any]:
        return self._data[:self._length].tolist()

    def reserve(self, capacity: int):
        self.window.require_idle("reserve")
        if capacity <= self.capacity:
            return
        grown = np.empty(capacity, dtype=self._data.dtype)
        grown[:self._length] = self._data[:self._length]
        self._data = grown

    def append(self, value: Any):
        self.window.require_idle("append")
        if self._length == self.capacity:
            self.reserve(max(8, self.capacity * 2))
        self._data[self._length] = value
        self._length += 1

    def extend(self, values: Iterable[Any]):
        for v in values:
            self.append(v)

    # -- compaction target -------------------------------------------------

    def finalize_range(self, start: int, stop: int):
        if self.finalizer is not None:
            for i in range(start, stop):
                self.finalizer(self._data[i])
        if self._data.dtype == object:
            self._data[start:stop] = None

    def move_block(self, start: int, stop: int, dest: int):
        # numpy slice assignment is correct for overlapping ranges
        self._data[dest:dest + (stop - start)] = self._data[start:stop]

    def truncate(self, length: int):
        # stale slots past the new length are copies of moved survivors, not owners
        if self._data.dtype == object:
            self._data[length:self._length] = None
        self._length = length


class ListTarget(SortedDrainMixin):
    """Compaction target over a caller-owned Python list, mutated in place.

    Moves are done one slot at a time, so no auxiliary storage is used. The
    list's allocation is managed by CPython and may shrink on truncate.
    """
    def __init__(self, items: list, finalizer: Optional[Finalizer]=None):
        self.items = items
        self.finalizer = finalizer
        self.window = DrainWindow()

    def __len__(self) -> int:
        return len(self.items)

    def finalize_range(self, start: int, stop: int):
        if self.finalizer is not None:
            for i in range(start, stop):
                self.finalizer(self.items[i])
        for i in range(start, stop):
            self.items[i] = None

    def move_block(self, start: int, stop: int, dest: int):
        # element by element: a slice copy would allocate the whole block
        items = self.items
        for i in range(stop - start):
            items[dest + i] = items[start + i]

    def truncate(self, length: int):
        # CPython may shrink the list allocation here; only ContiguousBuffer keeps capacity
        del self.items[length:]
