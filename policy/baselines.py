from __future__ import annotations
from typing import Any, Iterable, List

def rebuild_without(values: Iterable[Any], positions: Iterable[int]) -> List[Any]:
    """Copy `values` into a new list, skipping `positions`.

    Allocates a fresh list and a set; the reference result for a drain.
    """
    drop = set(positions)
    return [v for i, v in enumerate(values) if i not in drop]
