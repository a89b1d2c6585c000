from __future__ import annotations
from typing import List, Optional

import numpy as np

def every_nth(length: int, n: int, offset: int=0) -> List[int]:
    if n <= 0:
        raise ValueError(f"n must be positive, got {n}")
    if offset < 0:
        raise ValueError(f"offset must be >= 0, got {offset}")
    return list(range(offset, length, n))

def consecutive_runs(length: int, run: int, gap: int) -> List[int]:
    """Runs of `run` removed positions separated by `gap` kept ones."""
    if run <= 0 or gap < 0:
        raise ValueError(f"need run > 0 and gap >= 0, got run={run} gap={gap}")
    out=[]
    start=0
    while start < length:
        out.extend(range(start, min(start+run, length)))
        start += run + gap
    return out

def random_subset(length: int, k: int, seed: Optional[int]=None) -> List[int]:
    if not 0 <= k <= length:
        raise ValueError(f"cannot pick {k} positions out of {length}")
    rng = np.random.default_rng(seed)
    picked = rng.choice(length, size=k, replace=False)
    return sorted(int(p) for p in picked)

def parse_pattern(pattern: str, length: int) -> List[int]:
    """Build positions from a CLI pattern.

    every:N[:OFFSET]   runs:RUN:GAP   random:K[:SEED]
    """
    kind, _, rest = pattern.partition(':')
    args = [int(a) for a in rest.split(':')] if rest else []
    if kind == 'every' and 1 <= len(args) <= 2:
        return every_nth(length, *args)
    if kind == 'runs' and len(args) == 2:
        return consecutive_runs(length, *args)
    if kind == 'random' and 1 <= len(args) <= 2:
        return random_subset(length, *args)
    raise ValueError(f"unrecognised pattern {pattern!r}")
