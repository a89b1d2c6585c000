from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

@dataclass(frozen=True)
class Run:
    first: int
    last: int
    following: Optional[int] = None   # start of the next run, None when exhausted

    def __len__(self) -> int:
        return self.last - self.first + 1

def decode_runs(positions: Iterable[int]) -> Iterator[Run]:
    """Split ascending positions into maximal runs of consecutive values.

    The iterable is consumed once with a single position of lookahead.
    """
    it = iter(positions)
    start = next(it, None)
    while start is not None:
        end = start
        following = None
        for p in it:
            if p != end + 1:
                following = p
                break
            end = p
        yield Run(start, end, following)
        start = following
