from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable

from memory.runs import decode_runs

@dataclass
class DrainMetrics:
    length: int
    removed: int
    kept: int
    runs: int
    survivor_blocks: int
    relocated: int
    largest_run: int

def compute_metrics(positions: Iterable[int], length: int) -> DrainMetrics:
    """Work a drain of `positions` would do on a sequence of `length`."""
    removed=0; runs=0; blocks=0; relocated=0; largest=0
    for run in decode_runs(positions):
        removed += len(run)
        runs += 1
        largest = max(largest, len(run))
        end = length if run.following is None else run.following
        if end > run.last + 1:
            blocks += 1
            relocated += end - run.last - 1
    return DrainMetrics(length, removed, length-removed, runs, blocks, relocated, largest)
