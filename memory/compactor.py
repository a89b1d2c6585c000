"""In-place removal of elements at sorted positions.

`compact` makes one forward pass over the removal positions. Each maximal
run of consecutive positions is finalized, then the survivor block that
follows it is moved left by the number of elements removed so far. The
logical length is cut once at the end; the backing storage is never
reallocated.

Targets expose four things: ``len()``, ``finalize_range(start, stop)``,
``move_block(start, stop, dest)`` (overlap-safe, ``dest <= start``) and
``truncate(length)``.
"""

from __future__ import annotations
import logging
from typing import Iterable

from control.preconditions import check_positions
from memory.runs import decode_runs

log = logging.getLogger(__name__)


def compact(target, positions: Iterable[int]) -> None:
    """Remove the elements of `target` at `positions`.

    Positions must be strictly ascending, unique and inside ``[0, len(target))``.
    Nothing is checked here; use `drain_at_sorted` on the target for that.
    """
    n = len(target)
    shift = 0
    runs = 0
    moved = 0
    for run in decode_runs(positions):
        # finalize before the slots get overwritten by the move below
        target.finalize_range(run.first, run.last + 1)
        shift += len(run)
        runs += 1

        block_start = run.last + 1
        block_end = n if run.following is None else run.following
        if block_end > block_start:
            target.move_block(block_start, block_end, block_start - shift)
            moved += block_end - block_start

    if shift == 0:
        return
    target.truncate(n - shift)
    log.debug("drained %d of %d elements in %d runs, relocated %d", shift, n, runs, moved)


class SortedDrainMixin:
    """Adds ``drain_at_sorted*`` methods to a compaction target.

    Subclasses provide the target methods plus a ``window`` attribute
    holding a `control.window.DrainWindow`.
    """

    def drain_at_sorted_unchecked(self, positions: Iterable[int]) -> None:
        self.window.open()
        try:
            compact(self, positions)
        finally:
            self.window.close()

    def drain_at_sorted(self, positions: Iterable[int]) -> None:
        """Validate `positions` against the current length, then drain.

        Raises a `control.preconditions.PositionError` subclass before
        touching anything if the positions are unsorted, repeated or out
        of range.
        """
        self.window.require_idle("drain")
        checked = check_positions(positions, len(self))
        self.drain_at_sorted_unchecked(checked)
