"""
Sorted Drain: Visualizer

Generates a Matplotlib heatmap of buffer contents over a trace. Each row is
the buffer after one event, each column a slot; the colour is the value
stored there, so survivor blocks sliding left show up as diagonal shifts.
Drain events are marked as horizontal lines.

How to run (recommended, from repo root):
    python -m tools.visualize_drain --trace traces/mixed_drains.jsonl --out out_drain.png
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

# Ensure repo root is on sys.path when running as a script:
# (python -m tools.visualize_drain already works without this,
#  but this makes `python tools/visualize_drain.py ...` work too.)
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

import numpy as np
import matplotlib.pyplot as plt

from memory.buffer import ContiguousBuffer
from memory.metrics import compute_metrics


def load_trace(path: str):
    """Yield JSON events from a JSONL file."""
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line:
                yield json.loads(line)


def render_state(values: list[int], width: int) -> np.ndarray:
    """
    Return one heatmap row: slot values for the live length, NaN past it
    up to 'width' so unused capacity stays blank.
    """
    row = np.full(width, np.nan, dtype=np.float64)
    n = min(len(values), width)
    row[:n] = values[:n]
    return row


def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--trace", required=True, help="Path to JSONL trace")
    ap.add_argument("--out", default="out_drain.png", help="Output image file")
    ap.add_argument("--width", type=int, default=0, help="Columns to draw (default: peak length)")
    args = ap.parse_args(argv)

    trace_path = Path(args.trace)
    if not trace_path.exists():
        raise SystemExit(f"Trace not found: {trace_path}")

    buf = ContiguousBuffer(dtype=np.int64)
    snapshots: list[list[int]] = []
    drain_marks: list[int] = []
    removed = relocated = 0

    for ev in load_trace(str(trace_path)):
        et = ev.get("event")
        if et == "push":
            buf.extend(int(v) for v in ev["values"])
        elif et == "reserve":
            buf.reserve(int(ev["capacity"]))
        elif et == "drain":
            positions = [int(p) for p in ev["positions"]]
            m = compute_metrics(positions, len(buf))
            removed += m.removed
            relocated += m.relocated
            buf.drain_at_sorted(positions)
            drain_marks.append(len(snapshots))
        snapshots.append(buf.tolist())

    if not snapshots:
        raise SystemExit("No events in trace.")

    width = args.width or max(len(s) for s in snapshots) or 1
    frames = [render_state(values, width) for values in snapshots]
    H = np.stack(frames, axis=0)  # (time, width)

    fig = plt.figure(figsize=(10.5, 4.6))
    ax = fig.add_subplot(111)
    ax.imshow(H, aspect="auto", interpolation="nearest")
    ax.set_title("Buffer contents per event (trace-driven)")
    ax.set_xlabel("slot")
    ax.set_ylabel("event")

    for t in drain_marks:
        ax.axhline(t - 0.5, linewidth=1)

    caption = f"Removed={removed}, relocated={relocated}, final length={len(buf)}, capacity={buf.capacity}"
    fig.text(0.01, 0.01, caption, fontsize=9)

    fig.tight_layout()
    out_path = Path(args.out)
    fig.savefig(str(out_path), dpi=220)
    print(f"Wrote: {out_path.resolve()}")


if __name__ == "__main__":
    main()
