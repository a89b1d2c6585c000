from __future__ import annotations
import subprocess
import sys
import re
import time

from policy.baselines import rebuild_without
from policy.patterns import parse_pattern

PY = sys.executable  # respects venv if activated, otherwise uses current python

LENGTH = 200_000

SCENARIOS = [
    ("every:2", "alternating"),
    ("every:97", "sparse"),
    ("runs:64:64", "blocky"),
    ("runs:1000:10", "mostly removed"),
    ("random:20000:7", "random 10%"),
]

PATTERNS = {
    "removed": re.compile(r"Removed:\s+(\d+)"),
    "runs": re.compile(r"Runs:\s+(\d+)"),
    "blocks": re.compile(r"Survivor blocks:\s+(\d+)"),
    "relocated": re.compile(r"Relocated:\s+(\d+)"),
    "elapsed_ms": re.compile(r"Elapsed \(ms\):\s+([0-9\.]+)"),
}

def run(pattern: str) -> str:
    cmd = [PY, "run_drain.py", "--length", str(LENGTH), "--pattern", pattern, "--unchecked"]
    out = subprocess.check_output(cmd, stderr=subprocess.STDOUT, text=True)
    return out

def parse(out: str):
    def get(key, default=None):
        m = PATTERNS[key].search(out)
        return m.group(1) if m else default
    return {
        "removed": int(get("removed", 0)),
        "runs": int(get("runs", 0)),
        "blocks": int(get("blocks", 0)),
        "relocated": int(get("relocated", 0)),
        "elapsed_ms": float(get("elapsed_ms", 0.0)),
    }

def baseline_ms(pattern: str) -> float:
    values = list(range(LENGTH))
    positions = parse_pattern(pattern, LENGTH)
    t0 = time.perf_counter()
    rebuild_without(values, positions)
    return (time.perf_counter() - t0) * 1e3

def main():
    rows=[]
    for pattern, note in SCENARIOS:
        m = parse(run(pattern))
        rows.append((pattern, note, m, baseline_ms(pattern)))

    header = ["pattern","shape","removed","runs","blocks","relocated","drain_ms","rebuild_ms"]
    print("="*100)
    print(f"Sorted Drain: Benchmark Table (length={LENGTH})")
    print("="*100)
    print("{:<16} {:<15} {:>8} {:>7} {:>7} {:>10} {:>10} {:>11}".format(*header))
    for pattern, note, m, base in rows:
        print("{:<16} {:<15} {:>8} {:>7} {:>7} {:>10} {:>10.3f} {:>11.3f}".format(
            pattern, note, m["removed"], m["runs"], m["blocks"], m["relocated"], m["elapsed_ms"], base
        ))
    print("="*100)
    print("Tip: run a single drain with --show-map for a removal-map view.")
    print("  python run_drain.py --length 120 --pattern runs:5:7 --show-map")

if __name__ == "__main__":
    main()
