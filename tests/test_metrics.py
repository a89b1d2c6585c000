"""Tests for drain metrics, removal patterns and the ASCII map."""

from __future__ import annotations

import pytest

from memory.metrics import DrainMetrics, compute_metrics
from policy.baselines import rebuild_without
from policy.patterns import consecutive_runs, every_nth, parse_pattern, random_subset
from viz.ascii_map import render_map


# ------------------------------------------------------------------
# Metrics
# ------------------------------------------------------------------


def test_metrics_mixed_runs():
    m = compute_metrics([1, 2, 3, 5, 7], 10)
    assert m == DrainMetrics(length=10, removed=5, kept=5, runs=3,
                             survivor_blocks=3, relocated=4, largest_run=3)


def test_metrics_tail_run_moves_nothing():
    m = compute_metrics([8, 9], 10)
    assert (m.runs, m.survivor_blocks, m.relocated) == (1, 0, 0)


def test_metrics_empty():
    m = compute_metrics([], 10)
    assert (m.removed, m.kept, m.runs, m.relocated) == (0, 10, 0, 0)


def test_relocated_bounded_by_length():
    positions = every_nth(1000, 3)
    m = compute_metrics(positions, 1000)
    assert m.relocated == 1000 - positions[0] - len(positions)
    assert m.relocated <= 1000


# ------------------------------------------------------------------
# Patterns
# ------------------------------------------------------------------


def test_every_nth():
    assert every_nth(10, 3) == [0, 3, 6, 9]
    assert every_nth(10, 4, 1) == [1, 5, 9]
    with pytest.raises(ValueError):
        every_nth(10, 0)
    with pytest.raises(ValueError):
        every_nth(10, 3, -2)


def test_consecutive_runs():
    assert consecutive_runs(10, 2, 3) == [0, 1, 5, 6]
    assert consecutive_runs(5, 2, 0) == [0, 1, 2, 3, 4]


def test_random_subset_sorted_unique_and_seeded():
    a = random_subset(100, 30, seed=4)
    assert a == sorted(set(a))
    assert len(a) == 30
    assert all(0 <= p < 100 for p in a)
    assert a == random_subset(100, 30, seed=4)
    with pytest.raises(ValueError):
        random_subset(5, 6)


@pytest.mark.parametrize(
    "pattern, expected",
    [
        ("every:5", [0, 5]),
        ("every:5:2", [2, 7]),
        ("runs:2:3", [0, 1, 5, 6]),
    ],
)
def test_parse_pattern(pattern, expected):
    assert parse_pattern(pattern, 10) == expected


@pytest.mark.parametrize("pattern", ["every", "runs:1", "zigzag:2", "every:x", "every:3:-2"])
def test_parse_pattern_rejects_garbage(pattern):
    with pytest.raises(ValueError):
        parse_pattern(pattern, 10)


def test_rebuild_without():
    assert rebuild_without("abcdef", [0, 2]) == ["b", "d", "e", "f"]


# ------------------------------------------------------------------
# ASCII map
# ------------------------------------------------------------------


def test_render_map_one_cell_per_slot():
    assert render_map(10, [1, 2, 3, 5, 7]) == ".xxx.x.x.."


def test_render_map_bins_long_sequences():
    line = render_map(1000, [0, 999], width=10)
    assert line == "x........x"


def test_render_map_empty():
    assert render_map(0, []) == ""
