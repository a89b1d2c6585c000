"""Tests for the run_drain command-line entry point."""

from __future__ import annotations

import json
import re
from pathlib import Path

import pytest

from run_drain import main, parse_positions

TRACE = Path(__file__).resolve().parents[1] / "traces" / "mixed_drains.jsonl"


def field(out: str, name: str) -> str:
    m = re.search(rf"{re.escape(name)}:\s+(\S+)", out)
    assert m, f"{name} missing from output"
    return m.group(1)


def test_parse_positions():
    assert parse_positions("1, 2,3,") == [1, 2, 3]


def test_positions_summary(capsys):
    main(["--length", "10", "--positions", "1,2,3,5,7", "--show-map"])
    out = capsys.readouterr().out
    assert field(out, "Removed") == "5"
    assert field(out, "Runs") == "3"
    assert field(out, "Relocated") == "4"
    assert field(out, "Length") == "5"
    assert field(out, "Capacity") == "10"
    assert ".xxx.x.x.." in out


def test_pattern_unchecked(capsys):
    main(["--length", "12", "--pattern", "every:3", "--unchecked"])
    out = capsys.readouterr().out
    assert "Mode: unchecked" in out
    assert field(out, "Removed") == "4"
    assert field(out, "Length") == "8"


def test_trace(capsys):
    main(["--trace", str(TRACE)])
    out = capsys.readouterr().out
    assert field(out, "Drains") == "3"
    assert field(out, "Removed") == "14"
    assert field(out, "Length") == "16"
    assert field(out, "Capacity") == "64"


def test_bad_positions_exit_2(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--length", "5", "--positions", "3,1"])
    assert exc.value.code == 2
    assert "Rejected removal positions" in capsys.readouterr().err


def test_unknown_trace_event(tmp_path):
    trace = tmp_path / "t.jsonl"
    trace.write_text(json.dumps({"event": "shuffle"}) + "\n", encoding="utf-8")
    with pytest.raises(SystemExit):
        main(["--trace", str(trace)])


def test_length_needs_one_position_source():
    with pytest.raises(SystemExit):
        main(["--length", "5"])


def test_bad_dtype_exit_2(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--length", "5", "--positions", "1", "--dtype", "bogus"])
    assert exc.value.code == 2
    assert "Bad input" in capsys.readouterr().err


def test_negative_pattern_offset_exit_2(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--length", "10", "--pattern", "every:3:-2", "--unchecked"])
    assert exc.value.code == 2
