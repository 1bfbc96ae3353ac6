import json
from datetime import datetime, timedelta, timezone

import pytest

from cli import main, read_intervals


@pytest.fixture
def rr_file(tmp_path):
    path = tmp_path / "rr.txt"
    path.write_text("# resting\n" + "\n".join(["800"] * 10) + "\n\n", encoding="utf-8")
    return path


def test_read_plain_intervals(rr_file):
    with open(rr_file, encoding="utf-8") as fh:
        intervals, timestamps = read_intervals(fh)
    assert intervals == [800.0] * 10
    assert timestamps is None


def test_read_timestamped_rows(tmp_path):
    path = tmp_path / "rr.csv"
    path.write_text("1700000000,800\n2026-01-05T09:00:00.800+00:00,810\n", encoding="utf-8")
    with open(path, encoding="utf-8") as fh:
        intervals, timestamps = read_intervals(fh)
    assert intervals == [800.0, 810.0]
    assert len(timestamps) == 2


def test_mixed_formats_are_rejected(tmp_path):
    path = tmp_path / "rr.csv"
    path.write_text("800\n1700000000,800\n", encoding="utf-8")
    with open(path, encoding="utf-8") as fh, pytest.raises(ValueError):
        read_intervals(fh)


def test_json_report(rr_file, capsys):
    assert main([str(rr_file), "--json", "--baseline", "40"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["mean_hr"] == pytest.approx(75.0)
    assert payload["rmssd"] == 0.0
    assert payload["is_valid"] is True
    assert payload["confidence_level"] == "Low"
    assert payload["flow"]["score"] == 35
    assert payload["summary"] == "RMSSD: 0.0ms | HR: 75 bpm"


def test_text_report(rr_file, capsys):
    assert main([str(rr_file), "--baseline", "40"]) == 0
    out = capsys.readouterr().out
    assert "HRV REPORT" in out
    assert "Not computed" in out
    assert "Significantly below baseline" in out


def test_rolling_json(tmp_path, capsys):
    path = tmp_path / "rr.txt"
    path.write_text("\n".join(["800"] * 200), encoding="utf-8")
    assert main([str(path), "--rolling", "--json"]) == 0
    points = json.loads(capsys.readouterr().out)
    # 200 beats span 159.2 s: windows start at 0, 30, 60, 90
    assert len(points) == 4
    assert all(p["is_valid"] for p in points)


def test_bad_overlap_exits_with_error(rr_file, capsys):
    assert main([str(rr_file), "--rolling", "--window-seconds", "30", "--overlap-seconds", "30"]) == 1
    assert "ERROR" in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.txt")]) == 1
    assert "cannot read" in capsys.readouterr().err


def test_malformed_line(tmp_path, capsys):
    path = tmp_path / "rr.txt"
    path.write_text("800\nabc\n", encoding="utf-8")
    assert main([str(path)]) == 1
    assert "line 2" in capsys.readouterr().err


def test_iso_without_offset_is_read_as_utc(tmp_path):
    path = tmp_path / "rr.csv"
    path.write_text("2026-01-05T09:00:00,800\n", encoding="utf-8")
    with open(path, encoding="utf-8") as fh:
        _, timestamps = read_intervals(fh)
    assert timestamps == [datetime(2026, 1, 5, 9, 0, 0, tzinfo=timezone.utc)]


def test_rolling_with_epoch_and_naive_iso_rows(tmp_path, capsys):
    start = datetime.fromtimestamp(1700000000, tz=timezone.utc)
    rows = ["1700000000,800"]
    for i in range(1, 100):
        stamp = (start + timedelta(milliseconds=800 * i)).replace(tzinfo=None)
        rows.append(f"{stamp.isoformat()},800")
    path = tmp_path / "rr.csv"
    path.write_text("\n".join(rows), encoding="utf-8")

    assert main([str(path), "--rolling", "--json"]) == 0
    points = json.loads(capsys.readouterr().out)
    # 100 beats span 79.2 s: only the window starting at 0 fits
    assert len(points) == 1
    assert points[0]["is_valid"]
