from datetime import timedelta

import pytest

from engine.metrics import calculate_metrics
from engine.rolling import calculate_rolling_hrv, timestamps_from_intervals


def test_ten_minutes_uniform_gives_nineteen_points(uniform_ten_minutes, start_time):
    intervals, timestamps = uniform_ten_minutes
    points = calculate_rolling_hrv(intervals, timestamps)

    assert len(points) == (600 - 60) // 30 + 1
    assert all(p.is_valid for p in points)
    assert all(p.mean_hr == pytest.approx(75.0) for p in points)
    assert all(p.rmssd == 0.0 for p in points)
    # each point is stamped with its window end
    assert points[0].timestamp == start_time + timedelta(seconds=60)
    assert points[-1].timestamp == start_time + timedelta(seconds=600)
    assert len({p.id for p in points}) == len(points)


def test_each_window_sees_half_open_slice(uniform_ten_minutes, monkeypatch):
    intervals, timestamps = uniform_ten_minutes
    seen = []

    def recorder(window_rr, window_seconds):
        seen.append((len(window_rr), window_seconds))
        return calculate_metrics(window_rr, window_seconds)

    monkeypatch.setattr("engine.rolling.calculate_metrics", recorder)
    calculate_rolling_hrv(intervals, timestamps)
    # 60 s / 0.8 s per beat, the beat at the window end is excluded
    assert seen[0] == (75, 60.0)
    assert all(count == 75 for count, _ in seen)


def test_sparse_windows_are_skipped(start_time):
    # one beat every 10 s: 6 beats per 60 s window
    intervals = [800.0] * 40
    timestamps = [start_time + timedelta(seconds=10 * i) for i in range(40)]
    assert calculate_rolling_hrv(intervals, timestamps) == []


def test_custom_window_and_overlap(uniform_ten_minutes):
    intervals, timestamps = uniform_ten_minutes
    points = calculate_rolling_hrv(intervals, timestamps, window_seconds=120, overlap_seconds=60)
    assert len(points) == (600 - 120) // 60 + 1


def test_history_shorter_than_a_window(start_time):
    intervals = [800.0] * 20
    timestamps = timestamps_from_intervals(intervals, start_time)
    assert calculate_rolling_hrv(intervals, timestamps) == []


def test_empty_history_gives_empty_series():
    assert calculate_rolling_hrv([], []) == []


def test_mismatched_lengths_raise(start_time):
    with pytest.raises(ValueError, match="same length"):
        calculate_rolling_hrv([800.0, 800.0], [start_time])


@pytest.mark.parametrize("window, overlap", [(60, 60), (60, 90), (0, 0), (60, -5)])
def test_non_advancing_window_is_rejected(window, overlap, uniform_ten_minutes):
    intervals, timestamps = uniform_ten_minutes
    with pytest.raises(ValueError):
        calculate_rolling_hrv(intervals, timestamps, window_seconds=window, overlap_seconds=overlap)


def test_timestamps_from_intervals(start_time):
    stamps = timestamps_from_intervals([800.0, 1000.0, 900.0], start_time)
    assert stamps == [
        start_time,
        start_time + timedelta(milliseconds=800),
        start_time + timedelta(milliseconds=1800),
    ]
    assert timestamps_from_intervals([], start_time) == []
