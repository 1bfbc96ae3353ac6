"""Synthetic R-R series shared by the test modules."""

import math
from datetime import datetime, timedelta, timezone

import pytest


def modulated_series(n: int, base: float = 850.0, seed_phase: float = 0.0) -> list[float]:
    """
    Realistic resting R-R series: respiratory (HF) and baroreflex (LF)
    oscillations on a stable mean.  Beat-to-beat changes stay far below
    the artifact thresholds.
    """
    series = []
    for i in range(n):
        hf = 25.0 * math.sin(2 * math.pi * 0.25 * i * base / 1000.0 + seed_phase)
        lf = 20.0 * math.sin(2 * math.pi * 0.10 * i * base / 1000.0)
        series.append(base + hf + lf)
    return series


@pytest.fixture
def constant_series() -> list[float]:
    return [800.0] * 10


@pytest.fixture
def resting_series() -> list[float]:
    return modulated_series(200)


@pytest.fixture
def long_series() -> list[float]:
    # ~130 beats over ~130 s when paired with a 130 s window
    return modulated_series(160, base=1000.0)


@pytest.fixture
def start_time() -> datetime:
    return datetime(2026, 1, 5, 9, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def uniform_ten_minutes(start_time):
    """800 ms beats stamped every 800 ms from 0 s to exactly 600 s."""
    n = 751
    intervals = [800.0] * n
    timestamps = [start_time + timedelta(milliseconds=800 * i) for i in range(n)]
    return intervals, timestamps
