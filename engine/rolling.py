"""
engine/rolling.py — Rolling-window HRV time series
====================================================
Turns a long, timestamped R-R history into a series of `HRVDataPoint`
values by sliding a fixed window across it:

    |<──── window ────>|
              |<──── window ────>|
    |<─step─>|                      step = window − overlap

A window covers ``[start, start + window)``; windows are generated while
``start + window ≤ last timestamp``.  Each window with at least
ROLLING_MIN_SAMPLES beats is scored by `engine.metrics.calculate_metrics`
and emitted with the window *end* as its timestamp.  Sparse windows are
skipped silently.

Nothing is kept between calls; the caller owns and threads the history.
"""

from datetime import datetime, timedelta
from typing import Sequence

import numpy as np

from config import ROLLING_MIN_SAMPLES, ROLLING_OVERLAP_SECONDS, ROLLING_WINDOW_SECONDS
from engine.metrics import calculate_metrics
from model.schemas import HRVDataPoint
from utils.logger import get_logger

logger = get_logger("engine.rolling")


def timestamps_from_intervals(
    rr_intervals: Sequence[float],
    start: datetime,
) -> list[datetime]:
    """
    Stamp each beat at `start` plus the sum of the intervals before it.

    For histories recorded without per-beat capture times.
    """
    offsets_ms = np.concatenate(([0.0], np.cumsum(rr_intervals, dtype=np.float64)[:-1]))
    return [start + timedelta(milliseconds=float(ms)) for ms in offsets_ms[:len(rr_intervals)]]


def calculate_rolling_hrv(
    rr_intervals: Sequence[float],
    timestamps: Sequence[datetime],
    window_seconds: float = ROLLING_WINDOW_SECONDS,
    overlap_seconds: float = ROLLING_OVERLAP_SECONDS,
) -> list[HRVDataPoint]:
    """
    Compute an HRV time series over overlapping windows.

    Parameters
    ----------
    rr_intervals    : Sequence[float]      R-R intervals (ms).
    timestamps      : Sequence[datetime]   Capture time of each interval.
    window_seconds  : float                Window length (default 60 s).
    overlap_seconds : float                Overlap between consecutive
                                           windows (default 30 s).

    Returns
    -------
    list[HRVDataPoint]   One point per window with enough beats.

    Raises
    ------
    ValueError
        If the two sequences differ in length, or the window step
        ``window_seconds − overlap_seconds`` is not positive.
    """
    if len(rr_intervals) != len(timestamps):
        raise ValueError(
            f"rr_intervals and timestamps must have the same length "
            f"(got {len(rr_intervals)} and {len(timestamps)})."
        )
    if window_seconds <= 0:
        raise ValueError(f"window_seconds must be positive, got {window_seconds}.")
    if overlap_seconds < 0:
        raise ValueError(f"overlap_seconds must not be negative, got {overlap_seconds}.")
    if overlap_seconds >= window_seconds:
        raise ValueError(
            f"overlap_seconds ({overlap_seconds}) must be smaller than "
            f"window_seconds ({window_seconds}); the window would never advance."
        )

    if len(rr_intervals) == 0:
        return []

    rr_ms = np.asarray(rr_intervals, dtype=np.float64)

    start_time = timestamps[0]
    offsets = np.array([(ts - start_time).total_seconds() for ts in timestamps])
    end_offset = offsets[-1]
    step = window_seconds - overlap_seconds

    results: list[HRVDataPoint] = []
    skipped = 0
    window_start = 0.0

    while window_start + window_seconds <= end_offset:
        window_end = window_start + window_seconds
        in_window = (offsets >= window_start) & (offsets < window_end)

        if np.count_nonzero(in_window) >= ROLLING_MIN_SAMPLES:
            metrics = calculate_metrics(rr_ms[in_window].tolist(), window_seconds)
            results.append(HRVDataPoint(
                timestamp=start_time + timedelta(seconds=window_end),
                rmssd=metrics.rmssd,
                mean_hr=metrics.mean_hr,
                is_valid=metrics.is_valid,
            ))
        else:
            skipped += 1

        window_start += step

    logger.info(
        "Rolling HRV: %d data points from %d intervals (%d sparse windows skipped).",
        len(results), len(rr_ms), skipped,
    )
    return results
