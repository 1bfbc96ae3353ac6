"""
features/artifacts.py — R-R interval artifact rejection
=========================================================
Drops physiologically implausible or ectopic-corrupted beats from a raw
R-R sequence before any metric is computed.

A beat is rejected if any of the following hold:

    1. It lies outside [RR_MIN_MS, RR_MAX_MS]   (faster than 200 BPM or
       slower than 30 BPM).
    2. |RR − previous accepted RR| > RR_MAX_DELTA_MS.
    3. |RR − previous accepted RR| / previous accepted RR
       > RR_MAX_PERCENT_CHANGE.

Rejected beats are removed, not interpolated.  The "previous accepted"
reference only moves forward on acceptance, so one outlier does not drag
its neighbours out with it.  The first beat is checked against the
physiological bounds only.

The filter is a single ordered pass: callers must keep the input in
chronological order, since reordering changes which beats survive.
"""

from typing import Sequence

from config import RR_MAX_DELTA_MS, RR_MAX_MS, RR_MAX_PERCENT_CHANGE, RR_MIN_MS
from utils.logger import get_logger

logger = get_logger("features.artifacts")


def is_artifact(rr_ms: float, previous_ms: float | None) -> bool:
    """Return True if `rr_ms` should be rejected given the last accepted beat."""
    if not (RR_MIN_MS <= rr_ms <= RR_MAX_MS):
        return True

    if previous_ms is None:
        return False

    delta = abs(rr_ms - previous_ms)
    if delta > RR_MAX_DELTA_MS:
        return True
    return delta / previous_ms > RR_MAX_PERCENT_CHANGE


def filter_artifacts(rr_intervals: Sequence[float]) -> tuple[list[float], int]:
    """
    Remove artifact beats from an ordered R-R sequence.

    Parameters
    ----------
    rr_intervals : Sequence[float]
        Raw R-R intervals in **milliseconds**, chronological order.

    Returns
    -------
    cleaned        : list[float]   Accepted intervals, original order kept.
    artifact_count : int           Number of rejected intervals.
    """
    cleaned: list[float] = []
    artifact_count = 0
    previous: float | None = None

    for value in rr_intervals:
        rr = float(value)
        if is_artifact(rr, previous):
            artifact_count += 1
            continue
        cleaned.append(rr)
        previous = rr

    logger.debug(
        "Artifact filter: kept %d of %d intervals (%d rejected).",
        len(cleaned), len(rr_intervals), artifact_count,
    )
    return cleaned, artifact_count
