"""
engine/metrics.py — R-R intervals → HRVMetrics
================================================
Orchestrates the full chain for one window of R-R intervals:

    raw R-R  →  artifact filter  →  time-domain metrics
                                 →  spectral metrics (window ≥ 120 s and
                                    ≥ 120 clean beats only)
             →  validity + confidence  →  HRVMetrics

Every function here is pure: no module state, no I/O.  The caller keeps
ownership of the input sequence; it is only read during the call.
Fewer than MIN_CLEAN_SAMPLES clean beats give an explicit *invalid*
record rather than an exception, so callers check ``is_valid``.
"""

from typing import Sequence

from config import (
    FREQ_MIN_SAMPLES,
    FREQ_MIN_WINDOW_SECONDS,
    MAX_ARTIFACT_PERCENTAGE,
    MIN_CLEAN_SAMPLES,
)
from features.artifacts import filter_artifacts
from features.hrv import compute_time_domain
from features.spectral import compute_spectral_metrics
from model.schemas import HRVMetrics
from utils.logger import get_logger

logger = get_logger("engine.metrics")


def create_invalid_metrics(
    window_duration_seconds: float,
    artifact_count: int,
    reason: str,
) -> HRVMetrics:
    """Zeroed placeholder record for windows that cannot be analysed."""
    logger.warning("Invalid HRV metrics: %s", reason)
    return HRVMetrics(
        rmssd=0.0,
        sdnn=0.0,
        sdsd=0.0,
        pnn50=0.0,
        nn50=0,
        mean_rr=0.0,
        mean_hr=0.0,
        spectral=None,
        sample_count=0,
        artifact_count=artifact_count,
        artifact_percentage=1.0,
        window_duration_seconds=window_duration_seconds,
        is_valid=False,
    )


def spectral_analysis_possible(window_duration_seconds: float, sample_count: int) -> bool:
    """Frequency-domain metrics need ≥ 2 min of data and ≥ 120 clean beats."""
    return (window_duration_seconds >= FREQ_MIN_WINDOW_SECONDS
            and sample_count >= FREQ_MIN_SAMPLES)


def calculate_metrics(
    rr_intervals: Sequence[float],
    window_duration_seconds: float,
) -> HRVMetrics:
    """
    Compute all HRV metrics for one window of R-R intervals.

    Parameters
    ----------
    rr_intervals            : Sequence[float]
        Raw R-R intervals in **milliseconds**, chronological order.
    window_duration_seconds : float
        Length of the recording window the intervals came from.

    Returns
    -------
    HRVMetrics
        Frozen record.  ``is_valid`` is False when too few beats survive
        artifact rejection or when more than 5 % of beats were rejected.
    """
    # ── Step 1: Artifact rejection ────────────────────────────────────────
    cleaned, artifact_count = filter_artifacts(rr_intervals)
    artifact_percentage = artifact_count / max(1, len(rr_intervals))

    # ── Step 2: Minimum data requirement ──────────────────────────────────
    if len(cleaned) < MIN_CLEAN_SAMPLES:
        return create_invalid_metrics(
            window_duration_seconds,
            artifact_count,
            reason=f"Insufficient data points ({len(cleaned)} < {MIN_CLEAN_SAMPLES})",
        )

    # ── Step 3: Time domain ───────────────────────────────────────────────
    time_domain = compute_time_domain(cleaned)

    # ── Step 4: Frequency domain (only with enough data) ──────────────────
    spectral = None
    if spectral_analysis_possible(window_duration_seconds, len(cleaned)):
        spectral = compute_spectral_metrics(cleaned, mean_rr=time_domain["mean_rr"])

    metrics = HRVMetrics(
        **time_domain,
        spectral=spectral,
        sample_count=len(cleaned),
        artifact_count=artifact_count,
        artifact_percentage=artifact_percentage,
        window_duration_seconds=window_duration_seconds,
        is_valid=artifact_percentage <= MAX_ARTIFACT_PERCENTAGE,
    )

    logger.info(
        "HRV — %s, %d beats, %d artifacts, confidence=%s, spectral=%s",
        metrics.summary, metrics.sample_count, artifact_count,
        metrics.confidence_level.value, "yes" if spectral else "no",
    )
    return metrics
