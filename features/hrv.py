"""
features/hrv.py — Heart Rate Variability (HRV) time-domain features
=====================================================================
Computes the standard *time-domain* HRV metrics from a cleaned sequence
of R-R intervals (milliseconds):

    RMSSD — Root Mean Square of Successive Differences
    SDNN  — Standard Deviation of NN intervals (sample, N−1)
    SDSD  — Standard Deviation of Successive Differences (sample, N−1)
    NN50  — Count of successive differences > 50 ms
    pNN50 — NN50 as a percentage of all successive differences

Clinical context (for reference only — this system is NOT clinical)
-------------------------------------------------------------------
* SDNN reflects overall variability (sympathetic + parasympathetic).
* RMSSD is dominated by parasympathetic (vagal) tone and is the preferred
  short-term metric; it is the one most of the engine keys off.
* pNN50 correlates with RMSSD (r ≈ 0.95).

This module degrades to zeros below two samples.  Whether a result is
*meaningful* (≥ MIN_CLEAN_SAMPLES) is decided by `engine.metrics`.
"""

from typing import Sequence

import numpy as np

from config import NN50_THRESHOLD_MS, SDNN_TO_RMSSD_RATIO
from utils.logger import get_logger

logger = get_logger("features.hrv")


def _empty_time_features(mean_rr: float = 0.0) -> dict:
    return {
        "rmssd": 0.0,
        "sdnn": 0.0,
        "sdsd": 0.0,
        "pnn50": 0.0,
        "nn50": 0,
        "mean_rr": mean_rr,
        "mean_hr": 60000.0 / mean_rr if mean_rr > 0 else 0.0,
    }


def compute_time_domain(rr_intervals: Sequence[float]) -> dict:
    """
    Compute time-domain HRV features from cleaned R-R intervals.

    Parameters
    ----------
    rr_intervals : Sequence[float]
        Artifact-free R-R intervals in **milliseconds**.

    Returns
    -------
    dict with keys:
        rmssd   : float   ms
        sdnn    : float   ms
        sdsd    : float   ms
        pnn50   : float   percentage in [0, 100]
        nn50    : int     count
        mean_rr : float   ms
        mean_hr : float   BPM (60000 / mean_rr)
    """
    rr_ms = np.asarray(rr_intervals, dtype=np.float64)

    if rr_ms.size == 0:
        return _empty_time_features()
    if rr_ms.size < 2:
        return _empty_time_features(float(rr_ms[0]))

    mean_rr = float(np.mean(rr_ms))

    # ── SDNN ──────────────────────────────────────────────────────────────
    sdnn = float(np.std(rr_ms, ddof=1))

    # ── Successive differences: ΔRR_i = RR_{i+1} − RR_i ───────────────────
    successive_diffs = np.diff(rr_ms)                        # shape (N-1,)
    rmssd = float(np.sqrt(np.mean(successive_diffs ** 2)))

    # A single difference has no spread.
    sdsd = float(np.std(successive_diffs, ddof=1)) if successive_diffs.size > 1 else 0.0

    # ── NN50 / pNN50 ──────────────────────────────────────────────────────
    nn50 = int(np.sum(np.abs(successive_diffs) > NN50_THRESHOLD_MS))
    pnn50 = nn50 / successive_diffs.size * 100.0

    logger.debug(
        "Time domain — RMSSD=%.1f ms, SDNN=%.1f ms, pNN50=%.1f%%, mean_RR=%.1f ms (%d beats)",
        rmssd, sdnn, pnn50, mean_rr, rr_ms.size,
    )

    return {
        "rmssd": rmssd,
        "sdnn": sdnn,
        "sdsd": sdsd,
        "pnn50": pnn50,
        "nn50": nn50,
        "mean_rr": mean_rr,
        "mean_hr": 60000.0 / mean_rr,
    }


def approximate_rmssd_from_sdnn(sdnn_ms: float) -> float:
    """
    Estimate a *resting* RMSSD from an SDNN-only provider.

    Some health platforms expose SDNN but not R-R intervals.  At rest the
    RMSSD/SDNN ratio is typically 1.3–1.5, so this returns
    ``sdnn_ms * SDNN_TO_RMSSD_RATIO``.  It is a population heuristic and
    NOT a substitute for RMSSD computed from real intervals.
    """
    return sdnn_ms * SDNN_TO_RMSSD_RATIO
