"""
model/baseline.py — Comparison against a personal baseline
============================================================
The baseline itself (e.g. a 7-day resting RMSSD) is owned and persisted by
the caller; this module only measures how far a current value sits from it.

    deviation = (current − baseline) / baseline · 100

    deviation < −20 %        significantly below
    −20 % ≤ deviation < −10  below
    −10 % ≤ deviation < 10   within normal range
     10 % ≤ deviation < 20   above
    deviation ≥ 20 %         significantly above
"""

from config import BASELINE_MINOR_PCT, BASELINE_SIGNIFICANT_PCT

NO_BASELINE = "No baseline established"


def compare_to_baseline(current: float, baseline: float) -> tuple[float, str]:
    """
    Return ``(deviation_percent, interpretation)`` for `current` vs `baseline`.

    A non-positive baseline means none has been established yet; the
    deviation is reported as 0.
    """
    if baseline <= 0:
        return 0.0, NO_BASELINE

    deviation = (current - baseline) / baseline * 100.0

    if deviation < -BASELINE_SIGNIFICANT_PCT:
        interpretation = "Significantly below baseline - prioritize recovery"
    elif deviation < -BASELINE_MINOR_PCT:
        interpretation = "Below baseline - consider lighter work"
    elif deviation < BASELINE_MINOR_PCT:
        interpretation = "Within normal range"
    elif deviation < BASELINE_SIGNIFICANT_PCT:
        interpretation = "Above baseline - good recovery state"
    else:
        interpretation = "Significantly above baseline - excellent condition"

    return deviation, interpretation
