"""
model/flow.py — HRV signature of flow-state potential
=======================================================

⚠️  DISCLAIMER: This is a heuristic WELLNESS INDICATOR.  Flow is a
    psychological state and cannot be read off a heart-rate trace; the
    score is one input among many for a focus-readiness estimate.

────────────────────────────────────────────────────────────────────────
Rationale
────────────────────────────────────────────────────────────────────────
Flow shows an inverted-U relationship with sympathetic arousal (Peifer
et al., 2014): too relaxed and engagement drops, too stressed and
performance suffers.  We therefore reward *moderate* values:

    base score                                   50
    RMSSD in [30, 60] ms                        +25
    RMSSD > 60 ms          (possibly too relaxed) +15
    RMSSD in (20, 30) ms   (slightly stressed)   +10
    LF/HF in [1.0, 2.0]                         +20
    LF/HF in (0.5, 3.0)                         +10

The sum is then scaled by data confidence (Low ×0.7, Medium ×0.85,
High ×1.0) and clamped to [0, 100].
────────────────────────────────────────────────────────────────────────
"""

from typing import Optional

from config import (
    FLOW_ACCEPTABLE_LF_HF,
    FLOW_BASE_SCORE,
    FLOW_CONFIDENCE_FACTORS,
    FLOW_OPTIMAL_LF_HF,
    FLOW_OPTIMAL_RMSSD,
    RMSSD_VERY_LOW_MS,
)
from model.baseline import compare_to_baseline
from model.schemas import FlowHRVAssessment, HRVMetrics
from utils.logger import get_logger

logger = get_logger("model.flow")


def _rmssd_bonus(rmssd: float) -> float:
    low, high = FLOW_OPTIMAL_RMSSD
    if low <= rmssd <= high:
        return 25.0
    if rmssd > high:
        return 15.0
    if rmssd > RMSSD_VERY_LOW_MS:
        return 10.0
    return 0.0      # very low RMSSD indicates stress


def _ratio_bonus(ratio: Optional[float]) -> float:
    if ratio is None:
        return 0.0
    if FLOW_OPTIMAL_LF_HF[0] <= ratio <= FLOW_OPTIMAL_LF_HF[1]:
        return 20.0
    if FLOW_ACCEPTABLE_LF_HF[0] < ratio < FLOW_ACCEPTABLE_LF_HF[1]:
        return 10.0
    return 0.0


def evaluate_flow_potential(
    metrics: HRVMetrics,
    baseline_rmssd: Optional[float] = None,
) -> FlowHRVAssessment:
    """
    Score how favourable an HRV record is for sustained deep focus.

    Parameters
    ----------
    metrics        : HRVMetrics       Output of `engine.metrics.calculate_metrics`.
    baseline_rmssd : float | None     Optional personal resting RMSSD (ms).
                                      When positive, the percentage deviation
                                      is attached to the result; it does not
                                      change the score.

    Returns
    -------
    FlowHRVAssessment with an integer score in [0, 100].
    """
    if not metrics.is_valid:
        logger.warning("Metrics invalid — flow potential not assessed.")
        return FlowHRVAssessment(
            score=0,
            interpretation="Invalid HRV data",
            recommendation="Ensure the sensor is positioned correctly",
        )

    score = FLOW_BASE_SCORE
    score += _rmssd_bonus(metrics.rmssd)
    score += _ratio_bonus(metrics.lf_hf_ratio)
    score *= FLOW_CONFIDENCE_FACTORS[metrics.confidence_level.value]

    if score >= 70:
        interpretation = "HRV pattern supports flow state"
        recommendation = "Optimal conditions for deep focus"
    elif score >= 50:
        interpretation = "HRV pattern is acceptable for focus"
        recommendation = "Consider a brief centering exercise"
    elif score >= 30:
        interpretation = "HRV suggests elevated stress"
        recommendation = "Take a few deep breaths before starting"
    else:
        interpretation = "HRV indicates high stress or fatigue"
        recommendation = "Consider rest before deep work"

    deviation = None
    if baseline_rmssd is not None and baseline_rmssd > 0:
        deviation, _ = compare_to_baseline(metrics.rmssd, baseline_rmssd)

    final_score = int(min(100.0, max(0.0, score)))
    logger.info("Flow potential: score=%d (%s)", final_score, interpretation)

    return FlowHRVAssessment(
        score=final_score,
        interpretation=interpretation,
        recommendation=recommendation,
        baseline_deviation=deviation,
    )
