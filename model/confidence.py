"""
model/confidence.py — Data-quality and RMSSD classification
=============================================================
Two independent, pure classifications attached to every `HRVMetrics`:

* **Confidence level** from (artifact ratio, sample count, window length).
  The rules overlap, so they are evaluated in priority order:

      artifacts > 5 %  or  samples < 30           →  Low
      window < 30 s                               →  Medium
      window ≥ 60 s  and  artifacts < 2 %         →  High
      otherwise                                   →  Medium

* **RMSSD interpretation** from the RMSSD value alone, using population
  norms (Shaffer & Ginsberg 2017).
"""

from enum import Enum

from config import (
    CONFIDENCE_HIGH_ARTIFACT,
    CONFIDENCE_HIGH_WINDOW_SECONDS,
    CONFIDENCE_LOW_ARTIFACT,
    CONFIDENCE_MEDIUM_WINDOW_SECONDS,
    CONFIDENCE_MIN_SAMPLES,
    RMSSD_GOOD_MS,
    RMSSD_LOW_MS,
    RMSSD_NORMAL_MS,
    RMSSD_VERY_LOW_MS,
)


class ConfidenceLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @property
    def description(self) -> str:
        return {
            ConfidenceLevel.LOW: "Limited data quality - interpret with caution",
            ConfidenceLevel.MEDIUM: "Acceptable data quality",
            ConfidenceLevel.HIGH: "Research-grade data quality",
        }[self]


class RMSSDInterpretation(str, Enum):
    VERY_LOW = "Very Low"
    LOW = "Low"
    NORMAL = "Normal"
    GOOD = "Good"
    EXCELLENT = "Excellent"

    @property
    def description(self) -> str:
        return {
            RMSSDInterpretation.VERY_LOW: "Consider rest and recovery",
            RMSSDInterpretation.LOW: "Below average - prioritize rest",
            RMSSDInterpretation.NORMAL: "Average parasympathetic activity",
            RMSSDInterpretation.GOOD: "Good vagal tone",
            RMSSDInterpretation.EXCELLENT: "Excellent heart rate variability",
        }[self]


def classify_confidence(
    artifact_percentage: float,
    sample_count: int,
    window_duration_seconds: float,
) -> ConfidenceLevel:
    """
    Qualitative reliability of a metrics record.

    Checked in priority order: low, then short-window medium, then high,
    otherwise medium.
    """
    if artifact_percentage > CONFIDENCE_LOW_ARTIFACT or sample_count < CONFIDENCE_MIN_SAMPLES:
        return ConfidenceLevel.LOW
    if window_duration_seconds < CONFIDENCE_MEDIUM_WINDOW_SECONDS:
        return ConfidenceLevel.MEDIUM
    if (window_duration_seconds >= CONFIDENCE_HIGH_WINDOW_SECONDS
            and artifact_percentage < CONFIDENCE_HIGH_ARTIFACT):
        return ConfidenceLevel.HIGH
    return ConfidenceLevel.MEDIUM


def interpret_rmssd(rmssd: float) -> RMSSDInterpretation:
    """Bucket an RMSSD value (ms) against population norms."""
    if rmssd < RMSSD_VERY_LOW_MS:
        return RMSSDInterpretation.VERY_LOW
    if rmssd < RMSSD_LOW_MS:
        return RMSSDInterpretation.LOW
    if rmssd < RMSSD_NORMAL_MS:
        return RMSSDInterpretation.NORMAL
    if rmssd < RMSSD_GOOD_MS:
        return RMSSDInterpretation.GOOD
    return RMSSDInterpretation.EXCELLENT


