from pydantic import ValidationError
import pytest

from engine.metrics import calculate_metrics
from model.flow import evaluate_flow_potential
from model.schemas import HRVMetrics, SpectralMetrics


def make_metrics(rmssd=45.0, ratio=1.5, sample_count=300, window=300.0, artifacts=0.0, valid=True):
    spectral = None
    if ratio is not None:
        spectral = SpectralMetrics(
            vlf_power=10.0, lf_power=ratio * 20.0, hf_power=20.0,
            total_power=10.0 + ratio * 20.0 + 20.0, lf_hf_ratio=ratio,
        )
    return HRVMetrics(
        rmssd=rmssd, sdnn=50.0, sdsd=40.0, pnn50=20.0, nn50=60,
        mean_rr=850.0, mean_hr=60000.0 / 850.0, spectral=spectral,
        sample_count=sample_count, artifact_count=0, artifact_percentage=artifacts,
        window_duration_seconds=window, is_valid=valid,
    )


def test_invalid_metrics_score_zero():
    assessment = evaluate_flow_potential(calculate_metrics([800.0] * 5, 4.0))
    assert assessment.score == 0
    assert assessment.interpretation == "Invalid HRV data"


def test_optimal_pattern_high_confidence():
    assessment = evaluate_flow_potential(make_metrics())
    assert assessment.score == 95
    assert assessment.interpretation == "HRV pattern supports flow state"
    assert assessment.recommendation == "Optimal conditions for deep focus"
    assert assessment.baseline_deviation is None


def test_acceptable_ratio_and_relaxed_rmssd():
    # 50 + 15 + 10 = 75 at high confidence
    assessment = evaluate_flow_potential(make_metrics(rmssd=80.0, ratio=2.5))
    assert assessment.score == 75


def test_no_spectral_medium_confidence():
    # (50 + 25) × 0.85 = 63.75
    assessment = evaluate_flow_potential(make_metrics(rmssd=45.0, ratio=None, window=45.0))
    assert assessment.score == 63
    assert assessment.interpretation == "HRV pattern is acceptable for focus"


def test_low_confidence_stress():
    # constant series: RMSSD 0 and only 10 beats → 50 × 0.7
    assessment = evaluate_flow_potential(calculate_metrics([800.0] * 10, 8.0))
    assert assessment.score == 35
    assert assessment.interpretation == "HRV suggests elevated stress"
    assert assessment.recommendation == "Take a few deep breaths before starting"


def test_no_bonus_for_very_low_rmssd_or_extreme_ratio():
    assessment = evaluate_flow_potential(make_metrics(rmssd=10.0, ratio=5.0))
    assert assessment.score == 50


def test_baseline_deviation_attached():
    assessment = evaluate_flow_potential(make_metrics(rmssd=45.0), baseline_rmssd=50.0)
    assert assessment.baseline_deviation == pytest.approx(-10.0)
    assert assessment.score == 95


def test_assessment_is_frozen():
    assessment = evaluate_flow_potential(make_metrics())
    with pytest.raises(ValidationError):
        assessment.score = 10
