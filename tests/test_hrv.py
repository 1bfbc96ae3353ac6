import math

import pytest

from features.hrv import approximate_rmssd_from_sdnn, compute_time_domain


def test_constant_series_has_zero_variability(constant_series):
    td = compute_time_domain(constant_series)
    assert td["rmssd"] == 0.0
    assert td["sdnn"] == 0.0
    assert td["sdsd"] == 0.0
    assert td["pnn50"] == 0.0
    assert td["nn50"] == 0
    assert td["mean_rr"] == 800.0
    assert td["mean_hr"] == pytest.approx(75.0)


def test_known_values_alternating_series():
    td = compute_time_domain([800.0, 850.0, 800.0, 850.0])
    # successive differences: +50, -50, +50
    assert td["rmssd"] == pytest.approx(50.0)
    assert td["sdnn"] == pytest.approx(math.sqrt(2500.0 / 3))
    assert td["sdsd"] == pytest.approx(math.sqrt((6666.0 + 2.0 / 3) / 2))
    # |50| is not strictly above the threshold
    assert td["nn50"] == 0
    assert td["pnn50"] == 0.0
    assert td["mean_rr"] == pytest.approx(825.0)


def test_pnn50_counts_strictly_larger_differences():
    td = compute_time_domain([1000.0, 1060.0, 1000.0])
    assert td["nn50"] == 2
    assert td["pnn50"] == pytest.approx(100.0)
    assert td["rmssd"] == pytest.approx(60.0)
    assert td["sdsd"] == pytest.approx(math.sqrt(7200.0))
    assert td["mean_hr"] == pytest.approx(60000.0 / (3060.0 / 3))


def test_single_difference_has_zero_sdsd():
    td = compute_time_domain([800.0, 900.0])
    assert td["rmssd"] == pytest.approx(100.0)
    assert td["sdsd"] == 0.0


@pytest.mark.parametrize("series", [[], [800.0]])
def test_degrades_to_zero_below_two_samples(series):
    td = compute_time_domain(series)
    assert td["rmssd"] == 0.0
    assert td["sdnn"] == 0.0
    assert td["nn50"] == 0


def test_metrics_are_non_negative_and_pnn50_bounded(resting_series):
    td = compute_time_domain(resting_series)
    assert td["rmssd"] >= 0
    assert td["sdnn"] >= 0
    assert 0.0 <= td["pnn50"] <= 100.0


def test_rmssd_approximation_from_sdnn():
    assert approximate_rmssd_from_sdnn(30.0) == pytest.approx(42.0)
    assert approximate_rmssd_from_sdnn(0.0) == 0.0
