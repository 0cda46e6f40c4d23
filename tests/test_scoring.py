"""Efficiency, reliability, risk and year-over-year rules."""

from __future__ import annotations

import pytest

from dpwh.domain.scoring import efficiency_score, reliability_index, risk_flag, yoy_change


@pytest.mark.parametrize(
    "median_savings, avg_delay, expected",
    [
        (50.0, 30.0, 100.0),
        (10.0, 40.0, 25.0),
        (-100.0, 20.0, 0.0),
        (100.0, -20.0, 0.0),
        (100.0, 0.0, 0.0),
        (100.0, 0.0005, 0.0),
        (100.0, -0.0009, 0.0),
        (0.0, 10.0, 0.0),
    ],
)
def test_efficiency_score(median_savings, avg_delay, expected):
    assert efficiency_score(median_savings, avg_delay) == pytest.approx(expected)


@pytest.mark.parametrize("median_savings", [-1e9, -5.0, 0.0, 3.0, 1e9])
@pytest.mark.parametrize("avg_delay", [-400.0, -1.0, 0.0, 0.002, 12.5, 365.0])
def test_efficiency_score_is_bounded(median_savings, avg_delay):
    assert 0.0 <= efficiency_score(median_savings, avg_delay) <= 100.0


def test_reliability_index_formula():
    # (1 - 9/90) * (100 / 400) * 100
    assert reliability_index(avg_delay=9.0, total_savings=100.0, total_cost=400.0) == pytest.approx(22.5)


def test_reliability_index_is_capped_at_100():
    assert reliability_index(avg_delay=0.0, total_savings=5000.0, total_cost=1000.0) == 100.0


def test_reliability_index_zero_cost_uses_unit_denominator():
    # savings / 1 * 100 would be 50
    assert reliability_index(avg_delay=0.0, total_savings=0.5, total_cost=0.0) == pytest.approx(50.0)


def test_reliability_index_has_no_floor():
    assert reliability_index(avg_delay=180.0, total_savings=100.0, total_cost=400.0) == pytest.approx(-25.0)
    assert reliability_index(avg_delay=10.0, total_savings=-400.0, total_cost=400.0) < -80.0


@pytest.mark.parametrize(
    "index, expected",
    [(-10.0, "High Risk"), (49.999, "High Risk"), (50.0, "Low Risk"), (100.0, "Low Risk")],
)
def test_risk_flag(index, expected):
    assert risk_flag(index) == expected


def test_yoy_baseline_year_is_zero():
    assert yoy_change(2021, 500.0, 100.0) == 0.0


def test_yoy_without_prior_year_is_zero():
    assert yoy_change(2023, 500.0, None) == 0.0


def test_yoy_relative_change_uses_absolute_prior():
    assert yoy_change(2022, 150.0, 100.0) == pytest.approx(50.0)
    assert yoy_change(2022, -50.0, -100.0) == pytest.approx(50.0)
    assert yoy_change(2023, -300.0, 100.0) == pytest.approx(-400.0)


@pytest.mark.parametrize("avg_savings, expected", [(10.0, 100.0), (0.0, 0.0), (-10.0, 0.0)])
def test_yoy_zero_prior(avg_savings, expected):
    assert yoy_change(2022, avg_savings, 0.0) == expected
