"""Domain policies for efficiency, reliability and year-over-year scoring."""

from __future__ import annotations

FUNDING_YEAR_MIN = 2021
FUNDING_YEAR_MAX = 2023
HIGH_DELAY_THRESHOLD_DAYS = 30
DELAY_EPSILON = 0.001
DELAY_NORMALISER_DAYS = 90.0
MIN_CONTRACTOR_PROJECTS = 5
TOP_CONTRACTOR_LIMIT = 15
RISK_THRESHOLD = 50.0
HIGH_RISK = "High Risk"
LOW_RISK = "Low Risk"


def in_funding_window(year: int) -> bool:
    return FUNDING_YEAR_MIN <= year <= FUNDING_YEAR_MAX


def efficiency_score(median_savings: float, avg_delay: float) -> float:
    """Median savings per day of average delay, scaled x100 and clamped to [0, 100]."""
    if abs(avg_delay) > DELAY_EPSILON:
        raw = (median_savings / avg_delay) * 100.0
    else:
        raw = 0.0
    return min(max(raw, 0.0), 100.0)


def reliability_index(avg_delay: float, total_savings: float, total_cost: float) -> float:
    """Delay factor times savings ratio, x100, capped at 100 with no floor."""
    cost = 1.0 if total_cost == 0 else total_cost
    delay_factor = 1.0 - (avg_delay / DELAY_NORMALISER_DAYS)
    savings_factor = total_savings / cost
    return min(delay_factor * savings_factor * 100.0, 100.0)


def risk_flag(index: float) -> str:
    return HIGH_RISK if index < RISK_THRESHOLD else LOW_RISK


def yoy_change(funding_year: int, avg_savings: float, prior_avg_savings: float | None) -> float:
    """Percent change of average savings against the same work type one year earlier.

    The first funding year is the baseline and always yields 0. A missing prior
    year also yields 0. A prior average of exactly zero yields 100 when the
    current average is positive, else 0.
    """
    if funding_year == FUNDING_YEAR_MIN or prior_avg_savings is None:
        return 0.0
    if prior_avg_savings == 0:
        return 100.0 if avg_savings > 0 else 0.0
    return ((avg_savings - prior_avg_savings) / abs(prior_avg_savings)) * 100.0
