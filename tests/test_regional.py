"""Regional trend grouping, statistics and ordering."""

from __future__ import annotations

import polars as pl
import pytest

from conftest import frame_of, make_record
from dpwh.regional import RegionalTrendEngine


def _savings_records(savings: list[float], region: str = "Region I") -> list:
    return [
        make_record(region=region, approved_budget=1000.0 + value, contract_cost=1000.0, completion_delay_days=5)
        for value in savings
    ]


def test_two_project_region_end_to_end():
    records = [
        make_record(approved_budget=1000.0, contract_cost=800.0, funding_year=2021, completion_delay_days=10),
        make_record(approved_budget=500.0, contract_cost=600.0, funding_year=2021, completion_delay_days=50),
    ]

    (row,) = RegionalTrendEngine().run(frame_of(records))

    assert row.total_budget == pytest.approx(1500.0)
    assert row.median_savings == pytest.approx(50.0)
    assert row.avg_delay == pytest.approx(30.0)
    assert row.high_delay_pct == pytest.approx(50.0)
    assert row.efficiency_score == pytest.approx(100.0)


@pytest.mark.parametrize(
    "savings, expected",
    [([10.0, 20.0], 15.0), ([30.0, 10.0, 20.0], 20.0), ([7.0], 7.0), ([-5.0, 1.0, 2.0, 40.0], 1.5)],
)
def test_median_savings(savings, expected):
    (row,) = RegionalTrendEngine().run(frame_of(_savings_records(savings)))

    assert row.median_savings == pytest.approx(expected)


def test_median_of_empty_column_is_zero():
    empty = pl.DataFrame({"cost_savings": []}, schema={"cost_savings": pl.Float64})

    assert empty.select(RegionalTrendEngine.median_savings_expr()).item() == 0.0


def test_unknown_delays_are_excluded_from_average_and_percentage():
    records = [
        make_record(completion_delay_days=40),
        make_record(completion_delay_days=20),
        make_record(completion_delay_days=None),
    ]

    (row,) = RegionalTrendEngine().run(frame_of(records))

    assert row.avg_delay == pytest.approx(30.0)
    assert row.high_delay_pct == pytest.approx(50.0)


def test_group_without_known_delay_scores_zero():
    records = [make_record(completion_delay_days=None), make_record(completion_delay_days=None)]

    (row,) = RegionalTrendEngine().run(frame_of(records))

    assert row.avg_delay == 0.0
    assert row.high_delay_pct == 0.0
    assert row.efficiency_score == 0.0


def test_delay_of_exactly_thirty_is_not_high():
    (row,) = RegionalTrendEngine().run(frame_of([make_record(completion_delay_days=30)]))

    assert row.high_delay_pct == 0.0


def test_negative_average_delay_clamps_to_zero():
    (row,) = RegionalTrendEngine().run(frame_of([make_record(completion_delay_days=-12)]))

    assert row.avg_delay == pytest.approx(-12.0)
    assert row.efficiency_score == 0.0


def test_groups_by_region_and_island_case_sensitively():
    records = [
        make_record(region="Region X", main_island="Mindanao"),
        make_record(region="REGION X", main_island="Mindanao"),
        make_record(region="Region X", main_island="Visayas"),
        make_record(region="Region X", main_island="Mindanao"),
    ]

    rows = RegionalTrendEngine().run(frame_of(records))

    keys = sorted((row.region, row.main_island) for row in rows)
    assert keys == [("REGION X", "Mindanao"), ("Region X", "Mindanao"), ("Region X", "Visayas")]


def test_sorted_by_efficiency_descending_with_key_tie_break():
    records = [
        # efficiency 100 (capped)
        make_record(region="Region B", approved_budget=2000.0, contract_cost=1000.0, completion_delay_days=10),
        make_record(region="Region A", approved_budget=2000.0, contract_cost=1000.0, completion_delay_days=10),
        # efficiency 25
        make_record(region="Region C", approved_budget=1010.0, contract_cost=1000.0, completion_delay_days=40),
        # efficiency 0
        make_record(region="Region D", approved_budget=900.0, contract_cost=1000.0, completion_delay_days=10),
    ]

    rows = RegionalTrendEngine().run(frame_of(records))

    assert [row.region for row in rows] == ["Region A", "Region B", "Region C", "Region D"]
    assert [row.efficiency_score for row in rows] == pytest.approx([100.0, 100.0, 25.0, 0.0])
    assert all(0.0 <= row.efficiency_score <= 100.0 for row in rows)


def test_empty_frame_yields_no_rows():
    assert RegionalTrendEngine().run(frame_of([])) == []


def test_missing_columns_raise():
    with pytest.raises(ValueError, match="Missing required columns"):
        RegionalTrendEngine().run(pl.DataFrame({"region": ["Region I"]}))
