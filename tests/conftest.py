"""Shared fixtures: raw row builders, record builders and sample CSV files."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Any

import polars as pl
import pytest

from dpwh.domain.models import Dataset, ProjectRecord
from dpwh.ingestion import dataset_frame

HEADER = [
    "MainIsland",
    "Region",
    "Province",
    "LegislativeDistrict",
    "Municipality",
    "DistrictEngineeringOffice",
    "ProjectId",
    "ProjectName",
    "TypeOfWork",
    "FundingYear",
    "ContractId",
    "ApprovedBudgetForContract",
    "ContractCost",
    "ActualCompletionDate",
    "Contractor",
    "ContractorCount",
    "StartDate",
]


def make_row(
    island: str = "Luzon",
    region: str = "National Capital Region",
    type_of_work: str = "Construction of Flood Mitigation Structure",
    year: str = "2022",
    budget: str = "1,000.00",
    cost: str = "800.00",
    end: str = "2022-03-11",
    contractor: str = "Alpha Builders",
    start: str = "2022-03-01",
) -> list[str]:
    row = ["x"] * len(HEADER)
    row[0] = island
    row[1] = region
    row[8] = type_of_work
    row[9] = year
    row[11] = budget
    row[12] = cost
    row[13] = end
    row[14] = contractor
    row[16] = start
    return row


def make_record(**overrides: Any) -> ProjectRecord:
    values: dict[str, Any] = {
        "region": "National Capital Region",
        "main_island": "Luzon",
        "contractor": "Alpha Builders",
        "funding_year": 2022,
        "type_of_work": "Construction of Flood Mitigation Structure",
        "approved_budget": 1000.0,
        "contract_cost": 800.0,
        "completion_delay_days": 10,
    }
    values.update(overrides)
    return ProjectRecord(**values)


def make_dataset(records: list[ProjectRecord]) -> Dataset:
    return Dataset(records=tuple(records), total_rows=len(records))


def frame_of(records: list[ProjectRecord]) -> pl.DataFrame:
    return dataset_frame(make_dataset(records))


def write_csv(path: Path, rows: list[list[str]]) -> Path:
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow(HEADER)
        writer.writerows(rows)
    return path


@pytest.fixture
def sample_rows() -> list[list[str]]:
    rows: list[list[str]] = []
    for idx in range(6):
        rows.append(
            make_row(
                contractor="Alpha Builders",
                year=str(2021 + idx % 3),
                budget=f"{1000 + idx * 100:,}.00",
                cost="900.00",
                start="2021-01-01",
                end=f"2021-01-{11 + idx:02d}",
            )
        )
    for idx in range(4):
        rows.append(
            make_row(
                region="Region VII",
                island="Visayas",
                contractor="Beta Construction",
                type_of_work="Rehabilitation of Drainage",
                year="2023",
                budget="500.00",
                cost="650.00",
                start="2023-05-01",
                end="2023-07-15",
            )
        )
    rows.append(make_row(year="2020"))
    rows.append(make_row(contractor=" "))
    rows.append(make_row(budget="not-a-number"))
    rows.append(make_row(start="01/05/2022"))
    return rows


@pytest.fixture
def sample_csv(tmp_path: Path, sample_rows: list[list[str]]) -> Path:
    return write_csv(tmp_path / "projects.csv", sample_rows)
