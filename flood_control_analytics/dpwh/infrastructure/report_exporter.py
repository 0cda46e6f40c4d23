"""Infrastructure adapter for report export targets."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Sequence

import polars as pl

from dpwh.domain.models import AnnualMetric, ContractorRanking, RegionalTrend, SummaryDigest

REGIONAL_REPORT_FILE = "report1_regional_summary.csv"
CONTRACTOR_REPORT_FILE = "report2_contractor_ranking.csv"
ANNUAL_REPORT_FILE = "report3_annual_trends.csv"
SUMMARY_JSON_FILE = "summary.json"
SUMMARY_WORKBOOK_FILE = "summary.xlsx"


def rows_frame(rows: Sequence[Any], columns: Sequence[str]) -> pl.DataFrame:
    if not rows:
        return pl.DataFrame({column: [] for column in columns})
    return pl.DataFrame([row.as_row() for row in rows]).select(list(columns))


def regional_frame(rows: Sequence[RegionalTrend]) -> pl.DataFrame:
    return rows_frame(rows, RegionalTrend.columns())


def contractor_frame(rows: Sequence[ContractorRanking]) -> pl.DataFrame:
    return rows_frame(rows, ContractorRanking.columns())


def annual_frame(rows: Sequence[AnnualMetric]) -> pl.DataFrame:
    return rows_frame(rows, AnnualMetric.columns())


def summary_frame(summary: SummaryDigest) -> pl.DataFrame:
    return rows_frame([summary], SummaryDigest.columns())


def save_report_csv(path: Path, frame: pl.DataFrame) -> tuple[bool, str]:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        frame.write_csv(path)
    except (OSError, pl.exceptions.PolarsError) as exc:
        return False, str(exc)
    return True, ""


def save_summary_json(path: Path, summary: dict[str, Any]) -> tuple[bool, str]:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(summary, indent=2, ensure_ascii=False), encoding="utf-8")
    except OSError as exc:
        return False, str(exc)
    return True, ""
