"""Annual Performance Engine: savings, overrun rate and year-over-year change."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Tuple

import polars as pl

from dpwh.domain.models import AnnualMetric
from dpwh.domain.scoring import yoy_change

SavingsLookup = Mapping[Tuple[int, str], float]


class AnnualPerformanceEngine:
    """Per (funding year, type of work) metrics with a prior-year comparison."""

    DIMENSIONS: List[str] = ["funding_year", "type_of_work"]
    INPUT_COLUMNS: List[str] = ["approved_budget", "contract_cost", "cost_savings"]

    @staticmethod
    def _to_float(value: Any, default: float = 0.0) -> float:
        if value is None:
            return default
        return float(value)

    def _validate_schema(self, df: pl.DataFrame) -> None:
        required = set(self.DIMENSIONS + self.INPUT_COLUMNS)
        missing = sorted(required.difference(df.columns))
        if missing:
            raise ValueError(f"Missing required columns: {missing}")

    def _group_frame(self, df: pl.DataFrame) -> pl.DataFrame:
        return (
            df.group_by(self.DIMENSIONS)
            .agg(
                [
                    pl.len().alias("total_projects"),
                    pl.col("cost_savings").mean().alias("avg_savings"),
                    ((pl.col("contract_cost") > pl.col("approved_budget")).sum() / pl.len() * 100.0).alias(
                        "overrun_rate"
                    ),
                ]
            )
            .sort(
                ["funding_year", "avg_savings", "type_of_work"],
                descending=[False, True, False],
            )
        )

    def build_savings_lookup(self, grouped: pl.DataFrame) -> Dict[Tuple[int, str], float]:
        return {
            (int(row["funding_year"]), str(row["type_of_work"])): self._to_float(row["avg_savings"])
            for row in grouped.select(["funding_year", "type_of_work", "avg_savings"]).to_dicts()
        }

    def run(self, df: pl.DataFrame) -> list[AnnualMetric]:
        self._validate_schema(df)
        if df.is_empty():
            return []

        grouped = self._group_frame(df)
        lookup: SavingsLookup = self.build_savings_lookup(grouped)

        rows: list[AnnualMetric] = []
        for group in grouped.to_dicts():
            year = int(group["funding_year"])
            work_type = str(group.get("type_of_work", ""))
            avg_savings = self._to_float(group.get("avg_savings"))
            rows.append(
                AnnualMetric(
                    funding_year=year,
                    type_of_work=work_type,
                    total_projects=int(group.get("total_projects") or 0),
                    avg_savings=avg_savings,
                    overrun_rate=self._to_float(group.get("overrun_rate")),
                    yoy_change=yoy_change(year, avg_savings, lookup.get((year - 1, work_type))),
                )
            )
        return rows
