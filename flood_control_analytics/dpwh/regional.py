"""Regional Trend Engine: budget, savings and delay efficiency per region/island."""

from __future__ import annotations

from typing import Any, List

import polars as pl

from dpwh.domain.models import RegionalTrend
from dpwh.domain.scoring import HIGH_DELAY_THRESHOLD_DAYS, efficiency_score


class RegionalTrendEngine:
    """Group projects by (region, main island) and score delivery efficiency."""

    DIMENSIONS: List[str] = ["region", "main_island"]
    INPUT_COLUMNS: List[str] = ["approved_budget", "cost_savings", "completion_delay_days"]

    @staticmethod
    def _to_float(value: Any, default: float = 0.0) -> float:
        if value is None:
            return default
        return float(value)

    @staticmethod
    def median_savings_expr() -> pl.Expr:
        return pl.col("cost_savings").median().fill_null(0.0).alias("median_savings")

    @staticmethod
    def _known_delay_count_expr() -> pl.Expr:
        return pl.col("completion_delay_days").is_not_null().sum()

    @staticmethod
    def _high_delay_count_expr() -> pl.Expr:
        return (pl.col("completion_delay_days") > HIGH_DELAY_THRESHOLD_DAYS).fill_null(False).sum()

    def _validate_schema(self, df: pl.DataFrame) -> None:
        required = set(self.DIMENSIONS + self.INPUT_COLUMNS)
        missing = sorted(required.difference(df.columns))
        if missing:
            raise ValueError(f"Missing required columns: {missing}")

    def _group_frame(self, df: pl.DataFrame) -> pl.DataFrame:
        known = self._known_delay_count_expr()
        return (
            df.group_by(self.DIMENSIONS)
            .agg(
                [
                    pl.col("approved_budget").sum().alias("total_budget"),
                    self.median_savings_expr(),
                    pl.col("completion_delay_days").cast(pl.Float64).mean().fill_null(0.0).alias("avg_delay"),
                    pl.when(known > 0)
                    .then(self._high_delay_count_expr() / known * 100.0)
                    .otherwise(0.0)
                    .alias("high_delay_pct"),
                ]
            )
        )

    def _dims_sort_key(self, row: RegionalTrend) -> tuple[float, str, str]:
        return (-row.efficiency_score, row.region, row.main_island)

    def run(self, df: pl.DataFrame) -> list[RegionalTrend]:
        self._validate_schema(df)
        if df.is_empty():
            return []

        rows: list[RegionalTrend] = []
        for group in self._group_frame(df).to_dicts():
            median_savings = self._to_float(group.get("median_savings"))
            avg_delay = self._to_float(group.get("avg_delay"))
            rows.append(
                RegionalTrend(
                    region=str(group.get("region", "")),
                    main_island=str(group.get("main_island", "")),
                    total_budget=self._to_float(group.get("total_budget")),
                    median_savings=median_savings,
                    avg_delay=avg_delay,
                    high_delay_pct=self._to_float(group.get("high_delay_pct")),
                    efficiency_score=efficiency_score(median_savings, avg_delay),
                )
            )
        rows.sort(key=self._dims_sort_key)
        return rows
