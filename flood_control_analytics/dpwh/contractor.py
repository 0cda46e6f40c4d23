"""Contractor Ranking Engine: cost ranking, reliability index and risk flag."""

from __future__ import annotations

from typing import Any, List, Sequence

import polars as pl

from dpwh.domain.models import ContractorRanking
from dpwh.domain.scoring import MIN_CONTRACTOR_PROJECTS, TOP_CONTRACTOR_LIMIT, reliability_index, risk_flag


class ContractorRankingEngine:
    """Rank contractors with enough projects by total contract cost."""

    DIMENSIONS: List[str] = ["contractor"]
    INPUT_COLUMNS: List[str] = ["contract_cost", "cost_savings", "completion_delay_days"]

    def __init__(self, min_projects: int = MIN_CONTRACTOR_PROJECTS) -> None:
        self.min_projects = min_projects

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
                    pl.len().alias("num_projects"),
                    pl.col("contract_cost").sum().alias("total_cost"),
                    pl.col("cost_savings").sum().alias("total_savings"),
                    pl.col("completion_delay_days").cast(pl.Float64).mean().fill_null(0.0).alias("avg_delay"),
                ]
            )
            .filter(pl.col("num_projects") >= self.min_projects)
            .sort(["total_cost", "contractor"], descending=[True, False])
        )

    def run(self, df: pl.DataFrame) -> list[ContractorRanking]:
        """Return the full qualifying list, ranked 1..N by total cost."""
        self._validate_schema(df)
        if df.is_empty():
            return []

        rows: list[ContractorRanking] = []
        for rank, group in enumerate(self._group_frame(df).to_dicts(), start=1):
            total_cost = self._to_float(group.get("total_cost"))
            total_savings = self._to_float(group.get("total_savings"))
            avg_delay = self._to_float(group.get("avg_delay"))
            index = reliability_index(avg_delay, total_savings, total_cost)
            rows.append(
                ContractorRanking(
                    rank=rank,
                    contractor=str(group.get("contractor", "")),
                    total_cost=total_cost,
                    num_projects=int(group.get("num_projects") or 0),
                    avg_delay=avg_delay,
                    total_savings=total_savings,
                    reliability_index=index,
                    risk_flag=risk_flag(index),
                )
            )
        return rows


def top_ranked(rows: Sequence[ContractorRanking], limit: int = TOP_CONTRACTOR_LIMIT) -> list[ContractorRanking]:
    return list(rows[:limit])
