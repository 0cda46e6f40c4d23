"""Application service running the three report engines and the summary pass."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import polars as pl

from dpwh.annual import AnnualPerformanceEngine
from dpwh.contractor import ContractorRankingEngine, top_ranked
from dpwh.domain.models import AnnualMetric, ContractorRanking, Dataset, RegionalTrend, SummaryDigest
from dpwh.domain.scoring import TOP_CONTRACTOR_LIMIT
from dpwh.ingestion import dataset_frame
from dpwh.regional import RegionalTrendEngine


@dataclass(frozen=True)
class AnalysisResult:
    regional_trends: list[RegionalTrend]
    contractor_rankings: list[ContractorRanking]
    annual_metrics: list[AnnualMetric]
    summary: SummaryDigest
    top_contractor_limit: int = TOP_CONTRACTOR_LIMIT

    @property
    def top_contractors(self) -> list[ContractorRanking]:
        return top_ranked(self.contractor_rankings, limit=self.top_contractor_limit)


def build_summary_digest(df: pl.DataFrame, rankings: Sequence[ContractorRanking]) -> SummaryDigest:
    """Dataset-wide totals; contractor count uses the full ranking, not the top slice."""
    if df.is_empty():
        return SummaryDigest(
            total_projects_analyzed=0,
            total_budget_analyzed=0.0,
            global_avg_delay=0.0,
            total_contractors=len(rankings),
            total_regions=0,
        )

    totals = df.select(
        [
            pl.len().alias("projects"),
            pl.col("approved_budget").sum().alias("budget"),
            pl.col("completion_delay_days").cast(pl.Float64).mean().fill_null(0.0).alias("avg_delay"),
            pl.col("region").n_unique().alias("regions"),
        ]
    ).to_dicts()[0]
    return SummaryDigest(
        total_projects_analyzed=int(totals["projects"]),
        total_budget_analyzed=float(totals["budget"] or 0.0),
        global_avg_delay=float(totals["avg_delay"] or 0.0),
        total_contractors=len(rankings),
        total_regions=int(totals["regions"]),
    )


def run_dataset_analysis(dataset: Dataset, top_contractor_limit: int = TOP_CONTRACTOR_LIMIT) -> AnalysisResult:
    """Run regional, contractor and annual passes over one immutable dataset."""
    df = dataset_frame(dataset)

    regional_trends = RegionalTrendEngine().run(df)
    contractor_rankings = ContractorRankingEngine().run(df)
    annual_metrics = AnnualPerformanceEngine().run(df)
    summary = build_summary_digest(df, contractor_rankings)

    return AnalysisResult(
        regional_trends=regional_trends,
        contractor_rankings=contractor_rankings,
        annual_metrics=annual_metrics,
        summary=summary,
        top_contractor_limit=top_contractor_limit,
    )
