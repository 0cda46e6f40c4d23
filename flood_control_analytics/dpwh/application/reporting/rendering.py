"""Fixed-width console tables for the three reports."""

from __future__ import annotations

from typing import List, Sequence

from dpwh.application.reporting.metrics import fmt_amount, fmt_days, fmt_pct, truncate
from dpwh.domain.models import AnnualMetric, ContractorRanking, Dataset, RegionalTrend
from dpwh.domain.scoring import FUNDING_YEAR_MAX, FUNDING_YEAR_MIN, MIN_CONTRACTOR_PROJECTS


def _rule(width: int) -> str:
    return "-" * width


def _block(title: str, subtitle: str, header: str, body: List[str], width: int, exported_to: str) -> str:
    lines = [
        "",
        _rule(width),
        title,
        subtitle,
        _rule(width),
        header,
        _rule(width),
        *body,
        _rule(width),
        f"Table exported to {exported_to}",
    ]
    return "\n".join(lines)


def render_regional_table(rows: Sequence[RegionalTrend], exported_to: str) -> str:
    width = 130
    header = (
        f"{'Region':<20} | {'Main Island':<15} | {'Total Budget':>18} | {'Median Savings':>18} | "
        f"{'Avg Delay':>12} | {'High Delay %':>13} | {'Efficiency':>12}"
    )
    body = [
        f"{truncate(row.region, 20):<20} | {truncate(row.main_island, 15):<15} | "
        f"{fmt_amount(row.total_budget):>18} | {fmt_amount(row.median_savings):>18} | "
        f"{fmt_days(row.avg_delay):>12} | {fmt_pct(row.high_delay_pct):>13} | {fmt_amount(row.efficiency_score):>12}"
        for row in rows
    ]
    return _block(
        "Report 1: Regional Flood Mitigation Efficiency Summary",
        f"(Filtered: {FUNDING_YEAR_MIN}-{FUNDING_YEAR_MAX} Projects)",
        header,
        body,
        width,
        exported_to,
    )


def render_contractor_table(rows: Sequence[ContractorRanking], exported_to: str) -> str:
    width = 140
    header = (
        f"{'Rank':<5} | {'Contractor':<40} | {'Total Cost':>18} | {'Projects':>10} | {'Avg Delay':>12} | "
        f"{'Total Savings':>18} | {'Reliability':>12} | {'Risk Flag':<10}"
    )
    body = [
        f"{row.rank:<5} | {truncate(row.contractor, 40):<40} | {fmt_amount(row.total_cost):>18} | "
        f"{row.num_projects:>10} | {fmt_days(row.avg_delay):>12} | {fmt_amount(row.total_savings):>18} | "
        f"{fmt_amount(row.reliability_index):>12} | {row.risk_flag:<10}"
        for row in rows
    ]
    return _block(
        "Report 2: Top Contractors Performance Ranking",
        f"(Top {len(rows)} by Total Contract Cost, >={MIN_CONTRACTOR_PROJECTS} Projects)",
        header,
        body,
        width,
        exported_to,
    )


def render_annual_table(rows: Sequence[AnnualMetric], exported_to: str) -> str:
    width = 120
    header = (
        f"{'Year':<6} | {'Type of Work':<45} | {'Projects':>10} | {'Avg Savings':>18} | "
        f"{'Overrun %':>12} | {'YoY Change %':>13}"
    )
    body = [
        f"{row.funding_year:<6} | {truncate(row.type_of_work, 45):<45} | {row.total_projects:>10} | "
        f"{fmt_amount(row.avg_savings):>18} | {fmt_pct(row.overrun_rate):>12} | {fmt_pct(row.yoy_change):>13}"
        for row in rows
    ]
    return _block(
        "Report 3: Annual Project Type Cost Overrun Trends",
        "(Grouped by FundingYear and TypeOfWork)",
        header,
        body,
        width,
        exported_to,
    )


def load_banner(dataset: Dataset) -> str:
    return (
        f"SUCCESS: {dataset.total_rows} rows loaded, {dataset.kept_rows} rows kept for "
        f"{FUNDING_YEAR_MIN}-{FUNDING_YEAR_MAX} "
        f"(skipped {dataset.skipped_rows}: {dataset.filtered_rows} filtered, {dataset.errored_rows} parse errors)"
    )
