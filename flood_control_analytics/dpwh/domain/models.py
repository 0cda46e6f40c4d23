"""Domain models for flood control project analytics."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any


@dataclass(frozen=True)
class ProjectRecord:
    """One validated project row."""

    region: str
    main_island: str
    contractor: str
    funding_year: int
    type_of_work: str
    approved_budget: float
    contract_cost: float
    completion_delay_days: int | None = None

    @property
    def cost_savings(self) -> float:
        return self.approved_budget - self.contract_cost

    def as_row(self) -> dict[str, Any]:
        return {
            "region": self.region,
            "main_island": self.main_island,
            "contractor": self.contractor,
            "funding_year": self.funding_year,
            "type_of_work": self.type_of_work,
            "approved_budget": self.approved_budget,
            "contract_cost": self.contract_cost,
            "cost_savings": self.cost_savings,
            "completion_delay_days": self.completion_delay_days,
        }


@dataclass(frozen=True)
class Dataset:
    """Kept records in arrival order plus the load tallies."""

    records: tuple[ProjectRecord, ...]
    total_rows: int
    filtered_rows: int = 0
    errored_rows: int = 0

    @property
    def skipped_rows(self) -> int:
        return self.filtered_rows + self.errored_rows

    @property
    def kept_rows(self) -> int:
        return len(self.records)

    def is_empty(self) -> bool:
        return not self.records


class _ReportRow:
    @classmethod
    def columns(cls) -> list[str]:
        return [item.name for item in fields(cls)]  # type: ignore[arg-type]

    def as_row(self) -> dict[str, Any]:
        return asdict(self)  # type: ignore[call-overload]


@dataclass(frozen=True)
class RegionalTrend(_ReportRow):
    region: str
    main_island: str
    total_budget: float
    median_savings: float
    avg_delay: float
    high_delay_pct: float
    efficiency_score: float


@dataclass(frozen=True)
class ContractorRanking(_ReportRow):
    rank: int
    contractor: str
    total_cost: float
    num_projects: int
    avg_delay: float
    total_savings: float
    reliability_index: float
    risk_flag: str


@dataclass(frozen=True)
class AnnualMetric(_ReportRow):
    funding_year: int
    type_of_work: str
    total_projects: int
    avg_savings: float
    overrun_rate: float
    yoy_change: float


@dataclass(frozen=True)
class SummaryDigest(_ReportRow):
    total_projects_analyzed: int
    total_budget_analyzed: float
    global_avg_delay: float
    total_contractors: int
    total_regions: int
