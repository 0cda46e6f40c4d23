"""Domain layer package."""

from .models import AnnualMetric, ContractorRanking, Dataset, ProjectRecord, RegionalTrend, SummaryDigest
from .scoring import efficiency_score, reliability_index, risk_flag, yoy_change

__all__ = [
    "ProjectRecord",
    "Dataset",
    "RegionalTrend",
    "ContractorRanking",
    "AnnualMetric",
    "SummaryDigest",
    "efficiency_score",
    "reliability_index",
    "risk_flag",
    "yoy_change",
]
