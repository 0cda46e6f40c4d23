"""DPWH flood control analytics package."""

from .annual import AnnualPerformanceEngine
from .application import AnalysisResult, MenuSession, run_dataset_analysis, run_reporting_pipeline
from .contractor import ContractorRankingEngine
from .ingestion import load_rows, parse_row, read_input_csv
from .regional import RegionalTrendEngine

__all__ = [
    "RegionalTrendEngine",
    "ContractorRankingEngine",
    "AnnualPerformanceEngine",
    "parse_row",
    "load_rows",
    "read_input_csv",
    "AnalysisResult",
    "MenuSession",
    "run_dataset_analysis",
    "run_reporting_pipeline",
]
