"""Application layer package."""

from .analysis_service import AnalysisResult, build_summary_digest, run_dataset_analysis
from .menu_service import MenuSession
from .report_service import export_reports, run_reporting_pipeline

__all__ = [
    "AnalysisResult",
    "build_summary_digest",
    "run_dataset_analysis",
    "MenuSession",
    "export_reports",
    "run_reporting_pipeline",
]
