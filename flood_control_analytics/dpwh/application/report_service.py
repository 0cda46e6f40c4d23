"""Report generation use case: analyse, render, export."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from time import perf_counter

from dpwh.application.analysis_service import AnalysisResult, run_dataset_analysis
from dpwh.application.reporting.metrics import fmt_elapsed
from dpwh.application.reporting.rendering import (
    render_annual_table,
    render_contractor_table,
    render_regional_table,
)
from dpwh.domain.models import Dataset
from dpwh.domain.scoring import TOP_CONTRACTOR_LIMIT
from dpwh.infrastructure.excel_repository import save_output_workbook
from dpwh.infrastructure.report_exporter import (
    ANNUAL_REPORT_FILE,
    CONTRACTOR_REPORT_FILE,
    REGIONAL_REPORT_FILE,
    SUMMARY_JSON_FILE,
    SUMMARY_WORKBOOK_FILE,
    annual_frame,
    contractor_frame,
    regional_frame,
    save_report_csv,
    save_summary_json,
    summary_frame,
)

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def default_output_dir() -> Path:
    raw = os.getenv("DPWH_OUTPUT_DIR", "").strip()
    return Path(raw) if raw else PROJECT_ROOT / "output"


def top_contractor_limit() -> int:
    raw = os.getenv("DPWH_TOP_CONTRACTORS", str(TOP_CONTRACTOR_LIMIT))
    try:
        limit = int(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid DPWH_TOP_CONTRACTORS: {raw}") from exc
    if limit < 1:
        raise ValueError(f"DPWH_TOP_CONTRACTORS must be >= 1, got {limit}")
    return limit


@dataclass(frozen=True)
class ExportStatus:
    label: str
    path: Path
    saved: bool
    message: str = ""

    def describe(self) -> str:
        if self.saved:
            return f"Saved {self.label}: {self.path}"
        return f"ERROR: {self.label} export failed ({self.path}): {self.message}"


def export_reports(result: AnalysisResult, output_dir: Path) -> list[ExportStatus]:
    """Write the three CSV reports, summary.json and the summary workbook."""
    regional_df = regional_frame(result.regional_trends)
    contractor_df = contractor_frame(result.top_contractors)
    annual_df = annual_frame(result.annual_metrics)

    statuses: list[ExportStatus] = []
    for label, file_name, frame in (
        ("regional summary", REGIONAL_REPORT_FILE, regional_df),
        ("contractor ranking", CONTRACTOR_REPORT_FILE, contractor_df),
        ("annual trends", ANNUAL_REPORT_FILE, annual_df),
    ):
        path = output_dir / file_name
        saved, message = save_report_csv(path, frame)
        statuses.append(ExportStatus(label, path, saved, message))

    json_path = output_dir / SUMMARY_JSON_FILE
    saved, message = save_summary_json(json_path, result.summary.as_row())
    statuses.append(ExportStatus("summary", json_path, saved, message))

    workbook_path = output_dir / SUMMARY_WORKBOOK_FILE
    saved, message = save_output_workbook(
        workbook_path,
        {
            "regional_summary": regional_df,
            "contractor_ranking": contractor_df,
            "annual_trends": annual_df,
            "summary": summary_frame(result.summary),
        },
    )
    statuses.append(ExportStatus("workbook", workbook_path, saved, message))

    for status in statuses:
        if not status.saved:
            logger.error("Export failed for %s at %s: %s", status.label, status.path, status.message)
    return statuses


def run_reporting_pipeline(
    dataset: Dataset,
    output_dir: Path | None = None,
    top_limit: int | None = None,
) -> tuple[AnalysisResult, list[ExportStatus]]:
    pipeline_start = perf_counter()
    stage_start = pipeline_start
    stage_timings: list[tuple[str, float]] = []

    def _mark(stage_name: str) -> None:
        nonlocal stage_start
        now = perf_counter()
        stage_timings.append((stage_name, now - stage_start))
        stage_start = now

    target_dir = output_dir if output_dir is not None else default_output_dir()
    limit = top_limit if top_limit is not None else top_contractor_limit()

    result = run_dataset_analysis(dataset, top_contractor_limit=limit)
    _mark("run_dataset_analysis")

    print(render_regional_table(result.regional_trends, exported_to=REGIONAL_REPORT_FILE))
    print(render_contractor_table(result.top_contractors, exported_to=CONTRACTOR_REPORT_FILE))
    print(render_annual_table(result.annual_metrics, exported_to=ANNUAL_REPORT_FILE))
    _mark("render_tables")

    statuses = export_reports(result, target_dir)
    _mark("export_reports")
    total_elapsed = perf_counter() - pipeline_start

    print(
        "Summary prepared: "
        f"projects={result.summary.total_projects_analyzed}, "
        f"regions={result.summary.total_regions}, "
        f"contractors={result.summary.total_contractors}"
    )
    stage_text = ", ".join([f"{name}={fmt_elapsed(seconds)}" for name, seconds in stage_timings])
    print(f"Stage Timing: {stage_text}")
    print(f"Total Elapsed: {fmt_elapsed(total_elapsed)}")
    for status in statuses:
        print(status.describe())
    return result, statuses
