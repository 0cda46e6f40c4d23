"""Infrastructure layer package."""

from .csv_repository import load_dataset
from .excel_repository import save_output_workbook
from .report_exporter import save_report_csv, save_summary_json

__all__ = ["load_dataset", "save_output_workbook", "save_report_csv", "save_summary_json"]
