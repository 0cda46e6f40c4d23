"""Interactive menu: load dataset, generate reports, exit."""

from __future__ import annotations

import os
from pathlib import Path
from time import perf_counter
from typing import Callable

from dpwh.application.report_service import PROJECT_ROOT, run_reporting_pipeline
from dpwh.application.reporting.metrics import fmt_elapsed
from dpwh.application.reporting.rendering import load_banner
from dpwh.domain.models import Dataset
from dpwh.domain.scoring import FUNDING_YEAR_MAX, FUNDING_YEAR_MIN
from dpwh.infrastructure.csv_repository import load_dataset

MENU_TEXT = "\n".join(
    [
        "",
        "=== DPWH Flood Control Data Analysis Pipeline ===",
        f"[1] Load Dataset (Filter {FUNDING_YEAR_MIN}-{FUNDING_YEAR_MAX})",
        "[2] Generate Reports",
        "[3] Exit",
    ]
)


def default_input_path() -> Path:
    raw = os.getenv("DPWH_INPUT_PATH", "").strip()
    return Path(raw) if raw else PROJECT_ROOT / "data" / "dpwh_flood_control_projects.csv"


class MenuSession:
    """Holds the loaded dataset between menu actions."""

    def __init__(self, input_path: Path | None = None, output_dir: Path | None = None) -> None:
        self.input_path = input_path if input_path is not None else default_input_path()
        self.output_dir = output_dir
        self.dataset: Dataset | None = None

    def load(self) -> bool:
        print("Processing dataset...")
        load_start = perf_counter()
        dataset, error_message = load_dataset(self.input_path)
        load_elapsed = perf_counter() - load_start
        if dataset is None:
            print(f"ERROR: Failed to load data: {error_message}")
            return True
        self.dataset = dataset
        print(load_banner(dataset))
        print(f"Stage Timing: load_dataset={fmt_elapsed(load_elapsed)}")
        return True

    def generate_reports(self) -> bool:
        if self.dataset is None:
            print("WARNING: Please load the dataset first [Option 1].")
            return True
        print("Generating reports...")
        _, statuses = run_reporting_pipeline(self.dataset, output_dir=self.output_dir)
        if all(status.saved for status in statuses):
            print("SUCCESS: Reports saved to CSV files and summary.json created.")
        else:
            print("ERROR: One or more reports could not be saved.")
        return True

    def exit(self) -> bool:
        print("Exiting application.")
        return False

    def dispatch(self, choice: str) -> bool:
        actions: dict[str, Callable[[], bool]] = {
            "1": self.load,
            "2": self.generate_reports,
            "3": self.exit,
        }
        action = actions.get(choice.strip())
        if action is None:
            print("Invalid choice, please try again.")
            return True
        return action()

    def run(self, read_choice: Callable[[str], str] = input) -> None:
        keep_running = True
        while keep_running:
            print(MENU_TEXT)
            try:
                choice = read_choice("Enter choice: ")
            except EOFError:
                self.exit()
                return
            keep_running = self.dispatch(choice)
