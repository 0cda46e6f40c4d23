"""CSV ingestion: row parsing, window filtering and dataset loading."""

from __future__ import annotations

import csv
import logging
import math
from datetime import date, datetime
from pathlib import Path
from typing import Any, Iterable, Sequence

import polars as pl

from dpwh.domain.models import Dataset, ProjectRecord
from dpwh.domain.scoring import in_funding_window

logger = logging.getLogger(__name__)

COL_MAIN_ISLAND = 0
COL_REGION = 1
COL_TYPE_OF_WORK = 8
COL_FUNDING_YEAR = 9
COL_APPROVED_BUDGET = 11
COL_CONTRACT_COST = 12
COL_END_DATE = 13
COL_CONTRACTOR = 14
COL_START_DATE = 16
DATE_FORMAT = "%Y-%m-%d"
THOUSANDS_SEPARATOR = ","
PROJECT_SCHEMA: dict[str, Any] = {
    "region": pl.Utf8,
    "main_island": pl.Utf8,
    "contractor": pl.Utf8,
    "funding_year": pl.Int64,
    "type_of_work": pl.Utf8,
    "approved_budget": pl.Float64,
    "contract_cost": pl.Float64,
    "cost_savings": pl.Float64,
    "completion_delay_days": pl.Int64,
}


class RowParseError(ValueError):
    """A row is shaped like data but a required value cannot be parsed."""


class DatasetReadError(RuntimeError):
    """The source file exists but cannot be read as a delimited table."""


def _field(row: Sequence[Any], index: int) -> str | None:
    if index >= len(row):
        return None
    value = row[index]
    if value is None:
        return None
    return str(value).strip()


def _text(row: Sequence[Any], index: int) -> str:
    return _field(row, index) or ""


def _required(row: Sequence[Any], index: int, label: str) -> str:
    value = _field(row, index)
    if value is None:
        raise RowParseError(f"Missing {label} at col {index}")
    return value


def _has_blank_field(row: Sequence[Any]) -> bool:
    return any(value is None or str(value).strip() == "" for value in row)


def _parse_year(text: str) -> int:
    try:
        return int(text)
    except ValueError as exc:
        raise RowParseError(f"Invalid funding year: {text!r}") from exc


def _parse_amount(text: str, label: str) -> float:
    cleaned = text.replace(THOUSANDS_SEPARATOR, "").strip()
    try:
        amount = float(cleaned)
    except ValueError as exc:
        raise RowParseError(f"Invalid {label}: {text!r}") from exc
    if not math.isfinite(amount):
        raise RowParseError(f"Invalid {label}: {text!r}")
    if amount < 0:
        raise RowParseError(f"Negative {label}: {text!r}")
    return amount


def _parse_date(text: str | None) -> date | None:
    if not text:
        return None
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError:
        return None


def _delay_days(start: date | None, end: date | None) -> int | None:
    if start is None or end is None:
        return None
    return (end - start).days


def parse_row(row: Sequence[Any]) -> ProjectRecord | None:
    """Return a record, or None when the row is filtered out.

    A None cell counts as blank. Columns past the end of a short row are
    absent: text defaults to "" and dates to unknown.

    Raises RowParseError when a required financial or year value is missing
    or not numeric.
    """
    if _has_blank_field(row):
        return None

    funding_year = _parse_year(_required(row, COL_FUNDING_YEAR, "funding_year"))
    if not in_funding_window(funding_year):
        return None

    approved_budget = _parse_amount(_required(row, COL_APPROVED_BUDGET, "approved_budget"), "approved_budget")
    contract_cost = _parse_amount(_required(row, COL_CONTRACT_COST, "contract_cost"), "contract_cost")

    start = _parse_date(_field(row, COL_START_DATE))
    end = _parse_date(_field(row, COL_END_DATE))

    return ProjectRecord(
        region=_text(row, COL_REGION),
        main_island=_text(row, COL_MAIN_ISLAND),
        contractor=_text(row, COL_CONTRACTOR),
        funding_year=funding_year,
        type_of_work=_text(row, COL_TYPE_OF_WORK),
        approved_budget=approved_budget,
        contract_cost=contract_cost,
        completion_delay_days=_delay_days(start, end),
    )


def _check_width(row: Sequence[Any], expected_width: int | None) -> None:
    if expected_width is not None and len(row) != expected_width:
        raise RowParseError(f"Expected {expected_width} fields, found {len(row)}")


def load_rows(rows: Iterable[Sequence[Any]], expected_width: int | None = None) -> Dataset:
    """Parse every row, keeping valid records in arrival order.

    When expected_width is given, a row with any other field count is a
    parse error.
    """
    records: list[ProjectRecord] = []
    total_rows = 0
    filtered_rows = 0
    errored_rows = 0

    for row in rows:
        total_rows += 1
        try:
            _check_width(row, expected_width)
            record = parse_row(row)
        except RowParseError as exc:
            errored_rows += 1
            logger.warning("Skipping row #%d due to parsing error: %s", total_rows, exc)
            continue
        if record is None:
            filtered_rows += 1
            logger.debug("Skipping row #%d due to filtering", total_rows)
            continue
        records.append(record)

    logger.info(
        "Loaded %d of %d rows (%d filtered, %d parse errors)",
        len(records),
        total_rows,
        filtered_rows,
        errored_rows,
    )
    return Dataset(
        records=tuple(records),
        total_rows=total_rows,
        filtered_rows=filtered_rows,
        errored_rows=errored_rows,
    )


def read_raw_rows(path: str | Path) -> tuple[list[str], list[list[str]]]:
    """Return the header and the data rows, each row at its own width."""
    csv_path = Path(path)
    if not csv_path.exists():
        raise FileNotFoundError(f"Input CSV file not found: {csv_path}")
    try:
        with csv_path.open(newline="", encoding="utf-8-sig") as handle:
            reader = csv.reader(handle)
            header = next(reader, [])
            rows = [row for row in reader if row]
    except (csv.Error, UnicodeDecodeError) as exc:
        raise DatasetReadError(f"Failed to read {csv_path}: {exc}") from exc
    return header, rows


def read_input_csv(path: str | Path) -> Dataset:
    """Read the project CSV and return the filtered, validated dataset."""
    header, rows = read_raw_rows(path)
    return load_rows(rows, expected_width=len(header))


def dataset_frame(dataset: Dataset) -> pl.DataFrame:
    """Columnar view of the kept records used by the aggregation engines."""
    rows = [record.as_row() for record in dataset.records]
    if not rows:
        return pl.DataFrame({column: [] for column in PROJECT_SCHEMA}, schema=PROJECT_SCHEMA)
    return pl.DataFrame(rows, schema=PROJECT_SCHEMA)
