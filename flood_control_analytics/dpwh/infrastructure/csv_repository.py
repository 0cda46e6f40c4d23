"""Infrastructure adapter for the project CSV data source."""

from __future__ import annotations

import logging
from pathlib import Path

from dpwh.domain.models import Dataset
from dpwh.ingestion import DatasetReadError, read_input_csv

logger = logging.getLogger(__name__)


def load_dataset(path: Path) -> tuple[Dataset | None, str]:
    try:
        dataset = read_input_csv(path)
    except (OSError, DatasetReadError) as exc:
        logger.error("Failed to load dataset from %s: %s", path, exc)
        return None, str(exc)
    return dataset, ""
