"""DPWH flood control analytics entrypoint."""

from __future__ import annotations

import logging
import os

from dpwh.application.menu_service import MenuSession
from dpwh.application.report_service import top_contractor_limit


def _log_level() -> int:
    raw = os.getenv("DPWH_LOG_LEVEL", "WARNING").strip().upper()
    level = logging.getLevelName(raw)
    if not isinstance(level, int):
        raise ValueError(f"Invalid DPWH_LOG_LEVEL: {raw}")
    return level


def main() -> None:
    logging.basicConfig(level=_log_level(), format="%(levelname)s %(name)s: %(message)s")
    top_contractor_limit()
    MenuSession().run()


if __name__ == "__main__":
    main()
