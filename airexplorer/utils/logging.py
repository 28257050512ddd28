"""Logging helpers."""

from __future__ import annotations

import logging
import os


def configure_logging(level: int | str | None = None) -> None:
    if level is None:
        level = os.environ.get("AIREXPLORER_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        level=level,
    )
