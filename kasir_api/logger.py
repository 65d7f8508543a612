# kasir_api/logger.py

from __future__ import annotations

import logging


def setup_logger(level: str | int = logging.INFO) -> None:
    """
    Console logging for the whole service, one format everywhere.
    Calling it again is harmless: basicConfig is a no-op once handlers exist.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
