"""Logging configuration."""

import logging
import os


def setup_logging(level: str | None = None) -> None:
    """Configure library logging.

    Falls back to ``LOG_LEVEL`` from the environment, then INFO. httpx request
    lines are kept at WARNING so signed URLs do not end up in INFO logs.
    """
    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    logging.getLogger("httpx").setLevel(max(logging.getLevelName(level), logging.WARNING))
