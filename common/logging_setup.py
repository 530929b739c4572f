# common/logging_setup.py
from __future__ import annotations
import os
import sys

from loguru import logger

_SINK_ID: int | None = None


def configure_logging(level: str | None = None) -> None:
    """
    Route loguru output to stderr at `level` (default: LOG_LEVEL env or INFO).

    Streamlit re-executes the page script on every interaction, so the sink is
    swapped rather than stacked when this is called again.
    """
    global _SINK_ID
    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()

    if _SINK_ID is None:
        logger.remove()          # drop loguru's default DEBUG sink
    else:
        logger.remove(_SINK_ID)
    _SINK_ID = logger.add(
        sys.stderr,
        level=level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}",
    )
