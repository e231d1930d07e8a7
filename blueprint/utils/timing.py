"""Timing helpers that log how long each build step takes."""

from contextlib import contextmanager
from datetime import datetime
from typing import Iterator

import structlog

logger = structlog.get_logger(__name__)


@contextmanager
def timed_section(name: str, **context: object) -> Iterator[None]:
    """
    Context manager for timing a section of code.

    Args:
        name: Name of the section being timed
        **context: Extra key/value pairs attached to both log events
    """
    start_time = datetime.now()
    logger.debug(f"{name} started", **context)
    try:
        yield
    finally:
        duration = (datetime.now() - start_time).total_seconds()
        logger.info(f"{name} finished", duration_s=round(duration, 2), **context)
