"""Timing spans for endpoint work and model calls."""

import time
from contextlib import contextmanager
from typing import Iterator

from giftai.logging import get_logger

logger = get_logger(__name__)

# Prefix for all timing logs so they are easy to grep
_TIMING_PREFIX = "[TIMING]"


def format_duration(ms: int) -> str:
    """12500 -> '12.5s', 750 -> '750ms'."""
    if ms >= 1000:
        return f"{ms / 1000:.1f}s"
    return f"{ms}ms"


@contextmanager
def time_span(name: str, **extra: object) -> Iterator[None]:
    """Log elapsed time for a block, with extra key=value fields; logs on error too."""
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = int((time.perf_counter() - start) * 1000)
        fields = " ".join(f"{k}={v}" for k, v in extra.items())
        logger.info("%s %s elapsed_ms=%s (%s) %s", _TIMING_PREFIX, name, elapsed, format_duration(elapsed), fields)
