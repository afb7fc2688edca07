"""Execution timing helpers."""

import logging
import time
from contextlib import contextmanager

logger = logging.getLogger(__name__)


@contextmanager
def measure_time(label: str):
    """Log how long the wrapped block took, including when it raises."""
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        logger.info("%s execution time: %.2f seconds", label, elapsed)
