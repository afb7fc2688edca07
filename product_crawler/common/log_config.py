"""
Logging Configuration

Configures logging for the crawler.
Output goes to stderr so stdout only carries the extracted JSON.
"""

import logging
import sys

LOG_FORMAT = "%(levelname)-8s %(name)s: %(message)s"

# Third-party loggers that are only interesting when debugging a run
_VERBOSE_ONLY_LOGGERS = ("openai",)


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """
    Configure the ``product_crawler`` logger.

    Args:
        verbose: If True, set level to DEBUG and surface OpenAI client logs
        quiet: If True, set level to WARNING
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger = logging.getLogger("product_crawler")
    logger.setLevel(level)

    # Avoid duplicate handlers if called multiple times
    logger.handlers.clear()
    logger.addHandler(handler)

    for name in _VERBOSE_ONLY_LOGGERS:
        extra = logging.getLogger(name)
        extra.handlers.clear()
        if verbose:
            extra.setLevel(logging.DEBUG)
            extra.addHandler(handler)
