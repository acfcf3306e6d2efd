"""Client loggers with UTC timestamps and an environment-selected level.

Every SDK module gets its logger from ``get_logger`` so output shares one format.
The level comes from ``DEXPAPRIKA_LOG_LEVEL`` (``DEBUG``, ``INFO``, ``WARNING``,
``ERROR`` or ``CRITICAL``) when a logger is first built; retried API errors log
at WARNING and raised ones at ERROR, so ``WARNING`` keeps only trouble visible.

Usage example:
    from dexpaprika_sdk.observability.logging import get_logger

    logger = get_logger("dexpaprika_sdk.infrastructure.http")
    logger.info("Retrying %s in %d ms", endpoint, delay_ms)
"""

from __future__ import annotations

import logging
import os
import time

LOG_LEVEL_ENV = "DEXPAPRIKA_LOG_LEVEL"
DEFAULT_LOG_LEVEL = logging.INFO

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def resolve_log_level(value: str | None) -> int:
    """Map a level name to its numeric level, falling back to INFO.

    Unknown or blank names resolve to the default rather than failing, because
    loggers are built at import time where an exception would break the SDK.
    """
    if value is None or not value.strip():
        return DEFAULT_LOG_LEVEL
    return logging.getLevelNamesMapping().get(value.strip().upper(), DEFAULT_LOG_LEVEL)


def get_logger(name: str, *, level: int | None = None) -> logging.Logger:
    """Return an SDK logger writing UTC-stamped lines to stderr.

    Args:
        name: Logger name (use a stable module-qualified name).
        level: Explicit level; when omitted, ``DEXPAPRIKA_LOG_LEVEL`` decides.

    Returns:
        A logger with a single stream handler that does not propagate.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(fmt=_LOG_FORMAT, datefmt=_LOG_DATE_FORMAT)
        formatter.converter = time.gmtime
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(level if level is not None else resolve_log_level(os.getenv(LOG_LEVEL_ENV)))
        logger.propagate = False
    elif level is not None:
        logger.setLevel(level)
    return logger
