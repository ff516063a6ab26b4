"""
@meta
name: shared_logging_utils
type: utility
domain: shared
responsibility:
  - Provide consistent logging for the tracking client layers
  - Resolve the default log level from the environment
inputs:
  - Logger names
  - TRACKING_LOG_LEVEL environment variable
outputs:
  - Configured logger instances
tags:
  - utility
  - shared
  - logging
ci:
  runnable: false
  needs_gpu: false
  needs_cloud: false
lifecycle:
  status: active
"""

import logging
import os
from typing import Optional

LOG_LEVEL_ENV_VAR = "TRACKING_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def resolve_log_level(default: int = logging.INFO) -> int:
    """
    Resolve the log level from ``TRACKING_LOG_LEVEL``.

    Accepts level names (``"DEBUG"``, ``"warning"``) or numeric values.
    Unknown values fall back to ``default``.
    """
    raw = os.environ.get(LOG_LEVEL_ENV_VAR)
    if not raw:
        return default

    raw = raw.strip()
    if raw.isdigit():
        return int(raw)

    level = logging.getLevelName(raw.upper())
    if isinstance(level, int):
        return level
    return default


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a logger with standardized formatting.

    Args:
        name: Logger name (typically __name__).
        level: Optional logging level. When omitted the level comes from
            ``TRACKING_LOG_LEVEL`` (default: INFO).

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(name)

    # Only configure once per logger (avoid duplicate handlers)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

        if level is not None:
            logger.setLevel(level)
        elif logger.level == logging.NOTSET:
            logger.setLevel(resolve_log_level())
    elif level is not None:
        logger.setLevel(level)

    return logger
