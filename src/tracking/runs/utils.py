from __future__ import annotations

"""
@meta
name: tracking_runs_utils
type: utility
domain: tracking
responsibility:
  - Retry tracking server calls with exponential backoff
  - Classify transient server errors
inputs:
  - Callables issuing tracking requests
outputs:
  - Call results or the original exception
tags:
  - utility
  - tracking
  - retry
ci:
  runnable: false
  needs_gpu: false
  needs_cloud: false
lifecycle:
  status: active
"""

"""Retry helpers for tracking client calls."""
import random
import time
from typing import Any, Callable, Optional, TypeVar

from mlflow.exceptions import MlflowException

from common.shared.logging_utils import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

RETRYABLE_MARKERS = (
    "429",
    "503",
    "504",
    "timeout",
    "timed out",
    "connection",
    "temporary",
    "temporarily_unavailable",
    "rate limit",
    "request_limit_exceeded",
)


RETRYABLE_ERROR_CODES = frozenset({"TEMPORARILY_UNAVAILABLE", "REQUEST_LIMIT_EXCEEDED"})


def is_retryable_error(error: BaseException) -> bool:
    """
    Return True if the error is a transient server failure.

    MlflowExceptions are classified by ``error_code``; anything else (and
    MlflowExceptions with other codes, e.g. wrapped transport errors) falls
    back to matching the message.
    """
    if isinstance(error, MlflowException) and error.error_code in RETRYABLE_ERROR_CODES:
        return True
    error_str = str(error).lower()
    return any(marker in error_str for marker in RETRYABLE_MARKERS)


def retry_with_backoff(
    func: Callable[[], T],
    max_retries: int = 5,
    base_delay: float = 1.0,
    max_delay: float = 60.0,
    operation_name: str = "operation",
    sleep: Optional[Callable[[float], Any]] = None,
) -> T:
    """
    Call ``func`` and retry transient failures with exponential backoff and jitter.

    Args:
        func: Callable that takes no arguments.
        max_retries: Maximum number of attempts.
        base_delay: Base delay in seconds for exponential backoff.
        max_delay: Maximum delay in seconds.
        operation_name: Name of operation for logging.
        sleep: Sleep function (defaults to time.sleep).

    Returns:
        Result of ``func()``.

    Raises:
        Exception: The original exception when it is not retryable or all
            attempts are exhausted.
    """
    if max_retries < 1:
        raise ValueError(f"max_retries must be >= 1, got {max_retries}")

    for attempt in range(max_retries):
        try:
            return func()
        except Exception as e:
            if not is_retryable_error(e) or attempt == max_retries - 1:
                raise

            delay = min(base_delay * (2 ** attempt), max_delay)
            total_delay = delay + random.uniform(0, delay * 0.1)

            logger.warning(
                f"Retry {attempt + 1}/{max_retries} for {operation_name} "
                f"after {total_delay:.2f}s (error: {str(e)[:100]})"
            )
            (sleep or time.sleep)(total_delay)

    raise RuntimeError(f"Retry logic exhausted for {operation_name}")
