"""Retry utilities with exponential backoff."""

import logging
from typing import Callable, Optional

import structlog
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from .config_models import RetryConfig

logger = structlog.stdlib.get_logger(__name__)


def http_retry(
    max_attempts: int = 3,
    min_wait: float = 2.0,
    max_wait: float = 10.0,
    exceptions: tuple = (Exception,),
    predicate: Optional[Callable[[BaseException], bool]] = None,
):
    """Retry decorator for upstream HTTP calls.

    Args:
        max_attempts: Max retry attempts
        min_wait: Min wait between retries (seconds)
        max_wait: Max wait between retries (seconds)
        exceptions: Exception types to retry on
        predicate: Finer check than ``exceptions``; when given, only
                   exceptions it returns True for are retried
    """
    return retry(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=1, min=min_wait, max=max_wait),
        retry=retry_if_exception(predicate) if predicate else retry_if_exception_type(exceptions),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )


def retry_from_config(
    config: RetryConfig,
    exceptions: tuple = (Exception,),
    predicate: Optional[Callable[[BaseException], bool]] = None,
):
    """Create an http_retry decorator from the retry config section."""
    return http_retry(
        max_attempts=config.max_attempts,
        min_wait=config.min_wait,
        max_wait=config.max_wait,
        exceptions=exceptions,
        predicate=predicate,
    )
