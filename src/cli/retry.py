"""Retry helpers for LLM calls (tenacity, exponential backoff)."""

import logging

import structlog
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    stop_after_delay,
    wait_exponential,
)

logger = structlog.stdlib.get_logger(__name__)


def llm_retry(
    max_attempts: int = 3,
    min_wait: float = 2.0,
    max_wait: float = 30.0,
    exceptions: tuple = (Exception,),
    max_delay: float | None = None,
    sleep=None,
):
    """Retry decorator for LLM API calls.

    Args:
        max_attempts: Max attempts, including the first call
        min_wait: Min wait between retries (seconds)
        max_wait: Max wait between retries (seconds)
        exceptions: Exception types to retry on
        max_delay: Stop retrying once this many seconds have passed since the first call
        sleep: Replacement for time.sleep between attempts, e.g. an Event.wait
    """
    stop = stop_after_attempt(max_attempts)
    if max_delay is not None:
        stop = stop | stop_after_delay(max_delay)
    extra = {"sleep": sleep} if sleep is not None else {}
    return retry(
        stop=stop,
        wait=wait_exponential(multiplier=1, min=min_wait, max=max_wait),
        retry=retry_if_exception_type(exceptions),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
        **extra,
    )


def retry_kwargs_from_config(retry_config) -> dict:
    """Map a RetryConfig section onto LLMAnalyzer retry kwargs."""
    return {
        "retry_attempts": retry_config.max_attempts,
        "retry_min_wait": retry_config.min_wait,
        "retry_max_wait": retry_config.llm_max_wait,
    }
