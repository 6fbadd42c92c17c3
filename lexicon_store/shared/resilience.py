# lexicon_store/shared/resilience.py
import logging
from typing import Callable, Tuple, Type

import structlog
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from lexicon_store.shared.config import settings

logger = structlog.get_logger()

def retry_store_connection(
    retry_on: Tuple[Type[BaseException], ...] = (IOError, TimeoutError, ConnectionError),
) -> Callable:
    """
    Decorator factory for retrying the acquisition of a store connection.
    Strategy:
    - Wait: Exponential Backoff (1s, 2s, 4s...) up to 10s.
    - Stop: After STORE_CONNECT_ATTEMPTS attempts.
    - Log: Logs retries using structlog.

    Only connection setup is retried. Writes are never replayed.
    """
    return retry(
        stop=stop_after_attempt(settings.STORE_CONNECT_ATTEMPTS),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type(retry_on),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
