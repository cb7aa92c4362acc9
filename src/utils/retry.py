"""Bounded call-site retry for transient store failures."""

import time
from typing import Callable, TypeVar

from utils.error_handling import StoreUnavailableError
from utils.logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def call_with_retry(
    operation: Callable[[], T],
    *,
    attempts: int = 3,
    backoff_seconds: float = 0.1,
    label: str = "store call",
) -> T:
    """
    Run ``operation`` and retry it on StoreUnavailableError.

    Other errors propagate immediately. Backoff doubles each attempt; the last
    StoreUnavailableError is re-raised once ``attempts`` are used up.
    """
    attempt = 1
    while True:
        try:
            return operation()
        except StoreUnavailableError as exc:
            if attempt >= attempts:
                logger.error(
                    "Giving up after transient failures",
                    extra={"operation": label, "attempts": attempt, "error": str(exc)},
                )
                raise
            logger.warning(
                "Transient failure, retrying",
                extra={"operation": label, "attempt": attempt, "error": str(exc)},
            )
            if backoff_seconds:
                time.sleep(backoff_seconds * (2 ** (attempt - 1)))
            attempt += 1
