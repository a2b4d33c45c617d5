from __future__ import annotations

from booking_service.utils.retry.exceptions import AbortError, RetryError, RetryStatistics
from booking_service.utils.retry.executor import retry_async
from booking_service.utils.retry.strategies import RetryStrategy

__all__ = ["AbortError", "RetryError", "RetryStatistics", "RetryStrategy", "retry_async"]
