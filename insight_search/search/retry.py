"""Timeout and exponential-backoff retry for provider calls."""

from __future__ import annotations

import asyncio
import errno
import socket
from typing import Awaitable, Callable, TypeVar

import aiohttp
import structlog

from insight_search.errors import TransientNetworkError

logger = structlog.get_logger(__name__)

T = TypeVar("T")

TRANSIENT_ERRNOS = frozenset(
    {
        errno.ETIMEDOUT,
        errno.ENETUNREACH,
        errno.ECONNREFUSED,
        errno.ECONNRESET,
        errno.ECONNABORTED,
        errno.EHOSTUNREACH,
    }
)


def is_transient_error(exc: BaseException) -> bool:
    """Return True for network failures that are worth retrying."""
    if isinstance(exc, (TransientNetworkError, asyncio.TimeoutError, socket.gaierror)):
        return True
    if isinstance(exc, aiohttp.ClientConnectionError):
        return True
    if isinstance(exc, (ConnectionResetError, ConnectionRefusedError, ConnectionAbortedError)):
        return True
    if isinstance(exc, OSError) and exc.errno in TRANSIENT_ERRNOS:
        return True
    # Errors raised from a transient cause, e.g. a wrapped connector failure
    cause = exc.__cause__
    return cause is not None and cause is not exc and is_transient_error(cause)


def exponential_backoff(base: float, max_delay: float) -> Callable[[int], float]:
    """Delay for attempt ``n`` (0-based): ``min(base * 2**n, max_delay)``."""

    def delay(attempt: int) -> float:
        return min(base * (2**attempt), max_delay)

    return delay


async def with_timeout(operation: Awaitable[T], timeout: float, label: str = "request") -> T:
    """Race an awaitable against a timer.

    The underlying operation is abandoned on expiry; its result, if it ever
    arrives, is discarded.
    """
    try:
        return await asyncio.wait_for(operation, timeout=timeout)
    except asyncio.TimeoutError as exc:
        raise TransientNetworkError(f"{label} timed out after {timeout:g}s") from exc


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    *,
    retries: int,
    backoff: Callable[[int], float],
    label: str = "request",
) -> T:
    """Run ``operation`` up to ``retries`` times, retrying only transient errors.

    Attempts are strictly sequential. Non-transient errors and the error from
    the final attempt are re-raised unchanged.
    """
    for attempt in range(retries):
        try:
            return await operation()
        except Exception as exc:
            if attempt == retries - 1 or not is_transient_error(exc):
                raise

            delay = backoff(attempt)
            logger.warning(
                "Retrying after network error",
                label=label,
                attempt=attempt + 1,
                delay=delay,
                error=str(exc),
            )
            await asyncio.sleep(delay)

    raise ValueError("retries must be at least 1")
