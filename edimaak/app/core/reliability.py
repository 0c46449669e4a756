"""
Reliability utilities.

Bounded retry for idempotent gateway reads. Status-transition writes are
never retried here: they go through the compare-and-swap in the gateway.
"""

import asyncio
import logging
from functools import wraps
from typing import Awaitable, Callable, Any, Optional, Tuple, Type

from sqlalchemy.exc import OperationalError, InterfaceError, DBAPIError

from edimaak.app.core.config import settings
from edimaak.app.core.exceptions import TransientGatewayError

logger = logging.getLogger("edimaak.reliability")

# Errors that indicate a dropped connection or a busy database
TRANSIENT_ERRORS: Tuple[Type[BaseException], ...] = (OperationalError, InterfaceError, ConnectionError)


def is_transient(exc: BaseException) -> bool:
    if isinstance(exc, DBAPIError) and exc.connection_invalidated:
        return True
    return isinstance(exc, TRANSIENT_ERRORS)


async def call_with_retry(
    func: Callable[..., Awaitable[Any]],
    *args,
    attempts: Optional[int] = None,
    backoff_seconds: Optional[float] = None,
    operation: Optional[str] = None,
    on_retry: Optional[Callable[[], Awaitable[Any]]] = None,
    **kwargs
) -> Any:
    """
    Await ``func(*args, **kwargs)``, retrying transient failures.

    ``on_retry`` runs before each new attempt (e.g. a session rollback).
    Backoff doubles after every failed attempt. Non-transient errors
    propagate immediately.

    Raises:
        TransientGatewayError: when every attempt failed transiently
    """
    attempts = attempts or settings.gateway_read_retries
    delay = settings.gateway_retry_backoff_seconds if backoff_seconds is None else backoff_seconds
    name = operation or getattr(func, "__name__", "gateway read")

    for attempt in range(1, attempts + 1):
        try:
            return await func(*args, **kwargs)
        except Exception as e:
            if not is_transient(e):
                raise
            logger.warning("%s failed (attempt %d/%d): %s", name, attempt, attempts, e)
            if attempt == attempts:
                raise TransientGatewayError(name, attempts) from e
            if on_retry is not None:
                await on_retry()
            await asyncio.sleep(delay)
            delay *= 2


def idempotent_read(func: Callable) -> Callable:
    """
    Retry a gateway read whose first argument is the AsyncSession.

    The session is rolled back between attempts so a broken transaction
    does not poison the retry.
    """
    @wraps(func)
    async def wrapper(db, *args, **kwargs):
        return await call_with_retry(
            func, db, *args, operation=func.__qualname__, on_retry=db.rollback, **kwargs
        )
    return wrapper
