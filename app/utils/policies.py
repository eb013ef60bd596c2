"""
Error Policies
The two error handling strategies used across the addon layer:
degrade-to-empty for catalog browsing, propagate for install and playback.
"""
import functools
import logging
from typing import Any, Callable, Type
from app.core.errors import AddonError, NotFoundOrIOError

logger = logging.getLogger(__name__)


def degrade_to_empty(operation: str, empty: Callable[[], Any] = list):
    """
    Catch any failure of the wrapped coroutine, log it and return an empty result

    Args:
        operation: Human readable name used in the log line
        empty: Factory for the value returned on failure
    """
    def decorator(fn):
        @functools.wraps(fn)
        async def wrapper(*args, **kwargs):
            try:
                return await fn(*args, **kwargs)
            except Exception as e:  # noqa: BLE001
                logger.error(f"{operation} failed, returning empty result: {e}")
                return empty()
        return wrapper
    return decorator


def propagate(operation: str, wrap: Type[AddonError] = NotFoundOrIOError):
    """
    Log failures of the wrapped coroutine and re-raise them as typed errors

    AddonError subclasses pass through unchanged; anything else (e.g. a
    Redis connection error) is wrapped in ``wrap``.
    """
    def decorator(fn):
        @functools.wraps(fn)
        async def wrapper(*args, **kwargs):
            try:
                return await fn(*args, **kwargs)
            except AddonError as e:
                logger.error(f"{operation} failed: {e}")
                raise
            except Exception as e:
                logger.error(f"{operation} failed: {e}", exc_info=True)
                raise wrap(f"{operation} failed: {e}") from e
        return wrapper
    return decorator
