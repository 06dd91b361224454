"""
Error types and common error handling utilities for the BGG Chooser package.
"""

import inspect
import logging
from typing import Optional, Any, Callable
from functools import wraps

logger = logging.getLogger(__name__)


class CollectionError(Exception):
    """Base class for failures while fetching one user's collection."""
    kind = "CollectionError"

    def __init__(self, username: str, message: Optional[str] = None):
        self.username = username
        super().__init__(message or f"{self.kind} for '{username}'")


class InvalidUsername(CollectionError):
    """Username was empty; no request was made."""
    kind = "InvalidUsername"


class TransientServerBusy(CollectionError):
    """BGG kept answering 202 until the configured attempt limit ran out."""
    kind = "TransientServerBusy"

    def __init__(self, username: str, attempts: int):
        self.attempts = attempts
        super().__init__(username, f"Collection for '{username}' still processing after {attempts} attempts")


class NetworkFailure(CollectionError):
    """Connection, DNS, TLS or timeout error."""
    kind = "NetworkFailure"


class MalformedResponse(CollectionError):
    """A 200 response whose body is not a collection document."""
    kind = "MalformedResponse"


class UnexpectedStatus(CollectionError):
    """Any status other than 200 or 202."""
    kind = "UnexpectedStatus"

    def __init__(self, username: str, status: int):
        self.status = status
        super().__init__(username, f"Unexpected HTTP status {status} for '{username}'")


def handle_errors(default_return: Any = None, log_error: bool = True):
    """
    Decorator to handle common exceptions and provide consistent error logging.

    Works for both plain and coroutine functions.

    Args:
        default_return: Value to return on error
        log_error: Whether to log the error
    """
    def decorator(func: Callable):
        if inspect.iscoroutinefunction(func):
            @wraps(func)
            async def async_wrapper(*args, **kwargs):
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    if log_error:
                        logger.error(f"Error in {func.__name__}: {e}")
                    return default_return
            return async_wrapper

        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                if log_error:
                    logger.error(f"Error in {func.__name__}: {e}")
                return default_return
        return wrapper
    return decorator
