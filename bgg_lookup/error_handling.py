"""
Common error handling utilities for the board game lookup package.

Failures are grouped by how far they reach:
- field level: recovered with ``safe_execute`` (the field becomes absent)
- record level: the record is dropped by the resolver
- request level: a ``GameLookupError`` subclass, turned into an error
  envelope by ``error_envelope``
"""

import logging
from typing import Any, Callable, Dict, Optional, Tuple

from .config import (  # noqa: F401
    ConfigurationError,
    QUOTA_MESSAGE,
    RATE_LIMIT_MESSAGE,
    UPSTREAM_ERROR_MESSAGE,
    UPSTREAM_FORMAT_MESSAGE,
)

logger = logging.getLogger(__name__)


class GameLookupError(Exception):
    """Base class for request-level lookup failures."""
    status_code = 500
    public_message = UPSTREAM_ERROR_MESSAGE

    def __init__(self, message: str, public_message: Optional[str] = None):
        super().__init__(message)
        if public_message is not None:
            self.public_message = public_message


class InputValidationError(GameLookupError):
    """The caller sent a missing or malformed query or id batch."""
    status_code = 400

    def __init__(self, message: str):
        # Input problems are the caller's to fix, so they see the real message
        super().__init__(message, public_message=message)


class UpstreamTransportError(GameLookupError):
    """Network error or non-2xx response from an external endpoint."""

    def __init__(self, message: str, upstream_status: Optional[int] = None, snippet: str = ""):
        super().__init__(message)
        self.upstream_status = upstream_status
        self.snippet = snippet


class UpstreamFormatError(GameLookupError):
    """Upstream answered, but not in the shape we expect."""
    public_message = UPSTREAM_FORMAT_MESSAGE


class UpstreamRateLimitError(GameLookupError):
    status_code = 429
    public_message = RATE_LIMIT_MESSAGE


class UpstreamQuotaError(GameLookupError):
    status_code = 402
    public_message = QUOTA_MESSAGE


def safe_execute(func: Callable, *args, default_return: Any = None,
                 error_msg: Optional[str] = None, **kwargs) -> Any:
    """
    Safely execute a parse function with field-level error handling.

    Args:
        func: Function to execute
        *args: Arguments for the function
        default_return: Value to return on error
        error_msg: Custom debug message
        **kwargs: Keyword arguments for the function

    Returns:
        Function result or default_return on error
    """
    try:
        return func(*args, **kwargs)
    except (ValueError, TypeError, ArithmeticError) as e:
        if error_msg:
            logger.debug(f"{error_msg}: {e}")
        else:
            logger.debug(f"Error in {getattr(func, '__name__', func)}: {e}")
        return default_return


def error_envelope(exc: Exception) -> Tuple[int, Dict[str, Any]]:
    """
    Map an exception to an HTTP status and a failure envelope.

    Args:
        exc: Exception raised while handling a request

    Returns:
        Tuple of (status_code, envelope)
    """
    if isinstance(exc, GameLookupError):
        status = exc.status_code
        message = exc.public_message
    else:
        logger.exception("Unexpected error while handling lookup request", exc_info=exc)
        status = 500
        message = UPSTREAM_ERROR_MESSAGE
    return status, {"success": False, "error": message}
