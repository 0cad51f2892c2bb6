"""
Exceptions and common error handling utilities for the game reviews package.

All package errors derive from GameReviewsError so callers can catch broadly
or specifically depending on context.
"""

import logging
from typing import Any, Callable
from functools import wraps

logger = logging.getLogger(__name__)


class GameReviewsError(Exception):
    """Base class for all game reviews exceptions."""


class CatalogValidationError(GameReviewsError, ValueError):
    """Raised when catalog data breaks an invariant (duplicate ids, dangling references...)."""


class MissingFieldError(CatalogValidationError):
    """
    Raised when a required field is absent.

    Attributes:
        record: Kind of record being built (e.g. "Review")
        field_name: Name of the missing field
    """

    def __init__(self, record: str, field_name: str, identifier: Any = None) -> None:
        self.record = record
        self.field_name = field_name
        self.identifier = identifier
        where = f" {identifier!r}" if identifier is not None else ""
        super().__init__(f"{record}{where} is missing required field '{field_name}'")


class IGDBError(GameReviewsError):
    """Raised when the IGDB API cannot be reached, refuses a request or answers garbage."""


def handle_errors(default_return: Any = None, log_error: bool = True):
    """
    Decorator for best-effort operations: log the exception and return a default.

    Only meant for side effects whose failure must not abort the run
    (cache writes and the like); anything feeding the rendered page must
    let its exceptions propagate.

    Args:
        default_return: Value to return on error
        log_error: Whether to log the error
    """
    def decorator(func: Callable):
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
