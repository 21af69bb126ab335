#!/usr/bin/env python3

"""
Error handling helpers.

- safe_execute: decorator returning a default value instead of raising, for
  best-effort browser helpers whose failure should not abort a scenario.
- ErrorContext: times an operation, logs its outcome and lets errors propagate.
"""

import logging
import time
from functools import wraps
from typing import Any, Callable, Optional

from core.exceptions import FatalError, HarnessError, RetryableError

logger = logging.getLogger(__name__)


def safe_execute(
    default_return: Any = None, log_errors: bool = True, error_message: Optional[str] = None
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """
    Decorator to safely execute a function with error handling.

    Usage:
        @safe_execute(default_return=False)
        def my_func(): ...
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                if log_errors:
                    msg = error_message or f"Error in {func.__name__}: {e}"
                    logger.warning(msg)
                return default_return

        return wrapper

    return decorator


def describe_error(error: BaseException) -> str:
    """Return a one-line description including the retry family when known."""
    if isinstance(error, RetryableError):
        family = "retryable"
    elif isinstance(error, FatalError):
        family = "fatal"
    else:
        family = "unexpected"
    message = error.message if isinstance(error, HarnessError) else str(error)
    first_line = message.split("\n", 1)[0]
    return f"{type(error).__name__} ({family}): {first_line}"


class ErrorContext:
    """
    Context manager for timed operations with automatic logging.

    Exceptions are logged with their duration and re-raised unchanged.
    """

    def __init__(self, operation_name: str, log_success: bool = True) -> None:
        self.operation_name = operation_name
        self.log_success = log_success
        self.start_time: Optional[float] = None
        self.duration: float = 0.0

    def __enter__(self) -> "ErrorContext":
        self.start_time = time.time()
        logger.debug(f"Starting operation: {self.operation_name}")
        return self

    def __exit__(self, exc_type: Optional[type], exc_val: Optional[BaseException], _exc_tb: Optional[Any]) -> bool:
        self.duration = time.time() - self.start_time if self.start_time else 0.0

        if exc_val is not None:
            logger.error(
                f"Operation failed: {self.operation_name} ({self.duration:.2f}s) - {describe_error(exc_val)}"
            )
            return False

        if self.log_success:
            logger.debug(f"Operation completed: {self.operation_name} ({self.duration:.2f}s)")
        return False
