"""Bounded retry without delay."""

from collections.abc import Callable
from typing import TypeVar, cast

from loguru import logger

from .errors import InvalidInputError

T = TypeVar("T")


def run_with_retries(operation: Callable[[], T], attempts: int = 3, description: str = "operation") -> T:
    """Call ``operation`` until it succeeds, at most ``attempts`` times.

    There is no delay between attempts. ``InvalidInputError`` is raised
    immediately. When every attempt fails, the exception from the last
    attempt is re-raised as is.

    Args:
        operation: Zero-argument callable to run
        attempts: Maximum number of calls
        description: Label used in log messages

    Returns:
        Whatever ``operation`` returns on its first successful call
    """
    if attempts < 1:
        raise ValueError(f"attempts must be at least 1, got {attempts}")

    last_error: Exception | None = None
    for attempt in range(1, attempts + 1):
        try:
            return operation()
        except InvalidInputError:
            raise
        except Exception as e:
            last_error = e
            if attempt < attempts:
                logger.warning(f"{description} failed (attempt {attempt}/{attempts}): {e}. Retrying...")

    logger.error(f"{description} failed after {attempts} attempts: {last_error}")
    raise cast(Exception, last_error)
