"""Helpers turning store outcomes into ``Result`` values."""

from __future__ import annotations

from typing import Any, Callable, Optional, TypeVar

from ...domain.errors import NotFound, StoreError
from ...domain.results import Result
from ...logging_config import get_logger

T = TypeVar("T")

logger = get_logger("repositories")


def attempt(action: str, operation: Callable[[], T], **context: Any) -> Result[T]:
    """Run a store call; a ``StoreError`` becomes a failed result."""
    try:
        value = operation()
    except StoreError as exc:
        logger.warning("%s failed: %s", action, exc, extra=context)
        return Result.fail(exc)
    return Result.ok(value)


def require_rows(result: Result[int], entity: str, key: Optional[object]) -> Result[int]:
    """Map a zero rows-affected count to a ``NotFound`` failure."""
    if result.is_success and result.value == 0:
        return Result.fail(NotFound(entity, key))
    return result


__all__ = ["attempt", "require_rows"]
