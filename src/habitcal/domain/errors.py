"""Error taxonomy shared by the store, repositories and services."""

from __future__ import annotations


class HabitCalError(Exception):
    """Base class for every error raised or returned by habitcal."""


class StoreError(HabitCalError):
    """The persistence store could not complete an operation."""


class ConstraintViolation(StoreError):
    """Integrity or I/O fault reported by the database engine."""


class NotFound(HabitCalError):
    """A mutation matched no row.

    The store reports this as ``rows_affected == 0``; repositories carry an
    instance inside a failed ``Result`` instead of raising it.
    """

    def __init__(self, entity: str, key: object) -> None:
        super().__init__(f"{entity} {key!r} not found")
        self.entity = entity
        self.key = key


class ValidationError(HabitCalError):
    """Input rejected before reaching the store (blank name, email, ...)."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class AuthError(HabitCalError):
    """Credential or session problem in the auth service."""


__all__ = [
    "AuthError",
    "ConstraintViolation",
    "HabitCalError",
    "NotFound",
    "StoreError",
    "ValidationError",
]
