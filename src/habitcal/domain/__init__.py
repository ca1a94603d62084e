"""Domain-level contracts: errors, results and repository protocols."""

from .errors import (
    AuthError,
    ConstraintViolation,
    HabitCalError,
    NotFound,
    StoreError,
    ValidationError,
)
from .results import Result

__all__ = [
    "AuthError",
    "ConstraintViolation",
    "HabitCalError",
    "NotFound",
    "Result",
    "StoreError",
    "ValidationError",
]
