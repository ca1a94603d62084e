"""Habits tracked inside a habit list."""

from __future__ import annotations

from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel

from .timestamps import now_millis


class Habit(SQLModel, table=True):
    """A habit the user checks off on calendar days."""

    __tablename__: ClassVar[str] = "habits"

    id: Optional[int] = Field(default=None, primary_key=True)
    list_id: int = Field(foreign_key="habit_lists.id", ondelete="CASCADE", nullable=False, index=True)
    name: str = Field(nullable=False, max_length=120)
    created_at: int = Field(default_factory=now_millis, nullable=False)
    updated_at: int = Field(default_factory=now_millis, nullable=False)
