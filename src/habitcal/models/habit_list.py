"""Named group of habits owned by a user."""

from __future__ import annotations

from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel

from .timestamps import now_millis


class HabitList(SQLModel, table=True):
    """A user's list of habits, e.g. "Fitness"."""

    __tablename__: ClassVar[str] = "habit_lists"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="users.id", ondelete="CASCADE", nullable=False, index=True)
    name: str = Field(nullable=False, max_length=120)
    created_at: int = Field(default_factory=now_millis, nullable=False)
    updated_at: int = Field(default_factory=now_millis, nullable=False)
