"""Daily check records and epoch-day conversion helpers."""

from __future__ import annotations

from datetime import date, timedelta
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel

from .timestamps import now_millis

DEFAULT_EMOJI = "✅"
_EPOCH = date(1970, 1, 1)


def to_epoch_day(day: date) -> int:
    """Days since 1970-01-01; independent of time zone and time of day."""

    return day.toordinal() - _EPOCH.toordinal()


def from_epoch_day(epoch_day: int) -> date:
    return _EPOCH + timedelta(days=epoch_day)


class HabitCheck(SQLModel, table=True):
    """Mark left on one calendar day for one habit.

    At most one row exists per ``(habit_id, date)``; the check repository's
    upsert is the only write path that creates rows.
    """

    __tablename__: ClassVar[str] = "habit_checks"

    id: Optional[int] = Field(default=None, primary_key=True)
    habit_id: int = Field(foreign_key="habits.id", ondelete="CASCADE", nullable=False, index=True)
    date: int = Field(nullable=False, index=True)
    emoji: str = Field(default=DEFAULT_EMOJI, nullable=False, max_length=32)
    note: Optional[str] = Field(default=None)
    created_at: int = Field(default_factory=now_millis, nullable=False)
    updated_at: int = Field(default_factory=now_millis, nullable=False)

    @property
    def day(self) -> date:
        return from_epoch_day(self.date)
