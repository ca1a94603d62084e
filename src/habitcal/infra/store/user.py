"""User table store."""

from __future__ import annotations

from typing import ClassVar, Optional

from sqlmodel import select

from ...models.user import User
from ..live import LiveQuery
from .base import SQLModelStore


class UserStore(SQLModelStore[User]):
    model = User
    table: ClassVar[str] = "users"
    cascade_tables = ("habit_lists", "habits", "habit_checks")

    def by_email(self, email: str) -> Optional[User]:
        return self._first(select(User).where(User.email == email).limit(1))

    def watch_by_email(self, email: str) -> LiveQuery[Optional[User]]:
        return self._live(lambda: self.by_email(email))

    def by_username(self, username: str) -> Optional[User]:
        return self._first(select(User).where(User.username == username).limit(1))
