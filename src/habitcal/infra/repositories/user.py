"""SQLModel implementation of the user repository."""

from __future__ import annotations

from typing import Optional

from ...domain.results import Result
from ...models.user import User
from ..live import LiveQuery
from ..store import UserStore
from .base import attempt, require_rows


class SQLModelUserRepository:
    """User rows; deleting one cascades through the user's habit data."""

    def __init__(self, store: UserStore):
        self.store = store

    def create_user(self, user: User) -> Result[str]:
        return attempt("create_user", lambda: self.store.insert(user), user_id=user.id)

    def update_user(self, user: User) -> Result[int]:
        result = attempt("update_user", lambda: self.store.update(user), user_id=user.id)
        return require_rows(result, "User", user.id)

    def delete_user(self, user_id: str) -> Result[int]:
        result = attempt("delete_user", lambda: self.store.delete_by_id(user_id), user_id=user_id)
        return require_rows(result, "User", user_id)

    def get_user(self, user_id: str) -> Optional[User]:
        return self.store.get(user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.store.by_email(email)

    def watch_user(self, user_id: str) -> LiveQuery[Optional[User]]:
        return self.store.watch(user_id)


__all__ = ["SQLModelUserRepository"]
