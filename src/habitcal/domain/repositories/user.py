"""User repository protocol."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol

from ...models.user import User
from ..results import Result

if TYPE_CHECKING:
    from ...infra.live import LiveQuery


class UserRepository(Protocol):
    """Repository for user rows (the auth service's counterpart in the store)."""

    def create_user(self, user: User) -> Result[str]:
        ...

    def update_user(self, user: User) -> Result[int]:
        ...

    def delete_user(self, user_id: str) -> Result[int]:
        """Delete a user together with all lists, habits and checks."""
        ...

    def get_user(self, user_id: str) -> Optional[User]:
        """One-shot read; a database failure raises ``StoreError``."""
        ...

    def get_user_by_email(self, email: str) -> Optional[User]:
        ...

    def watch_user(self, user_id: str) -> LiveQuery[Optional[User]]:
        ...
