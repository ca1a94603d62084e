"""Application context wiring the store, repositories and services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .config import BaseConfig
from .infra.repositories import (
    SQLModelHabitCheckRepository,
    SQLModelHabitListRepository,
    SQLModelHabitRepository,
    SQLModelSettingsRepository,
    SQLModelUserRepository,
)
from .infra.store import Store, bootstrap_store
from .logging_config import get_logger
from .services.auth import Authenticated, AuthService
from .services.boards import HabitBoard, HabitListBoard

logger = get_logger("context")


@dataclass
class AppContext:
    """Centralized application context with services and state."""

    config: BaseConfig
    store: Store

    # Repositories
    user_repo: SQLModelUserRepository
    habit_list_repo: SQLModelHabitListRepository
    habit_repo: SQLModelHabitRepository
    habit_check_repo: SQLModelHabitCheckRepository
    settings_repo: SQLModelSettingsRepository

    auth: AuthService

    def current_user_id(self) -> Optional[str]:
        state = self.auth.current_session().first()
        return state.user_id if isinstance(state, Authenticated) else None

    def require_user_id(self) -> str:
        """Return the signed-in user's id or raise if nobody is signed in."""
        user_id = self.current_user_id()
        if user_id is None:
            raise RuntimeError("User is not authenticated")
        return user_id

    def list_board(self) -> HabitListBoard:
        return HabitListBoard(self.require_user_id(), self.habit_list_repo)

    def habit_board(self, list_id: int) -> HabitBoard:
        """Board for one list screen; each call owns a fresh check window."""
        return HabitBoard(list_id, self.habit_list_repo, self.habit_repo, self.habit_check_repo)

    def close(self) -> None:
        self.store.close()


def create_app_context(config: Optional[BaseConfig] = None, store: Optional[Store] = None) -> AppContext:
    """Create and initialize the application context."""

    if config is None:
        config = BaseConfig()
    if store is None:
        store = bootstrap_store(config)

    user_repo = SQLModelUserRepository(store.users)
    settings_repo = SQLModelSettingsRepository(store.session_factory, store.notifier)
    ctx = AppContext(
        config=config,
        store=store,
        user_repo=user_repo,
        habit_list_repo=SQLModelHabitListRepository(store.habit_lists),
        habit_repo=SQLModelHabitRepository(store.habits),
        habit_check_repo=SQLModelHabitCheckRepository(store.checks),
        settings_repo=settings_repo,
        auth=AuthService(user_repo, settings_repo),
    )
    logger.info("Application context ready", extra={"database_url": config.DATABASE_URL})
    return ctx
