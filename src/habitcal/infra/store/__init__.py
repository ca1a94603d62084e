"""Persistence store: one SQLModel store per table behind a shared handle."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.engine import Engine

from ...config import BaseConfig
from ..database import SessionFactory, create_db_engine, create_session_factory, init_database
from ..live import ChangeNotifier
from .base import SQLModelStore
from .habit import HabitStore
from .habit_check import HabitCheckStore
from .habit_list import HabitListStore
from .user import UserStore


@dataclass
class Store:
    """Explicit database handle passed to repositories."""

    engine: Engine
    session_factory: SessionFactory
    notifier: ChangeNotifier
    users: UserStore
    habit_lists: HabitListStore
    habits: HabitStore
    checks: HabitCheckStore

    @classmethod
    def from_engine(cls, engine: Engine) -> "Store":
        session_factory = create_session_factory(engine)
        notifier = ChangeNotifier()
        return cls(
            engine=engine,
            session_factory=session_factory,
            notifier=notifier,
            users=UserStore(session_factory, notifier),
            habit_lists=HabitListStore(session_factory, notifier),
            habits=HabitStore(session_factory, notifier),
            checks=HabitCheckStore(session_factory, notifier),
        )

    def close(self) -> None:
        self.engine.dispose()


def bootstrap_store(config: BaseConfig | None = None) -> Store:
    """Create engine, schema and stores in one step (app startup and tests)."""

    cfg = config or BaseConfig()
    engine = create_db_engine(cfg)
    init_database(engine)
    return Store.from_engine(engine)


__all__ = [
    "HabitCheckStore",
    "HabitListStore",
    "HabitStore",
    "SQLModelStore",
    "Store",
    "UserStore",
    "bootstrap_store",
]
