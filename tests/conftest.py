"""Pytest configuration and shared fixtures for HabitCal tests.

Every test gets its own temporary SQLite file with foreign keys enabled, so
cascade deletes behave as in the application.
"""

from __future__ import annotations

import itertools
import tempfile
import uuid
from datetime import date
from pathlib import Path

import pytest

from habitcal.config import BaseConfig
from habitcal.context import create_app_context
from habitcal.infra.database import apply_sqlite_pragmas, init_database
from habitcal.infra.repositories import (
    SQLModelHabitCheckRepository,
    SQLModelHabitListRepository,
    SQLModelHabitRepository,
    SQLModelSettingsRepository,
    SQLModelUserRepository,
)
from habitcal.infra.store import Store
from habitcal.models import Habit, HabitList, User
from sqlmodel import create_engine

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine with the schema created and pragmas applied
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    apply_sqlite_pragmas(engine, BaseConfig.SQLITE_PRAGMAS)
    init_database(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture
def store(db_engine) -> Store:
    return Store.from_engine(db_engine)


@pytest.fixture
def clock():
    """Deterministic millisecond clock: 1000, 2000, 3000, ..."""

    counter = itertools.count(1)

    def _now() -> int:
        return next(counter) * 1000

    return _now


@pytest.fixture
def user_repo(store):
    return SQLModelUserRepository(store.users)


@pytest.fixture
def list_repo(store, clock):
    return SQLModelHabitListRepository(store.habit_lists, clock=clock)


@pytest.fixture
def habit_repo(store, clock):
    return SQLModelHabitRepository(store.habits, clock=clock)


@pytest.fixture
def check_repo(store, clock):
    return SQLModelHabitCheckRepository(store.checks, clock=clock)


@pytest.fixture
def settings_repo(store):
    return SQLModelSettingsRepository(store.session_factory, store.notifier)


@pytest.fixture
def app_config(tmp_path, monkeypatch):
    monkeypatch.setenv("HABITCAL_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("HABITCAL_DATABASE_URL", raising=False)
    return BaseConfig()


@pytest.fixture
def app_context(app_config):
    ctx = create_app_context(app_config)
    yield ctx
    ctx.close()


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def user_factory(store):
    """Factory persisting users with unique ids and emails."""

    def _create_user(username: str = "tester", email: str | None = None) -> User:
        user_id = str(uuid.uuid4())
        user = User(id=user_id, username=username, email=email or f"{user_id[:8]}@example.com")
        store.users.insert(user)
        return user

    return _create_user


@pytest.fixture
def user(user_factory) -> User:
    return user_factory()


@pytest.fixture
def habit_list_factory(store, user):
    def _create_list(name: str = "Fitness", owner: User | None = None) -> HabitList:
        owner = owner or user
        list_id = store.habit_lists.insert(HabitList(user_id=owner.id, name=name))
        return store.habit_lists.get(list_id)

    return _create_list


@pytest.fixture
def habit_factory(store, habit_list_factory):
    def _create_habit(name: str = "Run", habit_list: HabitList | None = None) -> Habit:
        habit_list = habit_list or habit_list_factory()
        habit_id = store.habits.insert(Habit(list_id=habit_list.id, name=name))
        return store.habits.get(habit_id)

    return _create_habit


@pytest.fixture
def week_start() -> date:
    """A Monday used as the visible calendar week."""
    return date(2024, 6, 3)
