"""Settings repository for app-level key/value pairs."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from ...domain.errors import ConstraintViolation
from ...models.settings import AppSetting
from ..database import SessionFactory
from ..live import ChangeNotifier, LiveQuery

TABLE = "app_settings"


class SQLModelSettingsRepository:
    """SQLModel-based key/value repository with change notification."""

    def __init__(self, session_factory: SessionFactory, notifier: ChangeNotifier):
        self.session_factory = session_factory
        self.notifier = notifier

    @contextmanager
    def _session(self) -> Iterator[Session]:
        try:
            with self.session_factory() as session:
                yield session
        except SQLAlchemyError as exc:
            raise ConstraintViolation(f"settings access failed: {exc}") from exc

    def get(self, key: str) -> Optional[str]:
        with self._session() as session:
            setting = session.get(AppSetting, key)
            return setting.value if setting else None

    def get_many(self, *keys: str) -> dict[str, str]:
        with self._session() as session:
            rows = session.exec(select(AppSetting).where(AppSetting.key.in_(keys))).all()  # type: ignore[attr-defined]
            return {row.key: row.value for row in rows}

    def set(self, key: str, value: str) -> None:
        self.set_many({key: value})

    def set_many(self, values: dict[str, str]) -> None:
        with self._session() as session:
            for key, value in values.items():
                setting = session.get(AppSetting, key)
                if setting:
                    setting.value = value
                else:
                    setting = AppSetting(key=key, value=value)
                session.add(setting)
        self.notifier.publish(TABLE)

    def delete(self, *keys: str) -> None:
        with self._session() as session:
            for key in keys:
                setting = session.get(AppSetting, key)
                if setting:
                    session.delete(setting)
        self.notifier.publish(TABLE)

    def watch(self, *keys: str, transform: Callable[[dict[str, str]], object] | None = None) -> LiveQuery:
        """Live view of ``keys``; ``transform`` maps the key/value dict."""
        query = LiveQuery(self.notifier, (TABLE,), lambda: self.get_many(*keys))
        return query.map(transform) if transform else query


__all__ = ["SQLModelSettingsRepository"]
