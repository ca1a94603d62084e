"""Shared CRUD behaviour for the per-entity SQLModel stores."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, ClassVar, Generic, Iterator, Optional, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel

from ...domain.errors import ConstraintViolation
from ...logging_config import get_logger
from ..database import SessionFactory
from ..live import ChangeNotifier, LiveQuery

ModelT = TypeVar("ModelT", bound=SQLModel)

logger = get_logger("store")


class SQLModelStore(Generic[ModelT]):
    """CRUD over one table keyed by ``id``.

    Every mutation runs in its own session/transaction and, once committed,
    publishes the tables it touched (``cascade_tables`` included for deletes).
    """

    model: ClassVar[type[SQLModel]]
    table: ClassVar[str]
    cascade_tables: ClassVar[tuple[str, ...]] = ()

    def __init__(self, session_factory: SessionFactory, notifier: ChangeNotifier):
        self.session_factory = session_factory
        self.notifier = notifier

    @contextmanager
    def _transaction(self, action: str) -> Iterator[Session]:
        """Yield a session; engine errors surface as ``ConstraintViolation``."""
        try:
            with self.session_factory() as session:
                yield session
        except SQLAlchemyError as exc:
            raise ConstraintViolation(f"{action} on {self.table} failed: {exc}") from exc

    def _live(self, fetch, *tables: str) -> LiveQuery[Any]:
        return LiveQuery(self.notifier, tables or (self.table,), fetch)

    def insert(self, entity: ModelT) -> Any:
        """Insert, or replace the row holding the same primary key; return the id."""
        with self._transaction("insert") as session:
            merged = session.merge(entity)
            session.flush()
            entity_id = merged.id
        logger.debug("Inserted row", extra={"table": self.table, "row_id": entity_id})
        self.notifier.publish(self.table)
        return entity_id

    def update(self, entity: ModelT) -> int:
        """Overwrite the row matching ``entity.id``; 0 when there is none."""
        if entity.id is None:
            return 0
        with self._transaction("update") as session:
            existing = session.get(self.model, entity.id)
            if existing is None:
                return 0
            existing.sqlmodel_update(entity.model_dump(exclude={"id"}))
            session.add(existing)
        self.notifier.publish(self.table)
        return 1

    def delete(self, entity: ModelT) -> int:
        return self.delete_by_id(entity.id)

    def delete_by_id(self, entity_id: Any) -> int:
        """Delete one row; dependants go with it through ON DELETE CASCADE."""
        if entity_id is None:
            return 0
        with self._transaction("delete") as session:
            existing = session.get(self.model, entity_id)
            if existing is None:
                return 0
            session.delete(existing)
        logger.debug("Deleted row", extra={"table": self.table, "row_id": entity_id})
        self.notifier.publish(self.table, *self.cascade_tables)
        return 1

    def get(self, entity_id: Any) -> Optional[ModelT]:
        with self._transaction("get") as session:
            obj = session.get(self.model, entity_id)
            if obj:
                session.expunge(obj)
            return obj  # type: ignore[return-value]

    def watch(self, entity_id: Any) -> LiveQuery[Optional[ModelT]]:
        return self._live(lambda: self.get(entity_id))

    def _all(self, statement) -> list[ModelT]:
        with self._transaction("select") as session:
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def _first(self, statement) -> Optional[ModelT]:
        with self._transaction("select") as session:
            obj = session.exec(statement).first()
            if obj:
                session.expunge(obj)
            return obj


__all__ = ["SQLModelStore"]
