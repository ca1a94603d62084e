"""Table-keyed change notification and re-runnable ("live") queries.

Stores publish the tables a committed mutation touched; every ``LiveQuery``
subscribed to one of those tables re-runs and pushes its fresh result.
"""

from __future__ import annotations

import threading
from typing import Callable, Generic, Iterable, TypeVar

from ..logging_config import get_logger

T = TypeVar("T")
U = TypeVar("U")

Unsubscribe = Callable[[], None]

logger = get_logger("live")


class ChangeNotifier:
    """Registry of table listeners shared by all stores of one database."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._listeners: dict[str, list[Callable[[], None]]] = {}

    def listen(self, tables: Iterable[str], callback: Callable[[], None]) -> Unsubscribe:
        tables = tuple(dict.fromkeys(tables))
        with self._lock:
            for table in tables:
                self._listeners.setdefault(table, []).append(callback)

        def unsubscribe() -> None:
            with self._lock:
                for table in tables:
                    callbacks = self._listeners.get(table, [])
                    if callback in callbacks:
                        callbacks.remove(callback)

        return unsubscribe

    def publish(self, *tables: str) -> None:
        """Invoke each listener of ``tables`` once, even if it watches several."""
        with self._lock:
            pending: list[Callable[[], None]] = []
            for table in tables:
                for callback in self._listeners.get(table, ()):
                    if callback not in pending:
                        pending.append(callback)
        for callback in pending:
            # The write is already committed; a failing listener is only logged
            try:
                callback()
            except Exception:
                logger.warning("Change listener failed", exc_info=True, extra={"tables": tables})

    def listener_count(self, table: str) -> int:
        with self._lock:
            return len(self._listeners.get(table, ()))


class LiveQuery(Generic[T]):
    """A query that can be run once or observed for changes."""

    def __init__(
        self,
        notifier: ChangeNotifier,
        tables: Iterable[str],
        fetch: Callable[[], T],
    ) -> None:
        self._notifier = notifier
        self.tables = tuple(tables)
        self._fetch = fetch

    def first(self) -> T:
        """Run the query once and return its current result."""
        return self._fetch()

    def subscribe(self, callback: Callable[[T], None]) -> Unsubscribe:
        """Push the current result now and after every relevant change.

        Returns a handle that stops delivery; calling it twice is harmless.
        """

        def refresh() -> None:
            # A failed re-run is logged and this update skipped.
            try:
                result = self._fetch()
            except Exception:
                logger.warning("Live query refresh failed", exc_info=True, extra={"tables": self.tables})
                return
            callback(result)

        unsubscribe = self._notifier.listen(self.tables, refresh)
        try:
            initial = self._fetch()
        except Exception:
            unsubscribe()
            raise
        callback(initial)
        return unsubscribe

    def map(self, transform: Callable[[T], U]) -> "LiveQuery[U]":
        """Derive a query whose result is ``transform`` applied to this one's."""
        fetch = self._fetch
        return LiveQuery(self._notifier, self.tables, lambda: transform(fetch()))


__all__ = ["ChangeNotifier", "LiveQuery", "Unsubscribe"]
