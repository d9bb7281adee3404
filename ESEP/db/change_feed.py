"""
Table change notifications.
Repositories publish an event after every insert/update/delete; pages and
services subscribe per table and refetch their lists when notified.
"""

import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChangeEvent:
    table: str
    action: str          # INSERT, UPDATE or DELETE
    record_id: Any
    version: int
    occurred_at: datetime


class ChangeFeed:
    """In-process change feed shared by all sessions of one server"""

    def __init__(self):
        self._lock = threading.Lock()
        self._versions: Dict[str, int] = {}
        self._subscribers: Dict[str, List[Callable[[ChangeEvent], None]]] = {}

    def publish(self, table: str, action: str, record_id: Any = None) -> ChangeEvent:
        with self._lock:
            version = self._versions.get(table, 0) + 1
            self._versions[table] = version
            callbacks = list(self._subscribers.get(table, []))

        event = ChangeEvent(table, action, record_id, version, datetime.now())
        for callback in callbacks:
            try:
                callback(event)
            except Exception as e:
                # A failing listener must not undo a committed write
                logger.error(f"Change listener for {table} failed: {e}")
        return event

    def subscribe(self, table: str, callback: Callable[[ChangeEvent], None]) -> Callable[[], None]:
        """Register a listener; returns a function that removes it"""
        with self._lock:
            self._subscribers.setdefault(table, []).append(callback)

        def unsubscribe():
            with self._lock:
                listeners = self._subscribers.get(table, [])
                if callback in listeners:
                    listeners.remove(callback)

        return unsubscribe

    def version(self, table: str) -> int:
        with self._lock:
            return self._versions.get(table, 0)

    def snapshot(self, tables) -> Dict[str, int]:
        with self._lock:
            return {table: self._versions.get(table, 0) for table in tables}


# Global change feed instance
change_feed = ChangeFeed()
