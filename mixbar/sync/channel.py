"""
Synchronization channel between the audience input surface and the performer
display surfaces.

Any last-write-wins key-value store with push notifications fits the contract:
`write(key, value)` and `subscribe(key, callback) -> unsubscribe`. The in-memory
implementation backs a single-process installation and the tests.
"""

import copy
import logging
import threading
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, Field

from mixbar import config

logger = logging.getLogger(__name__)

SABIT_RECORD_KEY = config.RECORD_KEY

Callback = Callable[[Dict[str, Any]], None]
Unsubscribe = Callable[[], None]


def now_ms() -> int:
    return int(time.time() * 1000)


class SabitRecord(BaseModel):
    """The shared record: display-domain SABIT values plus a write timestamp."""
    S: float = Field(0.0, description="Sweetness (0 - 100)")
    A: float = Field(0.0, description="Acidity (0 - 100)")
    B: float = Field(0.0, description="Bitterness (0 - 100)")
    I: float = Field(0.0, description="Intensity (0 - 100)")
    T: float = Field(0.0, description="Texture (0 - 100)")
    timestamp: Optional[int] = Field(None, description="Write time, ms since epoch. Display only.")

    def to_record(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class SyncChannel(ABC):
    @abstractmethod
    def write(self, key: str, value: Dict[str, Any]) -> Dict[str, Any]:
        """Overwrites the record under `key` wholesale and notifies subscribers."""

    @abstractmethod
    def read(self, key: str) -> Optional[Dict[str, Any]]:
        """Current record under `key`, or None when nothing was written."""

    @abstractmethod
    def subscribe(self, key: str, callback: Callback) -> Unsubscribe:
        """Calls `callback` with the current record (if any) and every later write."""


class InMemorySyncChannel(SyncChannel):
    """
    Thread-safe, process-local channel. Later writes win by arrival order.

    Storing and delivering happen under one re-entrant lock, so every
    subscriber sees writes in store order and its last delivery always matches
    `read()`. Callbacks run on the writer's thread and should hand off quickly.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._records: Dict[str, Dict[str, Any]] = {}
        self._subscribers: Dict[str, List[Callback]] = {}

    def write(self, key: str, value: Dict[str, Any]) -> Dict[str, Any]:
        record = dict(value)
        if record.get("timestamp") is None:
            record["timestamp"] = now_ms()
        with self._lock:
            self._records[key] = record
            callbacks = list(self._subscribers.get(key, []))
            logger.debug(f"[SYNC] write {key}: {record} -> {len(callbacks)} subscribers")
            self._notify(key, record, callbacks)
        return copy.deepcopy(record)

    def read(self, key: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            record = self._records.get(key)
            return copy.deepcopy(record) if record is not None else None

    def subscribe(self, key: str, callback: Callback) -> Unsubscribe:
        with self._lock:
            self._subscribers.setdefault(key, []).append(callback)
            logger.info(f"[SYNC] subscriber added to {key}")
            current = self._records.get(key)
            if current is not None:
                self._notify(key, current, [callback])

        def unsubscribe():
            with self._lock:
                callbacks = self._subscribers.get(key, [])
                if callback in callbacks:
                    callbacks.remove(callback)
                    logger.info(f"[SYNC] subscriber removed from {key}")

        return unsubscribe

    def subscriber_count(self, key: str) -> int:
        with self._lock:
            return len(self._subscribers.get(key, []))

    def _notify(self, key: str, record: Dict[str, Any], callbacks: List[Callback]):
        for callback in callbacks:
            try:
                callback(copy.deepcopy(record))
            except Exception as e:
                logger.error(f"[SYNC] subscriber on {key} failed: {e}")
