# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock

from marketplace.domain.sessions.store import KeyValueStore
from marketplace.shared.logging import logger


@dataclass(slots=True)
class _Entry:
    value: str | set[str]
    expires_at: float | None

    def is_expired(self, now: float) -> bool:
        return self.expires_at is not None and now >= self.expires_at


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local stand-in for Redis; single process only."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._lock = Lock()
        self._store: dict[str, _Entry] = {}

    def _live(self, key: str) -> _Entry | None:
        entry = self._store.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            logger.debug(f"kv: expired key={key[:8]}")
            self._store.pop(key, None)
            return None
        return entry

    def set(self, key: str, value: str, ttl_seconds: int, *, only_if_absent: bool = False) -> bool:
        with self._lock:
            if only_if_absent and self._live(key) is not None:
                return False
            self._store[key] = _Entry(value=value, expires_at=self._clock() + ttl_seconds)
            return True

    def get(self, key: str) -> str | None:
        with self._lock:
            entry = self._live(key)
            if entry is None or not isinstance(entry.value, str):
                return None
            return entry.value

    def delete(self, key: str) -> int:
        with self._lock:
            if self._live(key) is None:
                return 0
            self._store.pop(key, None)
            return 1

    def exists(self, key: str) -> bool:
        with self._lock:
            return self._live(key) is not None

    def sadd(self, key: str, member: str) -> int:
        with self._lock:
            entry = self._live(key)
            if entry is None:
                entry = _Entry(value=set(), expires_at=None)
                self._store[key] = entry
            if not isinstance(entry.value, set):
                raise TypeError(f"key {key!r} does not hold a set")
            if member in entry.value:
                return 0
            entry.value.add(member)
            return 1

    def srem(self, key: str, member: str) -> int:
        with self._lock:
            entry = self._live(key)
            if entry is None or not isinstance(entry.value, set) or member not in entry.value:
                return 0
            entry.value.discard(member)
            if not entry.value:
                self._store.pop(key, None)
            return 1

    def smembers(self, key: str) -> set[str]:
        with self._lock:
            entry = self._live(key)
            if entry is None or not isinstance(entry.value, set):
                return set()
            return set(entry.value)

    def expire(self, key: str, ttl_seconds: int) -> bool:
        with self._lock:
            entry = self._live(key)
            if entry is None:
                return False
            entry.expires_at = self._clock() + ttl_seconds
            return True

    def ttl(self, key: str) -> int | None:
        with self._lock:
            entry = self._live(key)
            if entry is None or entry.expires_at is None:
                return None
            return max(0, int(entry.expires_at - self._clock()))

    def ping(self) -> bool:
        return True

    def clear(self) -> None:
        with self._lock:
            logger.debug("kv: clear all keys")
            self._store.clear()


__all__ = ["InMemoryKeyValueStore"]
