# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol


class KeyValueStore(Protocol):
    """TTL key-value store with set members, shaped after the Redis commands it maps to.

    Every operation is atomic per key; nothing spans keys.
    """

    def set(self, key: str, value: str, ttl_seconds: int, *, only_if_absent: bool = False) -> bool: ...
    def get(self, key: str) -> str | None: ...
    def delete(self, key: str) -> int: ...
    def exists(self, key: str) -> bool: ...
    def sadd(self, key: str, member: str) -> int: ...
    def srem(self, key: str, member: str) -> int: ...
    def smembers(self, key: str) -> set[str]: ...
    def expire(self, key: str, ttl_seconds: int) -> bool: ...
    def ttl(self, key: str) -> int | None: ...
    def ping(self) -> bool: ...
