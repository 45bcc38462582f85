# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from marketplace.domain.sessions.store import KeyValueStore
from marketplace.shared.config import AppConfig

from .memory import InMemoryKeyValueStore
from .redis_store import RedisKeyValueStore


def build_kv_store(config: AppConfig) -> KeyValueStore:
    if config.session.backend == "memory":
        return InMemoryKeyValueStore()
    return RedisKeyValueStore.connect(config.redis)


__all__ = ["InMemoryKeyValueStore", "KeyValueStore", "RedisKeyValueStore", "build_kv_store"]
