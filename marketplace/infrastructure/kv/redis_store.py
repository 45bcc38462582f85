# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Redis-backed key-value store for sessions."""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

import redis
from tenacity import (
    RetryError,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from marketplace.domain.sessions.exceptions import StoreUnavailableError
from marketplace.domain.sessions.store import KeyValueStore
from marketplace.shared.config import RedisConfig
from marketplace.shared.logging import logger

T = TypeVar("T")


class RedisKeyValueStore(KeyValueStore):
    def __init__(self, client: redis.Redis) -> None:
        self._client = client

    @classmethod
    def connect(cls, config: RedisConfig) -> RedisKeyValueStore:
        client = redis.Redis(
            host=config.host,
            port=config.port,
            db=config.db,
            password=config.password,
            socket_connect_timeout=config.connect_timeout,
            socket_timeout=config.connect_timeout,
            decode_responses=True,
        )
        retry = Retrying(
            stop=stop_after_attempt(config.connect_retries + 1),
            wait=wait_exponential(multiplier=0.2, max=2),
            retry=retry_if_exception_type(redis.RedisError),
            reraise=True,
        )
        try:
            for attempt in retry:
                with attempt:
                    logger.debug(
                        f"kv: redis ping attempt={attempt.retry_state.attempt_number} "
                        f"host={config.host}:{config.port}"
                    )
                    client.ping()
        except (redis.RedisError, RetryError) as exc:
            logger.error(f"kv: redis unreachable at {config.host}:{config.port}: {exc}")
            raise StoreUnavailableError("connect") from exc

        logger.info(f"kv: connected to redis {config.host}:{config.port}/{config.db}")
        return cls(client)

    def _call(self, operation: str, func: Callable[[], T]) -> T:
        try:
            return func()
        except redis.RedisError as exc:
            raise StoreUnavailableError(operation) from exc

    def set(self, key: str, value: str, ttl_seconds: int, *, only_if_absent: bool = False) -> bool:
        result = self._call(
            "set",
            lambda: self._client.set(key, value, ex=ttl_seconds, nx=only_if_absent),
        )
        return bool(result)

    def get(self, key: str) -> str | None:
        return self._call("get", lambda: self._client.get(key))  # type: ignore[return-value]

    def delete(self, key: str) -> int:
        return int(self._call("del", lambda: self._client.delete(key)))  # type: ignore[arg-type]

    def exists(self, key: str) -> bool:
        return bool(self._call("exists", lambda: self._client.exists(key)))

    def sadd(self, key: str, member: str) -> int:
        return int(self._call("sadd", lambda: self._client.sadd(key, member)))  # type: ignore[arg-type]

    def srem(self, key: str, member: str) -> int:
        return int(self._call("srem", lambda: self._client.srem(key, member)))  # type: ignore[arg-type]

    def smembers(self, key: str) -> set[str]:
        return set(self._call("smembers", lambda: self._client.smembers(key)))  # type: ignore[arg-type]

    def expire(self, key: str, ttl_seconds: int) -> bool:
        return bool(self._call("expire", lambda: self._client.expire(key, ttl_seconds)))

    def ttl(self, key: str) -> int | None:
        remaining = int(self._call("ttl", lambda: self._client.ttl(key)))  # type: ignore[arg-type]
        # -2: missing key, -1: no expiry
        return remaining if remaining >= 0 else None

    def ping(self) -> bool:
        return bool(self._call("ping", self._client.ping))


__all__ = ["RedisKeyValueStore"]
