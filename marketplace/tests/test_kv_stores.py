from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import redis

from marketplace.domain.sessions.exceptions import StoreUnavailableError
from marketplace.infrastructure.kv import memory as memory_module
from marketplace.infrastructure.kv.memory import InMemoryKeyValueStore
from marketplace.infrastructure.kv.redis_store import RedisKeyValueStore
from marketplace.shared.config import RedisConfig
from marketplace.tests.helpers import FakeClock


def test_memory_set_get_and_expiry(kv_store: InMemoryKeyValueStore, clock: FakeClock) -> None:
    assert kv_store.set("k", "v", 10) is True
    assert kv_store.get("k") == "v"
    assert kv_store.ttl("k") == 10

    clock.advance(10)

    assert kv_store.get("k") is None
    assert kv_store.exists("k") is False


def test_memory_only_if_absent(kv_store: InMemoryKeyValueStore, clock: FakeClock) -> None:
    assert kv_store.set("k", "first", 5, only_if_absent=True) is True
    assert kv_store.set("k", "second", 5, only_if_absent=True) is False
    assert kv_store.get("k") == "first"

    clock.advance(5)

    assert kv_store.set("k", "third", 5, only_if_absent=True) is True


def test_memory_sets_and_expire(kv_store: InMemoryKeyValueStore, clock: FakeClock) -> None:
    assert kv_store.sadd("s", "a") == 1
    assert kv_store.sadd("s", "a") == 0
    kv_store.sadd("s", "b")
    assert kv_store.smembers("s") == {"a", "b"}
    assert kv_store.ttl("s") is None

    assert kv_store.expire("s", 3) is True
    assert kv_store.srem("s", "a") == 1
    clock.advance(3)

    assert kv_store.smembers("s") == set()
    assert kv_store.expire("s", 3) is False


def test_memory_delete_counts_live_keys(kv_store: InMemoryKeyValueStore) -> None:
    kv_store.set("k", "v", 10)

    assert kv_store.delete("k") == 1
    assert kv_store.delete("k") == 0


def test_memory_default_clock_is_monotonic() -> None:
    store = InMemoryKeyValueStore()

    assert store._clock is memory_module.time.monotonic
    assert store.ping() is True


@pytest.fixture()
def redis_client() -> MagicMock:
    return MagicMock(spec=redis.Redis)


def test_redis_set_maps_to_set_nx_ex(redis_client: MagicMock) -> None:
    redis_client.set.return_value = None
    store = RedisKeyValueStore(redis_client)

    assert store.set("tok", "7", 60, only_if_absent=True) is False
    redis_client.set.assert_called_once_with("tok", "7", ex=60, nx=True)


def test_redis_ttl_sentinels_become_none(redis_client: MagicMock) -> None:
    store = RedisKeyValueStore(redis_client)

    redis_client.ttl.return_value = -2
    assert store.ttl("missing") is None
    redis_client.ttl.return_value = -1
    assert store.ttl("persistent") is None
    redis_client.ttl.return_value = 42
    assert store.ttl("live") == 42


def test_redis_errors_become_store_unavailable(redis_client: MagicMock) -> None:
    redis_client.get.side_effect = redis.ConnectionError("down")
    store = RedisKeyValueStore(redis_client)

    with pytest.raises(StoreUnavailableError) as exc_info:
        store.get("tok")

    assert exc_info.value.code == "session_store_unavailable"
    assert exc_info.value.context == {"operation": "get"}
    assert exc_info.value.status == 500


def test_redis_connect_gives_up_after_retries(monkeypatch: pytest.MonkeyPatch) -> None:
    client = MagicMock(spec=redis.Redis)
    client.ping.side_effect = redis.ConnectionError("refused")
    monkeypatch.setattr(redis, "Redis", MagicMock(return_value=client))

    with pytest.raises(StoreUnavailableError):
        RedisKeyValueStore.connect(RedisConfig(REDIS_CONNECT_RETRIES=0))

    assert client.ping.call_count == 1


def test_redis_connect_retries_until_ping_succeeds(monkeypatch: pytest.MonkeyPatch) -> None:
    client = MagicMock(spec=redis.Redis)
    client.ping.side_effect = [redis.ConnectionError("refused"), True]
    monkeypatch.setattr(redis, "Redis", MagicMock(return_value=client))

    store = RedisKeyValueStore.connect(RedisConfig(REDIS_CONNECT_RETRIES=2))

    assert isinstance(store, RedisKeyValueStore)
    assert client.ping.call_count == 2
