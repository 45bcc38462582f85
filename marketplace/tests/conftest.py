from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest
from flask import Flask

from marketplace.app import create_app
from marketplace.infrastructure.container import Container
from marketplace.infrastructure.kv.memory import InMemoryKeyValueStore
from marketplace.shared.config import AppConfig, DatabaseConfig, SecurityConfig, SessionConfig
from marketplace.tests.helpers import DeterministicHasher, FakeClock, image_transport, png_bytes


@pytest.fixture(autouse=True)
def _log_to_tmp(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_FILE", str(tmp_path / "marketplace.log"))


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def kv_store(clock: FakeClock) -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore(clock=clock)


@pytest.fixture()
def app_config() -> AppConfig:
    return AppConfig(
        APP_ENV="test",
        SECRET_KEY="test-secret-key",
        database=DatabaseConfig(DATABASE_URL="sqlite://"),
        session=SessionConfig(KV_BACKEND="memory", SESSION_TTL=3600),
        security=SecurityConfig(ENABLE_CSRF=True, COOKIE_SECURE=False),
    )


@pytest.fixture()
def make_app(
    app_config: AppConfig, kv_store: InMemoryKeyValueStore
) -> Callable[..., Flask]:
    def _make(transport: httpx.AsyncBaseTransport | None = None) -> Flask:
        container = Container(
            app_config,
            kv_store=kv_store,
            transport=transport or image_transport(png_bytes(800, 600)),
            password_hasher=DeterministicHasher(),
        )
        app = create_app(app_config, container)
        app.config.update(TESTING=True)
        return app

    return _make


@pytest.fixture()
def app(make_app: Callable[..., Flask]) -> Flask:
    return make_app()
