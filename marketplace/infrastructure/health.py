# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError

from marketplace.domain.sessions.store import KeyValueStore
from marketplace.infrastructure.db.session import Database
from marketplace.shared.errors.base import AppError
from marketplace.shared.logging import logger


class HealthChecker:
    def __init__(self, *, db: Database, kv_store: KeyValueStore) -> None:
        self._db = db
        self._kv_store = kv_store

    def check(self) -> dict[str, object]:
        status: dict[str, object] = {"ok": True}
        try:
            self._db.ping()
            status["database"] = "ok"
        except SQLAlchemyError as exc:
            logger.warning(f"health: database check failed: {type(exc).__name__}")
            status["ok"] = False
            status["database"] = "error"
        try:
            self._kv_store.ping()
            status["session_store"] = "ok"
        except AppError as exc:
            logger.warning(f"health: session store check failed: {exc.code}")
            status["ok"] = False
            status["session_store"] = "error"
        return status


__all__ = ["HealthChecker"]
