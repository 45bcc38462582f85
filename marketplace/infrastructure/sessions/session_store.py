# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Opaque session tokens kept in a TTL key-value store.

Layout:
    <token>                 -> decimal user id, expires after the session TTL
    user_sessions:<user id> -> set of that user's tokens, TTL kept >= session TTL

Writes span several keys without a transaction. A reverse-index member can
outlive its session; readers treat such members as already revoked and
``list_sessions`` removes them.
"""

from __future__ import annotations

import secrets

from marketplace.domain.sessions.exceptions import (
    CorruptSessionError,
    SessionNotFoundError,
    SessionTokenExhaustedError,
)
from marketplace.domain.sessions.store import KeyValueStore
from marketplace.domain.users.repositories import SessionRepository
from marketplace.infrastructure.observability import record_session_event
from marketplace.shared.logging import RequestContext, context_log

TOKEN_BYTES = 32
INDEX_PREFIX = "user_sessions:"


def index_key(user_id: int) -> str:
    return f"{INDEX_PREFIX}{user_id}"


class SessionStore(SessionRepository):
    def __init__(
        self,
        store: KeyValueStore,
        *,
        ttl_seconds: int,
        max_token_attempts: int = 5,
    ) -> None:
        self._store = store
        self._ttl = ttl_seconds
        self._max_attempts = max_token_attempts

    @property
    def ttl_seconds(self) -> int:
        return self._ttl

    def _reserve_token(self, user_id: int, ctx: RequestContext | None) -> str:
        log = context_log(ctx)
        value = str(user_id)
        for attempt in range(1, self._max_attempts + 1):
            token = secrets.token_urlsafe(TOKEN_BYTES)
            if self._store.exists(token):
                log.warning(f"session: token collision attempt={attempt}")
                record_session_event("collision")
                continue
            if self._store.set(token, value, self._ttl, only_if_absent=True):
                return token
            log.warning(f"session: concurrent token claim attempt={attempt}")
            record_session_event("collision")
        log.error(f"session: no unique token after {self._max_attempts} attempts user_id={user_id}")
        raise SessionTokenExhaustedError(context={"attempts": self._max_attempts})

    def create_session(self, user_id: int, *, ctx: RequestContext | None = None) -> str:
        token = self._reserve_token(user_id, ctx)
        key = index_key(user_id)
        self._store.sadd(key, token)
        self._store.expire(key, self._ttl)
        record_session_event("created")
        context_log(ctx).info(f"session: created user_id={user_id}")
        return token

    def get_session(self, token: str, *, ctx: RequestContext | None = None) -> int:
        if not token:
            raise SessionNotFoundError()
        raw = self._store.get(token)
        if raw is None:
            raise SessionNotFoundError()
        try:
            return int(raw)
        except ValueError:
            context_log(ctx).error("session: stored value is not a user id")
            raise CorruptSessionError() from None

    def refresh_session(self, token: str, *, ctx: RequestContext | None = None) -> int:
        user_id = self.get_session(token, ctx=ctx)
        if not self._store.expire(token, self._ttl):
            raise SessionNotFoundError()
        key = index_key(user_id)
        self._store.sadd(key, token)
        current = self._store.ttl(key)
        if current is None or current < self._ttl:
            self._store.expire(key, self._ttl)
        context_log(ctx).debug(f"session: refreshed user_id={user_id}")
        return user_id

    def delete_session(self, token: str, *, ctx: RequestContext | None = None) -> None:
        if not token:
            return
        raw = self._store.get(token)
        if raw is None:
            return
        self._store.delete(token)
        try:
            user_id = int(raw)
        except ValueError:
            context_log(ctx).warning("session: deleted token with corrupt owner")
            return
        self._store.srem(index_key(user_id), token)
        record_session_event("revoked")
        context_log(ctx).info(f"session: revoked user_id={user_id}")

    def delete_all_sessions(self, user_id: int, *, ctx: RequestContext | None = None) -> int:
        key = index_key(user_id)
        revoked = 0
        for token in self._store.smembers(key):
            revoked += self._store.delete(token)
        self._store.delete(key)
        record_session_event("revoked", revoked)
        context_log(ctx).info(f"session: revoked all user_id={user_id} count={revoked}")
        return revoked

    def list_sessions(self, user_id: int, *, ctx: RequestContext | None = None) -> list[str]:
        key = index_key(user_id)
        live: list[str] = []
        stale = 0
        for token in self._store.smembers(key):
            if self._store.get(token) == str(user_id):
                live.append(token)
            else:
                self._store.srem(key, token)
                stale += 1
        if stale:
            context_log(ctx).debug(f"session: pruned {stale} stale index members user_id={user_id}")
        return sorted(live)


__all__ = ["INDEX_PREFIX", "SessionStore", "index_key"]
