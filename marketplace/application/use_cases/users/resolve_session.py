# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from marketplace.domain.sessions.exceptions import SessionNotFoundError
from marketplace.domain.users.repositories import SessionRepository
from marketplace.shared.errors.base import UnauthorizedError
from marketplace.shared.logging import RequestContext


class ResolveSessionUseCase:
    """Turns a session cookie into a user id, sliding its expiry."""

    def __init__(self, *, sessions: SessionRepository) -> None:
        self._sessions = sessions

    def execute(self, token: str | None, *, ctx: RequestContext | None = None) -> int:
        if not token:
            raise UnauthorizedError(context={"reason": "no_session"})
        try:
            return self._sessions.refresh_session(token, ctx=ctx)
        except SessionNotFoundError:
            raise UnauthorizedError(context={"reason": "invalid_session"}) from None
