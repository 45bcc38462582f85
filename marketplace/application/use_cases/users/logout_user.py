"""Use-cases for revoking sessions."""

from __future__ import annotations

from marketplace.domain.users.repositories import SessionRepository
from marketplace.shared.logging import RequestContext


class LogoutUserUseCase:
    def __init__(self, *, sessions: SessionRepository) -> None:
        self._sessions = sessions

    def execute(self, token: str | None, *, ctx: RequestContext | None = None) -> None:
        if token:
            self._sessions.delete_session(token, ctx=ctx)


class LogoutAllUseCase:
    def __init__(self, *, sessions: SessionRepository) -> None:
        self._sessions = sessions

    def execute(self, user_id: int, *, ctx: RequestContext | None = None) -> int:
        return self._sessions.delete_all_sessions(user_id, ctx=ctx)
