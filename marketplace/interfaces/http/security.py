# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps

from flask import Flask, Response, current_app, g, request

from marketplace.application.use_cases.users.resolve_session import ResolveSessionUseCase
from marketplace.shared.config import SecurityConfig
from marketplace.shared.errors.base import UnauthorizedError
from marketplace.shared.middleware.csrf import SESSION_COOKIE
from marketplace.shared.middleware.request_logger import current_request_context

_EXTENSION_KEY = "marketplace.sessions"


class SessionGuard:
    def __init__(
        self,
        *,
        resolve: ResolveSessionUseCase,
        security: SecurityConfig,
        ttl_seconds: int,
    ) -> None:
        self._resolve = resolve
        self._security = security
        self._ttl = ttl_seconds

    def resolve(self, *, required: bool) -> int | None:
        token = request.cookies.get(SESSION_COOKIE)
        try:
            return self._resolve.execute(token, ctx=current_request_context())
        except UnauthorizedError:
            if required:
                raise
            return None

    def set_session_cookie(self, response: Response, token: str) -> None:
        response.set_cookie(
            SESSION_COOKIE,
            token,
            httponly=True,
            samesite=self._security.cookie_samesite,
            secure=self._security.cookie_secure,
            max_age=self._ttl,
        )

    def clear_session_cookie(self, response: Response) -> None:
        response.delete_cookie(
            SESSION_COOKIE,
            httponly=True,
            samesite=self._security.cookie_samesite,
            secure=self._security.cookie_secure,
        )


def configure_session_guard(app: Flask, guard: SessionGuard) -> None:
    app.extensions[_EXTENSION_KEY] = guard


def get_session_guard() -> SessionGuard:
    return current_app.extensions[_EXTENSION_KEY]


def login_required(f: Callable):
    @wraps(f)
    def wrapper(*args, **kwargs):
        g.user_id = get_session_guard().resolve(required=True)
        return f(*args, **kwargs)

    return wrapper


def session_optional(f: Callable):
    @wraps(f)
    def wrapper(*args, **kwargs):
        g.user_id = get_session_guard().resolve(required=False)
        return f(*args, **kwargs)

    return wrapper


__all__ = [
    "SessionGuard",
    "configure_session_guard",
    "get_session_guard",
    "login_required",
    "session_optional",
]
