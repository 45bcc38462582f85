# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Double-submit CSRF tokens bound to the session cookie.

A token is ``<nonce>.<signature>`` where the signature is
HMAC-SHA256(secret, "<session id>:<nonce>"). The same value travels in the
``csrf_token`` cookie and must come back in the ``X-CSRF-Token`` header.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import secrets
from collections.abc import Callable
from functools import wraps

from flask import Flask, Response, current_app, request

from marketplace.shared.config import SecurityConfig
from marketplace.shared.errors.base import ForbiddenError

SAFE_METHODS: tuple[str, ...] = ("GET", "HEAD", "OPTIONS")

CSRF_COOKIE = "csrf_token"
CSRF_HEADER = "X-CSRF-Token"
SESSION_COOKIE = "session_id"

_EXTENSION_KEY = "marketplace.csrf"


class CSRFError(ForbiddenError):
    code = "csrf_invalid"


def _b64(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


class CSRFGuard:
    def __init__(
        self,
        secret_key: str,
        *,
        enabled: bool = True,
        cookie_secure: bool = False,
        cookie_samesite: str = "Strict",
        max_age: int | None = None,
    ) -> None:
        self._key = secret_key.encode("utf-8")
        self.enabled = enabled
        self._cookie_secure = cookie_secure
        self._cookie_samesite = cookie_samesite
        self._max_age = max_age

    @classmethod
    def from_config(cls, secret_key: str, security: SecurityConfig, *, max_age: int) -> CSRFGuard:
        return cls(
            secret_key,
            enabled=security.enable_csrf,
            cookie_secure=security.cookie_secure,
            cookie_samesite=security.cookie_samesite,
            max_age=max_age,
        )

    def _sign(self, session_id: str, nonce: str) -> str:
        mac = hmac.new(self._key, f"{session_id}:{nonce}".encode(), hashlib.sha256)
        return _b64(mac.digest())

    def issue(self, session_id: str) -> str:
        nonce = secrets.token_urlsafe(32)
        return f"{nonce}.{self._sign(session_id, nonce)}"

    def validate(self, *, header: str | None, cookie: str | None, session_id: str | None) -> None:
        header = (header or "").strip()
        cookie = (cookie or "").strip()
        if not header or not cookie:
            raise CSRFError(context={"reason": "missing"})
        if not hmac.compare_digest(header, cookie):
            raise CSRFError(context={"reason": "mismatch"})

        nonce, sep, signature = header.partition(".")
        if not sep or not nonce or not signature:
            raise CSRFError(context={"reason": "malformed"})
        expected = self._sign(session_id or "", nonce)
        if not hmac.compare_digest(signature, expected):
            raise CSRFError(context={"reason": "signature"})

    def attach(self, response: Response, token: str) -> Response:
        response.set_cookie(
            CSRF_COOKIE,
            token,
            httponly=False,
            samesite=self._cookie_samesite,
            secure=self._cookie_secure,
            max_age=self._max_age,
        )
        response.headers[CSRF_HEADER] = token
        return response


def configure_csrf(app: Flask, guard: CSRFGuard) -> None:
    app.extensions[_EXTENSION_KEY] = guard


def get_csrf_guard() -> CSRFGuard:
    return current_app.extensions[_EXTENSION_KEY]


def csrf_protect(f: Callable):
    @wraps(f)
    def wrapper(*args, **kwargs):
        guard = get_csrf_guard()
        if not guard.enabled or request.method in SAFE_METHODS:
            return f(*args, **kwargs)
        guard.validate(
            header=request.headers.get(CSRF_HEADER),
            cookie=request.cookies.get(CSRF_COOKIE),
            session_id=request.cookies.get(SESSION_COOKIE),
        )
        return f(*args, **kwargs)

    return wrapper


__all__ = [
    "CSRFError",
    "CSRFGuard",
    "CSRF_COOKIE",
    "CSRF_HEADER",
    "SAFE_METHODS",
    "SESSION_COOKIE",
    "configure_csrf",
    "csrf_protect",
    "get_csrf_guard",
]
