# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib
import re
import time
from collections.abc import Mapping

from flask import Flask, Response, g, request

from marketplace.infrastructure.observability import observe_request
from marketplace.shared.logging import RequestContext, reset_request_id, set_request_id

REQUEST_ID_HEADER = "X-Request-ID"

_REQUEST_ID_RE = re.compile(r"^[\w.\-]{1,64}$")
_SECRET_HEADERS = frozenset({"authorization", "cookie", "set-cookie", "x-csrf-token"})
_SECRET_PARAMS = ("password", "token", "secret", "session", "csrf")


def get_client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.remote_addr or "unknown"


def current_request_context() -> RequestContext:
    ctx = getattr(g, "request_ctx", None)
    if ctx is None:
        ctx = RequestContext(client_ip=get_client_ip())
        g.request_ctx = ctx
    return ctx


def _fingerprint(value: str) -> str:
    return f"<sha256:{hashlib.sha256(value.encode()).hexdigest()[:8]}>"


def _masked_headers(headers: Mapping[str, str]) -> dict[str, str]:
    return {
        key: _fingerprint(value) if key.lower() in _SECRET_HEADERS else value
        for key, value in headers.items()
    }


def _masked_params(params: Mapping[str, str]) -> dict[str, str]:
    return {
        key: "<redacted>" if any(part in key.lower() for part in _SECRET_PARAMS) else value
        for key, value in params.items()
    }


def _incoming_request_id() -> str | None:
    value = (request.headers.get(REQUEST_ID_HEADER) or "").strip()
    return value if _REQUEST_ID_RE.match(value) else None


def configure_request_logging(app: Flask, *, debug_mode: bool = False) -> None:
    @app.before_request
    def _start() -> None:
        incoming = _incoming_request_id()
        ctx = (
            RequestContext(request_id=incoming, client_ip=get_client_ip())
            if incoming
            else RequestContext(client_ip=get_client_ip())
        )
        g.request_ctx = ctx
        set_request_id(ctx.request_id)
        g.request_started = time.perf_counter()

        if debug_mode:
            ctx.log.debug(
                f"http: {request.method} {request.path} "
                f"query={_masked_params(request.args)} headers={_masked_headers(request.headers)} "
                f"body_size={request.content_length or 0}"
            )
        else:
            ctx.log.info(f"http: {request.method} {request.path}")

    @app.after_request
    def _finish(response: Response) -> Response:
        duration = time.perf_counter() - getattr(g, "request_started", time.perf_counter())
        route = request.url_rule.rule if request.url_rule else "unmatched"
        observe_request(route, str(response.status_code), duration)

        ctx = current_request_context()
        ctx.log.info(
            f"http: {request.method} {request.path} -> {response.status_code} "
            f"in {duration * 1000:.1f}ms user={getattr(g, 'user_id', None)}"
        )
        response.headers.setdefault(REQUEST_ID_HEADER, ctx.request_id)
        return response

    @app.teardown_request
    def _teardown(exc: BaseException | None) -> None:
        if exc is not None:
            current_request_context().log.error(
                f"http: {type(exc).__name__} on {request.method} {request.path}"
            )
        reset_request_id()


__all__ = ["configure_request_logging", "current_request_context", "get_client_ip"]
