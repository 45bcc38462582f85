# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask, g, request
from werkzeug.exceptions import HTTPException

from marketplace.shared.errors import AppError, ErrorKind
from marketplace.shared.errors.http import error_response, internal_error_response
from marketplace.shared.logging import context_log


def configure_error_handling(app: Flask, *, debug_mode: bool = False) -> None:
    """AppErrors render as ``{"error", "context"?}``; anything unexpected is a bare 500."""

    @app.errorhandler(AppError)
    def _app_error(exc: AppError):
        log = context_log(getattr(g, "request_ctx", None))
        where = f"{request.method} {request.path}"
        if exc.kind is ErrorKind.INTERNAL:
            log.opt(exception=exc).error(f"error: {exc.code} on {where}")
        else:
            log.info(f"error: {exc.code} ({exc.status.value}) on {where}")
        return error_response(exc)

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return exc

    @app.errorhandler(Exception)
    def _unexpected(exc: Exception):
        log = context_log(getattr(g, "request_ctx", None))
        where = f"{request.method} {request.path} user={getattr(g, 'user_id', None)}"
        if debug_mode:
            log.opt(exception=exc).error(f"error: unhandled {type(exc).__name__} on {where}")
        else:
            log.error(f"error: unhandled {type(exc).__name__} on {where}")
        return internal_error_response()


__all__ = ["configure_error_handling"]
