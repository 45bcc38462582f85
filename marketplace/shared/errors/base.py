# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from http import HTTPStatus
from typing import Any, cast


class ErrorKind(StrEnum):
    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    INTERNAL = "internal"


def status_for(kind: ErrorKind | str) -> HTTPStatus:
    match kind:
        case ErrorKind.BAD_REQUEST:
            return HTTPStatus.BAD_REQUEST
        case ErrorKind.UNAUTHORIZED:
            return HTTPStatus.UNAUTHORIZED
        case ErrorKind.FORBIDDEN:
            return HTTPStatus.FORBIDDEN
        case ErrorKind.NOT_FOUND:
            return HTTPStatus.NOT_FOUND
        case ErrorKind.ALREADY_EXISTS:
            return HTTPStatus.CONFLICT
        case ErrorKind.INTERNAL:
            return HTTPStatus.INTERNAL_SERVER_ERROR
        case _:
            return HTTPStatus.INTERNAL_SERVER_ERROR


@dataclass(slots=True)
class AppError(Exception):
    code: str
    kind: ErrorKind
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.code)

    @property
    def status(self) -> HTTPStatus:
        return status_for(self.kind)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code}
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class DomainError(AppError):
    """Error raised by domain rules; subclasses declare ``code`` and ``kind``."""

    def __init__(
        self,
        *,
        code: str | None = None,
        kind: ErrorKind | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_code = code or cast(str, getattr(self, "code", "domain_error"))
        resolved_kind = kind or cast(
            ErrorKind, getattr(self, "kind", ErrorKind.BAD_REQUEST)
        )
        super().__init__(code=resolved_code, kind=resolved_kind, context=context)


class BadRequestError(DomainError):
    code = "bad_request"
    kind = ErrorKind.BAD_REQUEST


class UnauthorizedError(DomainError):
    code = "unauthorized"
    kind = ErrorKind.UNAUTHORIZED


class ForbiddenError(DomainError):
    code = "forbidden"
    kind = ErrorKind.FORBIDDEN


class NotFoundError(DomainError):
    code = "not_found"
    kind = ErrorKind.NOT_FOUND


class AlreadyExistsError(DomainError):
    code = "already_exists"
    kind = ErrorKind.ALREADY_EXISTS


class InternalError(DomainError):
    code = "internal_error"
    kind = ErrorKind.INTERNAL


class InfrastructureError(AppError):
    def __init__(
        self,
        code: str = "infrastructure_error",
        *,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(code=code, kind=ErrorKind.INTERNAL, context=context)


class ValidationError(AppError):
    def __init__(
        self,
        code: str = "validation_error",
        *,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(code=code, kind=ErrorKind.BAD_REQUEST, context=context)


__all__ = [
    "AlreadyExistsError",
    "AppError",
    "BadRequestError",
    "DomainError",
    "ErrorKind",
    "ForbiddenError",
    "InfrastructureError",
    "InternalError",
    "NotFoundError",
    "UnauthorizedError",
    "ValidationError",
    "status_for",
]
