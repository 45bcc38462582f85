# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .base import (
    AlreadyExistsError,
    AppError,
    BadRequestError,
    DomainError,
    ErrorKind,
    ForbiddenError,
    InfrastructureError,
    InternalError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
    status_for,
)
from .http import error_response
from .validation import format_pydantic_errors, parse_payload

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
    "error_response",
    "format_pydantic_errors",
    "parse_payload",
    "status_for",
]
