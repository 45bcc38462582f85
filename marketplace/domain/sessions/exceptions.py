# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from marketplace.shared.errors.base import InfrastructureError, InternalError, NotFoundError


class SessionNotFoundError(NotFoundError):
    code = "session_not_found"


class SessionTokenExhaustedError(InternalError):
    code = "session_token_exhausted"


class CorruptSessionError(InternalError):
    code = "session_corrupt"


class StoreUnavailableError(InfrastructureError):
    def __init__(self, operation: str) -> None:
        super().__init__(
            code="session_store_unavailable",
            context={"operation": operation},
        )
