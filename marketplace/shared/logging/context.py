# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from dataclasses import dataclass, field

from .logger import bind_logger, get_request_id


def _new_request_id() -> str:
    return secrets.token_urlsafe(8)


@dataclass(slots=True, frozen=True)
class RequestContext:
    """Request id and client address handed to components that log on a caller's behalf."""

    request_id: str = field(default_factory=_new_request_id)
    client_ip: str | None = None

    @property
    def log(self):
        return bind_logger(self.request_id, client_ip=self.client_ip or "-")


def context_log(ctx: RequestContext | None):
    if ctx is None:
        return bind_logger(get_request_id())
    return ctx.log


__all__ = ["RequestContext", "context_log"]
