# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .context import RequestContext, context_log
from .logger import (
    bind_logger,
    get_request_id,
    logger,
    reset_request_id,
    set_request_id,
    setup_logging,
)
from .sensitive_filter import sanitize_message

__all__ = [
    "RequestContext",
    "bind_logger",
    "context_log",
    "get_request_id",
    "logger",
    "reset_request_id",
    "sanitize_message",
    "set_request_id",
    "setup_logging",
]
