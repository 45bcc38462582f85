# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .exceptions import (
    CorruptSessionError,
    SessionNotFoundError,
    SessionTokenExhaustedError,
    StoreUnavailableError,
)
from .store import KeyValueStore

__all__ = [
    "CorruptSessionError",
    "KeyValueStore",
    "SessionNotFoundError",
    "SessionTokenExhaustedError",
    "StoreUnavailableError",
]
