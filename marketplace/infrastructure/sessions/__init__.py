# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .session_store import SessionStore

__all__ = ["SessionStore"]
