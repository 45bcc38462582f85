# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True, frozen=True)
class HashedPassword:
    salt: bytes
    digest: bytes


@dataclass(slots=True, frozen=True)
class User:
    id: int
    login: str
    first_name: str
    last_name: str
    password: HashedPassword
    created_at: datetime
    updated_at: datetime
