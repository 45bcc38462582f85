# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import HashedPassword, User
from .repositories import PasswordHasher, SessionRepository, UserRepository

__all__ = ["HashedPassword", "PasswordHasher", "SessionRepository", "User", "UserRepository"]
