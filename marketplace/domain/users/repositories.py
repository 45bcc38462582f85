# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from .entities import HashedPassword, User

if TYPE_CHECKING:
    from marketplace.shared.logging import RequestContext


class UserRepository(Protocol):
    def find_by_login(self, login: str) -> User | None: ...
    def find_by_id(self, user_id: int) -> User | None: ...
    def add(
        self, *, login: str, first_name: str, last_name: str, password: HashedPassword
    ) -> User: ...


class SessionRepository(Protocol):
    def create_session(self, user_id: int, *, ctx: RequestContext | None = None) -> str: ...
    def get_session(self, token: str, *, ctx: RequestContext | None = None) -> int: ...
    def refresh_session(self, token: str, *, ctx: RequestContext | None = None) -> int: ...
    def delete_session(self, token: str, *, ctx: RequestContext | None = None) -> None: ...
    def delete_all_sessions(self, user_id: int, *, ctx: RequestContext | None = None) -> int: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> HashedPassword: ...
    def verify(self, password: str, hashed: HashedPassword) -> bool: ...
