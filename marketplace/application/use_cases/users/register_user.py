# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from marketplace.domain.users.entities import User
from marketplace.domain.users.exceptions import UserAlreadyExistsError
from marketplace.domain.users.policy import validate_login, validate_name, validate_password
from marketplace.domain.users.repositories import PasswordHasher, SessionRepository, UserRepository
from marketplace.shared.logging import RequestContext, context_log


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        sessions: SessionRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._sessions = sessions
        self._password_hasher = password_hasher

    def execute(
        self,
        login: str,
        password: str,
        first_name: str,
        last_name: str,
        *,
        ctx: RequestContext | None = None,
    ) -> tuple[User, str]:
        login = validate_login(login)
        password = validate_password(password)
        first_name = validate_name(first_name, field="first_name")
        last_name = validate_name(last_name, field="last_name")

        if self._users.find_by_login(login):
            raise UserAlreadyExistsError()

        hashed = self._password_hasher.hash(password)
        # add() still raises on a concurrent duplicate through the unique index
        user = self._users.add(
            login=login, first_name=first_name, last_name=last_name, password=hashed
        )
        token = self._sessions.create_session(user.id, ctx=ctx)
        context_log(ctx).info(f"user: registered user_id={user.id}")
        return user, token
