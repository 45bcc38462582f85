# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from marketplace.application.services.password_hashing import DUMMY_HASH
from marketplace.domain.users.exceptions import InvalidCredentialsError
from marketplace.domain.users.policy import validate_login, validate_password
from marketplace.domain.users.repositories import PasswordHasher, SessionRepository, UserRepository
from marketplace.shared.logging import RequestContext, context_log


class LoginUserUseCase:
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
        self, login: str, password: str, *, ctx: RequestContext | None = None
    ) -> tuple[int, str]:
        login = validate_login(login)
        password = validate_password(password)

        user = self._users.find_by_login(login)
        # Unknown logins still pay for one derivation.
        stored = user.password if user else DUMMY_HASH
        password_valid = self._password_hasher.verify(password, stored)

        if user is None or not password_valid:
            context_log(ctx).warning("user: login rejected")
            raise InvalidCredentialsError()

        token = self._sessions.create_session(user.id, ctx=ctx)
        context_log(ctx).info(f"user: logged in user_id={user.id}")
        return user.id, token
