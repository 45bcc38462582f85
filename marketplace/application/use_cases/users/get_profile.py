# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from marketplace.domain.users.entities import User
from marketplace.domain.users.exceptions import ProfileAccessDeniedError, UserNotFoundError
from marketplace.domain.users.repositories import UserRepository


class GetProfileUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, viewer_id: int, user_id: int) -> User:
        if viewer_id != user_id:
            raise ProfileAccessDeniedError()
        user = self._users.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(context={"user_id": user_id})
        return user
