# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from marketplace.shared.errors.base import (
    AlreadyExistsError,
    BadRequestError,
    ForbiddenError,
    InternalError,
    NotFoundError,
)


class UserAlreadyExistsError(AlreadyExistsError):
    code = "user_already_exists"


class InvalidCredentialsError(ForbiddenError):
    code = "invalid_credentials"


class InvalidLoginError(BadRequestError):
    code = "invalid_login"


class InvalidPasswordError(BadRequestError):
    code = "invalid_password"


class InvalidProfileError(BadRequestError):
    code = "invalid_profile"


class UserNotFoundError(NotFoundError):
    code = "user_not_found"


class ProfileAccessDeniedError(ForbiddenError):
    code = "profile_forbidden"


class PasswordHashingError(InternalError):
    code = "password_hashing_failed"
