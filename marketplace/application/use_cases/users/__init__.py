# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .get_profile import GetProfileUseCase
from .login_user import LoginUserUseCase
from .logout_user import LogoutAllUseCase, LogoutUserUseCase
from .register_user import RegisterUserUseCase
from .resolve_session import ResolveSessionUseCase

__all__ = [
    "GetProfileUseCase",
    "LoginUserUseCase",
    "LogoutAllUseCase",
    "LogoutUserUseCase",
    "RegisterUserUseCase",
    "ResolveSessionUseCase",
]
