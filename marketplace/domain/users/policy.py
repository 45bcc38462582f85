# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Admission rules for logins, passwords and profile names.

These run in the use cases before any hashing or lookup happens, so a
malformed credential never costs a key-derivation round.
"""

from __future__ import annotations

import re

from .exceptions import InvalidLoginError, InvalidPasswordError, InvalidProfileError

LOGIN_PATTERN = re.compile(r"^[A-Za-z0-9._-]{3,30}$")

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 32
PASSWORD_SYMBOLS = "!@#$%^&*_"
PASSWORD_PATTERN = re.compile(r"^[A-Za-z0-9!@#$%^&*_]+$")

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 30


def validate_login(login: str) -> str:
    if not isinstance(login, str) or not LOGIN_PATTERN.fullmatch(login):
        raise InvalidLoginError(context={"pattern": LOGIN_PATTERN.pattern})
    return login


def validate_password(password: str) -> str:
    if not isinstance(password, str):
        raise InvalidPasswordError(context={"reason": "missing"})
    if len(password) < PASSWORD_MIN_LENGTH:
        raise InvalidPasswordError(
            context={"reason": "too_short", "min_length": PASSWORD_MIN_LENGTH}
        )
    if len(password) > PASSWORD_MAX_LENGTH:
        raise InvalidPasswordError(
            context={"reason": "too_long", "max_length": PASSWORD_MAX_LENGTH}
        )
    if not PASSWORD_PATTERN.fullmatch(password):
        raise InvalidPasswordError(
            context={"reason": "invalid_chars", "allowed_symbols": PASSWORD_SYMBOLS}
        )
    return password


def validate_name(value: str, *, field: str) -> str:
    cleaned = value.strip() if isinstance(value, str) else ""
    if not NAME_MIN_LENGTH <= len(cleaned) <= NAME_MAX_LENGTH:
        raise InvalidProfileError(
            context={
                "field": field,
                "min_length": NAME_MIN_LENGTH,
                "max_length": NAME_MAX_LENGTH,
            }
        )
    if not all(ch.isalpha() or ch in " -'" for ch in cleaned):
        raise InvalidProfileError(context={"field": field, "reason": "invalid_chars"})
    return cleaned


__all__ = [
    "LOGIN_PATTERN",
    "PASSWORD_MAX_LENGTH",
    "PASSWORD_MIN_LENGTH",
    "validate_login",
    "validate_name",
    "validate_password",
]
