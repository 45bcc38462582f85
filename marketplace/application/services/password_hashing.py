"""Password hashing strategies."""

from __future__ import annotations

import hmac
import secrets

from argon2.exceptions import HashingError
from argon2.low_level import Type, hash_secret_raw

from marketplace.domain.users.entities import HashedPassword
from marketplace.domain.users.exceptions import PasswordHashingError
from marketplace.domain.users.repositories import PasswordHasher

ARGON2_TIME_COST = 2
ARGON2_MEMORY_COST_KIB = 64 * 1024
ARGON2_PARALLELISM = 2
ARGON2_HASH_LENGTH = 32
SALT_LENGTH = 8


def _derive(password: str, salt: bytes) -> bytes:
    return hash_secret_raw(
        secret=password.encode("utf-8"),
        salt=salt,
        time_cost=ARGON2_TIME_COST,
        memory_cost=ARGON2_MEMORY_COST_KIB,
        parallelism=ARGON2_PARALLELISM,
        hash_len=ARGON2_HASH_LENGTH,
        type=Type.ID,
    )


class Argon2CredentialHasher(PasswordHasher):
    def hash(self, password: str) -> HashedPassword:
        try:
            salt = secrets.token_bytes(SALT_LENGTH)
            digest = _derive(password, salt)
        except (OSError, HashingError) as exc:
            raise PasswordHashingError() from exc
        return HashedPassword(salt=salt, digest=digest)

    def verify(self, password: str, hashed: HashedPassword) -> bool:
        try:
            candidate = _derive(password, hashed.salt)
        except HashingError:
            return False
        return hmac.compare_digest(candidate, hashed.digest)


# Verified against when a login does not exist so both paths cost one derivation.
DUMMY_HASH = HashedPassword(salt=b"\x00" * SALT_LENGTH, digest=b"\x00" * ARGON2_HASH_LENGTH)


__all__ = ["Argon2CredentialHasher", "DUMMY_HASH"]
