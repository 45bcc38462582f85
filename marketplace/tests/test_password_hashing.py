from __future__ import annotations

import pytest

from marketplace.application.services import password_hashing
from marketplace.application.services.password_hashing import (
    DUMMY_HASH,
    Argon2CredentialHasher,
)
from marketplace.domain.users.exceptions import PasswordHashingError


@pytest.fixture(scope="module")
def hasher() -> Argon2CredentialHasher:
    return Argon2CredentialHasher()


def test_hash_then_verify_accepts_same_password(hasher: Argon2CredentialHasher) -> None:
    hashed = hasher.hash("Correct_horse1")

    assert len(hashed.salt) == 8
    assert len(hashed.digest) == 32
    assert hasher.verify("Correct_horse1", hashed) is True


def test_verify_rejects_other_password(hasher: Argon2CredentialHasher) -> None:
    hashed = hasher.hash("Correct_horse1")

    assert hasher.verify("Correct_horse2", hashed) is False
    assert hasher.verify("", hashed) is False


def test_same_password_gets_fresh_salt(hasher: Argon2CredentialHasher) -> None:
    first = hasher.hash("Repeated_pass1")
    second = hasher.hash("Repeated_pass1")

    assert first.salt != second.salt
    assert first.digest != second.digest


def test_dummy_hash_never_matches(hasher: Argon2CredentialHasher) -> None:
    assert hasher.verify("anything123", DUMMY_HASH) is False


def test_parameters_are_argon2id_defaults() -> None:
    assert password_hashing.ARGON2_TIME_COST == 2
    assert password_hashing.ARGON2_MEMORY_COST_KIB == 65536
    assert password_hashing.ARGON2_PARALLELISM == 2
    assert password_hashing.ARGON2_HASH_LENGTH == 32


def test_random_source_failure_is_internal(
    hasher: Argon2CredentialHasher, monkeypatch: pytest.MonkeyPatch
) -> None:
    def broken(_: int) -> bytes:
        raise OSError("entropy unavailable")

    monkeypatch.setattr(password_hashing.secrets, "token_bytes", broken)

    with pytest.raises(PasswordHashingError) as exc_info:
        hasher.hash("Whatever_123")

    assert exc_info.value.status == 500
