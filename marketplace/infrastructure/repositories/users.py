# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from marketplace.domain.users.entities import HashedPassword, User
from marketplace.domain.users.exceptions import UserAlreadyExistsError
from marketplace.domain.users.repositories import UserRepository
from marketplace.infrastructure.db.models import UserRow
from marketplace.infrastructure.db.session import Database


def _to_domain(row: UserRow) -> User:
    return User(
        id=row.id,
        login=row.login,
        first_name=row.first_name,
        last_name=row.last_name,
        password=HashedPassword(salt=row.password_salt, digest=row.password_hash),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, db: Database) -> None:
        self._db = db

    def find_by_login(self, login: str) -> User | None:
        with self._db.session_scope() as session:
            row = session.scalars(select(UserRow).where(UserRow.login == login)).first()
            return _to_domain(row) if row else None

    def find_by_id(self, user_id: int) -> User | None:
        with self._db.session_scope() as session:
            row = session.get(UserRow, user_id)
            return _to_domain(row) if row else None

    def add(
        self, *, login: str, first_name: str, last_name: str, password: HashedPassword
    ) -> User:
        try:
            with self._db.session_scope() as session:
                row = UserRow(
                    login=login,
                    first_name=first_name,
                    last_name=last_name,
                    password_hash=password.digest,
                    password_salt=password.salt,
                )
                session.add(row)
                session.flush()
                session.refresh(row)
                return _to_domain(row)
        except IntegrityError as exc:
            raise UserAlreadyExistsError() from exc
