# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy import Select, select

from marketplace.domain.listings.entities import Listing, ListingDraft, ListingQuery
from marketplace.domain.listings.repositories import ListingRepository
from marketplace.infrastructure.db.models import ListingRow, UserRow
from marketplace.infrastructure.db.session import Database


def _to_domain(row: ListingRow, author_login: str) -> Listing:
    return Listing(
        id=row.id,
        user_id=row.user_id,
        title=row.title,
        description=row.description,
        image_url=row.image_url,
        price=row.price,
        author_login=author_login,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _with_author() -> Select[tuple[ListingRow, str]]:
    return select(ListingRow, UserRow.login).join(UserRow, ListingRow.user_id == UserRow.id)


class SqlAlchemyListingRepository(ListingRepository):
    def __init__(self, db: Database) -> None:
        self._db = db

    def add(self, user_id: int, draft: ListingDraft) -> Listing:
        with self._db.session_scope() as session:
            row = ListingRow(
                user_id=user_id,
                title=draft.title,
                description=draft.description,
                image_url=draft.image_url,
                price=draft.price,
            )
            session.add(row)
            session.flush()
            session.refresh(row)
            author = session.get(UserRow, user_id)
            return _to_domain(row, author.login if author else "")

    def find_by_id(self, listing_id: int) -> Listing | None:
        with self._db.session_scope() as session:
            result = session.execute(_with_author().where(ListingRow.id == listing_id)).first()
            if not result:
                return None
            row, login = result
            return _to_domain(row, login)

    def search(self, query: ListingQuery) -> list[Listing]:
        stmt = _with_author()
        if query.min_price is not None:
            stmt = stmt.where(ListingRow.price >= query.min_price)
        if query.max_price is not None:
            stmt = stmt.where(ListingRow.price <= query.max_price)

        column = ListingRow.price if query.sort_by == "price" else ListingRow.created_at
        if query.order == "asc":
            stmt = stmt.order_by(column.asc(), ListingRow.id.asc())
        else:
            stmt = stmt.order_by(column.desc(), ListingRow.id.desc())

        stmt = stmt.offset(query.offset).limit(query.limit)
        with self._db.session_scope() as session:
            return [_to_domain(row, login) for row, login in session.execute(stmt).all()]

    def list_by_user(self, user_id: int) -> list[Listing]:
        stmt = (
            _with_author()
            .where(ListingRow.user_id == user_id)
            .order_by(ListingRow.created_at.desc(), ListingRow.id.desc())
        )
        with self._db.session_scope() as session:
            return [_to_domain(row, login) for row, login in session.execute(stmt).all()]
