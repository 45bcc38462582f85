# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from marketplace.domain.listings.entities import Listing, ListingQuery
from marketplace.domain.listings.repositories import ListingRepository


@dataclass(slots=True, frozen=True)
class ListedListing:
    listing: Listing
    is_mine: bool


class ListListingsUseCase:
    def __init__(self, *, listings: ListingRepository) -> None:
        self._listings = listings

    def execute(self, query: ListingQuery, *, viewer_id: int = 0) -> list[ListedListing]:
        # viewer_id 0 means anonymous, which never owns anything
        return [
            ListedListing(listing=item, is_mine=viewer_id != 0 and item.user_id == viewer_id)
            for item in self._listings.search(query)
        ]


class ListUserListingsUseCase:
    def __init__(self, *, listings: ListingRepository) -> None:
        self._listings = listings

    def execute(self, user_id: int) -> list[Listing]:
        return self._listings.list_by_user(user_id)
