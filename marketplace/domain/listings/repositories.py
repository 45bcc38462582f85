# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from .entities import ImageProbeResult, Listing, ListingDraft, ListingQuery

if TYPE_CHECKING:
    from marketplace.shared.logging import RequestContext


class ListingRepository(Protocol):
    def add(self, user_id: int, draft: ListingDraft) -> Listing: ...
    def find_by_id(self, listing_id: int) -> Listing | None: ...
    def search(self, query: ListingQuery) -> list[Listing]: ...
    def list_by_user(self, user_id: int) -> list[Listing]: ...


class ImageAdmissionPort(Protocol):
    async def admit(
        self, url: str, *, timeout: float, ctx: RequestContext | None = None
    ) -> ImageProbeResult: ...
