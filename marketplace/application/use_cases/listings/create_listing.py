# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from marketplace.domain.listings.entities import Listing, ListingDraft
from marketplace.domain.listings.policy import validate_listing
from marketplace.domain.listings.repositories import ImageAdmissionPort, ListingRepository
from marketplace.shared.logging import RequestContext, context_log
from marketplace.shared.utils.asyncio_utils import run_async


class CreateListingUseCase:
    def __init__(
        self,
        *,
        listings: ListingRepository,
        images: ImageAdmissionPort,
        image_timeout: float,
    ) -> None:
        self._listings = listings
        self._images = images
        self._image_timeout = image_timeout

    def execute(
        self, user_id: int, draft: ListingDraft, *, ctx: RequestContext | None = None
    ) -> Listing:
        draft = validate_listing(draft)
        run_async(self._images.admit(draft.image_url, timeout=self._image_timeout, ctx=ctx))
        listing = self._listings.add(user_id, draft)
        context_log(ctx).info(f"listing: created listing_id={listing.id} user_id={user_id}")
        return listing
