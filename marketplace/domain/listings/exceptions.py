# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from marketplace.shared.errors.base import BadRequestError, NotFoundError


class ListingValidationError(BadRequestError):
    code = "listing_invalid"

    def __init__(self, fields: dict[str, str]) -> None:
        super().__init__(context={"fields": dict(sorted(fields.items()))})


class InvalidListingQueryError(BadRequestError):
    code = "listing_query_invalid"

    def __init__(self, param: str) -> None:
        super().__init__(context={"param": param})


class ListingNotFoundError(NotFoundError):
    code = "listing_not_found"

    def __init__(self, listing_id: int) -> None:
        super().__init__(context={"listing_id": listing_id})


class ImageRejectedError(BadRequestError):
    code = "image_rejected"

    def __init__(self, reason: str, **details: object) -> None:
        super().__init__(context={"reason": reason, **details})

    @property
    def reason(self) -> str:
        return str((self.context or {}).get("reason", ""))
