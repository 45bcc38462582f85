# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import math
import posixpath
from urllib.parse import urlsplit

from .entities import ListingDraft, ListingQuery
from .exceptions import InvalidListingQueryError, ListingValidationError

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 50
DESCRIPTION_MIN_LENGTH = 10
DESCRIPTION_MAX_LENGTH = 500
IMAGE_URL_MAX_LENGTH = 2048
PRICE_MIN = 0.0
PRICE_MAX = 1_000_000_000.0
ALLOWED_IMAGE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".gif"})

QUERY_LIMIT_DEFAULT = 10
QUERY_LIMIT_MAX = 100
QUERY_OFFSET_MAX = 2**31 - 1
SORT_FIELDS = ("created_at", "price")
SORT_ORDERS = ("asc", "desc")


def _image_url_error(raw: str) -> str | None:
    if not raw:
        return "required"
    if len(raw) > IMAGE_URL_MAX_LENGTH:
        return f"longer than {IMAGE_URL_MAX_LENGTH}"
    try:
        parts = urlsplit(raw)
    except ValueError:
        return "malformed"
    if parts.scheme not in ("http", "https") or not parts.hostname:
        return "must be an absolute http(s) url"
    ext = posixpath.splitext(parts.path)[1].lower()
    if ext not in ALLOWED_IMAGE_EXTENSIONS:
        return f"unsupported image extension '{ext}'"
    return None


def validate_listing(draft: ListingDraft) -> ListingDraft:
    fields: dict[str, str] = {}

    title = draft.title.strip()
    if not TITLE_MIN_LENGTH <= len(title) <= TITLE_MAX_LENGTH:
        fields["title"] = f"length must be {TITLE_MIN_LENGTH}..{TITLE_MAX_LENGTH}"

    description = draft.description.strip()
    if not DESCRIPTION_MIN_LENGTH <= len(description) <= DESCRIPTION_MAX_LENGTH:
        fields["description"] = (
            f"length must be {DESCRIPTION_MIN_LENGTH}..{DESCRIPTION_MAX_LENGTH}"
        )

    if not math.isfinite(draft.price) or not PRICE_MIN <= draft.price <= PRICE_MAX:
        fields["price"] = f"must be within {PRICE_MIN:.2f}..{PRICE_MAX:.2f}"

    image_url = draft.image_url.strip()
    url_error = _image_url_error(image_url)
    if url_error:
        fields["image_url"] = url_error

    if fields:
        raise ListingValidationError(fields)

    return ListingDraft(
        title=title,
        description=description,
        image_url=image_url,
        price=draft.price,
    )


def _parse_int(raw: str | None, name: str, *, default: int, low: int, high: int) -> int:
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise InvalidListingQueryError(name) from None
    if not low <= value <= high:
        raise InvalidListingQueryError(name)
    return value


def _parse_price(raw: str | None, name: str) -> float | None:
    if raw is None or raw == "":
        return None
    try:
        value = float(raw)
    except ValueError:
        raise InvalidListingQueryError(name) from None
    if not math.isfinite(value) or value < 0:
        raise InvalidListingQueryError(name)
    return value


def parse_listing_query(
    *,
    limit: str | None = None,
    offset: str | None = None,
    sort: str | None = None,
    order: str | None = None,
    min_price: str | None = None,
    max_price: str | None = None,
) -> ListingQuery:
    sort_by = sort or "created_at"
    if sort_by not in SORT_FIELDS:
        raise InvalidListingQueryError("sort")
    direction = order or "desc"
    if direction not in SORT_ORDERS:
        raise InvalidListingQueryError("order")

    return ListingQuery(
        offset=_parse_int(offset, "offset", default=0, low=0, high=QUERY_OFFSET_MAX),
        limit=_parse_int(limit, "limit", default=QUERY_LIMIT_DEFAULT, low=1, high=QUERY_LIMIT_MAX),
        sort_by=sort_by,  # type: ignore[arg-type]
        order=direction,  # type: ignore[arg-type]
        min_price=_parse_price(min_price, "min_price"),
        max_price=_parse_price(max_price, "max_price"),
    )


__all__ = ["parse_listing_query", "validate_listing"]
