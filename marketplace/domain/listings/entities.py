# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

SortField = Literal["created_at", "price"]
SortOrder = Literal["asc", "desc"]


@dataclass(slots=True, frozen=True)
class ListingDraft:
    """Listing fields as submitted; ``validate_listing`` returns a trimmed copy."""

    title: str
    description: str
    image_url: str
    price: float


@dataclass(slots=True, frozen=True)
class Listing:
    id: int
    user_id: int
    title: str
    description: str
    image_url: str
    price: float
    author_login: str
    created_at: datetime
    updated_at: datetime


@dataclass(slots=True, frozen=True)
class ListingQuery:
    offset: int = 0
    limit: int = 10
    sort_by: SortField = "created_at"
    order: SortOrder = "desc"
    min_price: float | None = None
    max_price: float | None = None


@dataclass(slots=True, frozen=True)
class ImageProbeResult:
    """What admission learned about a remote image; never persisted."""

    content_type: str | None
    declared_length: int | None
    width: int
    height: int
    format: str
