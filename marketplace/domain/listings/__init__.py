# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import ImageProbeResult, Listing, ListingDraft, ListingQuery
from .repositories import ImageAdmissionPort, ListingRepository

__all__ = [
    "ImageAdmissionPort",
    "ImageProbeResult",
    "Listing",
    "ListingDraft",
    "ListingQuery",
    "ListingRepository",
]
