# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .create_listing import CreateListingUseCase
from .get_listing import GetListingUseCase
from .list_listings import ListedListing, ListListingsUseCase, ListUserListingsUseCase

__all__ = [
    "CreateListingUseCase",
    "GetListingUseCase",
    "ListListingsUseCase",
    "ListUserListingsUseCase",
    "ListedListing",
]
