# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .models import ListingRow, UserRow
from .session import Base, Database, build_engine

__all__ = ["Base", "Database", "ListingRow", "UserRow", "build_engine"]
