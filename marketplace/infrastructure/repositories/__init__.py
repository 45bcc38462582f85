# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .listings import SqlAlchemyListingRepository
from .users import SqlAlchemyUserRepository

__all__ = ["SqlAlchemyListingRepository", "SqlAlchemyUserRepository"]
