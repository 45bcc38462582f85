from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from marketplace.domain.users.entities import User


class ProfileDTO(BaseModel):
    id: int
    login: str
    first_name: str
    last_name: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_user(cls, user: User) -> ProfileDTO:
        return cls(
            id=user.id,
            login=user.login,
            first_name=user.first_name,
            last_name=user.last_name,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
