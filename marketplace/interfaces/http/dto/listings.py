from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from marketplace.domain.listings.entities import Listing, ListingDraft


class CreateListingRequestDTO(BaseModel):
    title: str = Field(max_length=1000)
    description: str = Field(max_length=5000)
    image_url: str = Field(max_length=4096)
    price: float

    def to_draft(self) -> ListingDraft:
        return ListingDraft(
            title=self.title,
            description=self.description,
            image_url=self.image_url,
            price=self.price,
        )


class ListingDTO(BaseModel):
    id: int
    title: str
    description: str
    image_url: str
    price: float
    user_id: int
    author_login: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_listing(cls, listing: Listing) -> ListingDTO:
        return cls(
            id=listing.id,
            title=listing.title,
            description=listing.description,
            image_url=listing.image_url,
            price=listing.price,
            user_id=listing.user_id,
            author_login=listing.author_login,
            created_at=listing.created_at,
            updated_at=listing.updated_at,
        )


class ListingFeedItemDTO(ListingDTO):
    is_mine: bool = False
