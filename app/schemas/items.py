"""
Pydantic schemas for the items, bids and search resources.
"""

from typing import Annotated, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.categories import CategoryResponse
from app.schemas.schemas import MAX_BIGINT, MAX_INT, BidderRef


class ItemCreate(BaseModel):
    """
    Schema for creating a new item.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, max_length=255, description="Item name")
    description: str = Field(..., min_length=1, description="Item description")
    starting_bid: int = Field(..., ge=1, le=MAX_INT, description="Opening price, in whole currency units")
    end_date: Union[int, str] = Field(..., description="Auction end, epoch milliseconds")
    categories: Optional[List[Annotated[int, Field(ge=1, le=MAX_INT)]]] = Field(
        None, description="Category IDs to attach to the item"
    )

    @field_validator("end_date")
    @classmethod
    def parse_end_date(cls, v: Union[int, str]) -> int:
        """Accept an integer or a digit-only string."""
        if isinstance(v, bool):
            raise ValueError("end_date must be an integer timestamp")
        if isinstance(v, str):
            if not v.isdigit():
                raise ValueError("end_date must be an integer timestamp")
            v = int(v)
        if v > MAX_BIGINT:
            raise ValueError("end_date is out of range")
        return v


class ItemCreated(BaseModel):
    """
    Schema for the item creation response.
    """

    item_id: int
    category_warning: Optional[str] = Field(None, description="Set when categories could not be attached")


class ItemDetail(BaseModel):
    """
    Schema for the item detail view.
    """

    item_id: int
    name: str
    description: str
    starting_bid: int
    start_date: int
    end_date: int
    creator_id: int
    first_name: str
    last_name: str
    current_bid: int
    current_bid_holder: Optional[BidderRef] = None
    categories: List[CategoryResponse] = Field(default_factory=list)


class SearchResult(BaseModel):
    """
    Schema for a single search row.
    """

    model_config = ConfigDict(from_attributes=True)

    item_id: int
    name: str
    description: str
    starting_bid: int
    end_date: int
    creator_id: int
    first_name: str
    last_name: str
    current_bid: Optional[int] = None


class BidCreate(BaseModel):
    """
    Schema for placing a bid.
    """

    model_config = ConfigDict(extra="forbid")

    amount: int = Field(..., ge=1, le=MAX_INT, description="Bid amount")


class BidHistoryEntry(BaseModel):
    """
    Schema for one entry in an item's bid history.
    """

    model_config = ConfigDict(from_attributes=True)

    item_id: int
    user_id: int
    amount: int
    timestamp: int
    first_name: str
    last_name: str
