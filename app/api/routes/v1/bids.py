from typing import Any, List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_current_user_id, parse_path_id
from app.api.responses import default_error_responses, error_responses
from app.core.exceptions import ItemNotFoundError
from app.db.session import get_db
from app.schemas.items import BidCreate, BidHistoryEntry
from app.schemas.schemas import Message
from app.services.bids import BidService

router = APIRouter()


@router.get(
    "/item/{item_id}/bid",
    response_model=List[BidHistoryEntry],
    summary="Get the bid history of an item.",
    responses=error_responses(status.HTTP_404_NOT_FOUND, status.HTTP_500_INTERNAL_SERVER_ERROR),
)
async def get_bid_history(
    item_id: str,
    db: AsyncSession = Depends(get_db),
) -> Any:
    """Bids on the item, highest first."""
    return await BidService(db).get_bid_history(parse_path_id(item_id, ItemNotFoundError))


@router.post(
    "/item/{item_id}/bid",
    response_model=Message,
    status_code=status.HTTP_201_CREATED,
    summary="Bid on an item.",
    responses=default_error_responses,
)
async def place_bid(
    item_id: str,
    bid_in: BidCreate,
    db: AsyncSession = Depends(get_db),
    current_user_id: int = Depends(get_current_user_id),
) -> Any:
    """
    Place a bid.

    The amount must be strictly greater than the current bid, which is the
    highest bid so far or the starting bid. Creators cannot bid on their own items.
    """
    await BidService(db).place_bid(parse_path_id(item_id, ItemNotFoundError), current_user_id, bid_in.amount)
    return {"message": "Bid placed successfully"}
