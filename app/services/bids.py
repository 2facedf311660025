"""Business logic for bids."""

from typing import List, Optional

from loguru import logger
from sqlalchemy import BigInteger, Integer, cast, func, insert, literal, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import BidTooLowError, ItemNotFoundError, SelfBidForbiddenError
from app.core.metrics import record_business_event
from app.db.models import Bid, Item, User
from app.schemas.items import BidHistoryEntry
from app.utils.clock import now_ms


class BidService:
    """
    Service enforcing strictly increasing bids per item.

    The current bid of an item is its highest bid amount, or its starting bid
    when nobody has bid yet. A new bid must be strictly greater.
    """

    def __init__(self, db: AsyncSession):
        """Initialize with database session."""
        self.db = db

    async def get_highest_bid(self, item_id: int) -> Optional[int]:
        """Highest bid amount for the item, or None when there are no bids."""
        result = await self.db.execute(select(func.max(Bid.amount)).where(Bid.item_id == item_id))
        return result.scalar()

    async def get_bid_history(self, item_id: int) -> List[BidHistoryEntry]:
        """All bids on the item with bidder names, highest first."""
        exists = await self.db.execute(select(Item.id).where(Item.id == item_id))
        if exists.scalar_one_or_none() is None:
            raise ItemNotFoundError()

        query = (
            select(Bid.item_id, Bid.user_id, Bid.amount, Bid.timestamp, User.first_name, User.last_name)
            .join(User, Bid.user_id == User.id)
            .where(Bid.item_id == item_id)
            .order_by(Bid.amount.desc(), Bid.timestamp.asc())
        )
        result = await self.db.execute(query)
        return [BidHistoryEntry.model_validate(row) for row in result.all()]

    async def place_bid(self, item_id: int, bidder_id: int, amount: int) -> int:
        """
        Place a bid and return its server timestamp.

        The item row is locked for the duration of the transaction and the insert
        only writes when the amount still beats the current bid, so two racing
        bids of the same amount cannot both be accepted.
        """
        result = await self.db.execute(select(Item).where(Item.id == item_id).with_for_update())
        item = result.scalar_one_or_none()
        if item is None:
            await self.db.rollback()
            raise ItemNotFoundError()

        if item.creator_id == bidder_id:
            await self.db.rollback()
            raise SelfBidForbiddenError()

        starting_bid = int(item.starting_bid)
        highest = await self.get_highest_bid(item_id)
        current_bid = highest if highest is not None else starting_bid
        if amount <= current_bid:
            await self.db.rollback()
            record_business_event("bid_rejected")
            logger.warning(f"Rejected bid of {amount} on item {item_id}: current bid is {current_bid}")
            raise BidTooLowError()

        timestamp = now_ms()
        current_max = (
            select(func.coalesce(func.max(Bid.amount), starting_bid))
            .where(Bid.item_id == item_id)
            .correlate(None)
            .scalar_subquery()
        )
        values = select(
            cast(literal(item_id), Integer),
            cast(literal(bidder_id), Integer),
            cast(literal(amount), Integer),
            cast(literal(timestamp), BigInteger),
        ).where(cast(literal(amount), Integer) > current_max)
        inserted = await self.db.execute(
            insert(Bid.__table__).from_select(["item_id", "user_id", "amount", "timestamp"], values)
        )

        if inserted.rowcount != 1:
            await self.db.rollback()
            record_business_event("bid_rejected")
            logger.warning(f"Bid of {amount} on item {item_id} lost a race with a concurrent bid")
            raise BidTooLowError()

        await self.db.commit()

        record_business_event("bid_placed")
        logger.info(f"User {bidder_id} bid {amount} on item {item_id}")
        return timestamp
