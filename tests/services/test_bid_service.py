from unittest.mock import patch

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import BidTooLowError, ItemNotFoundError, SelfBidForbiddenError
from app.db.models import Bid, Item, User
from app.services.bids import BidService
from app.utils.clock import now_ms

DAY_MS = 24 * 60 * 60 * 1000


async def seed(db: AsyncSession):
    seller = User(first_name="Sam", last_name="Seller", email="sam@example.com", password="x", salt="y")
    bidder = User(first_name="Bea", last_name="Bidder", email="bea@example.com", password="x", salt="y")
    db.add_all([seller, bidder])
    await db.commit()

    now = now_ms()
    item = Item(
        name="Brass lamp",
        description="Desk lamp",
        starting_bid=100,
        start_date=now,
        end_date=now + DAY_MS,
        creator_id=seller.id,
    )
    db.add(item)
    await db.commit()
    return seller.id, bidder.id, item.id


@pytest.mark.asyncio
async def test_place_bid_records_timestamp(db_session: AsyncSession):
    _, bidder_id, item_id = await seed(db_session)
    service = BidService(db_session)

    before = now_ms()
    timestamp = await service.place_bid(item_id, bidder_id, 150)

    assert timestamp >= before
    assert await service.get_highest_bid(item_id) == 150


@pytest.mark.asyncio
async def test_bid_must_beat_starting_bid_then_highest(db_session: AsyncSession):
    _, bidder_id, item_id = await seed(db_session)
    service = BidService(db_session)

    with pytest.raises(BidTooLowError):
        await service.place_bid(item_id, bidder_id, 100)

    await service.place_bid(item_id, bidder_id, 101)

    with pytest.raises(BidTooLowError):
        await service.place_bid(item_id, bidder_id, 101)

    history = await service.get_bid_history(item_id)
    assert [entry.amount for entry in history] == [101]


@pytest.mark.asyncio
async def test_stale_read_cannot_insert_a_lower_bid(db_session: AsyncSession):
    """A bid that passed the pre-check against a stale maximum is still refused by the conditional insert."""
    _, bidder_id, item_id = await seed(db_session)
    service = BidService(db_session)
    await service.place_bid(item_id, bidder_id, 200)

    with patch.object(BidService, "get_highest_bid", return_value=None):
        with pytest.raises(BidTooLowError):
            await service.place_bid(item_id, bidder_id, 150)

    history = await service.get_bid_history(item_id)
    assert [entry.amount for entry in history] == [200]


@pytest.mark.asyncio
async def test_self_bid_and_unknown_item(db_session: AsyncSession):
    seller_id, bidder_id, item_id = await seed(db_session)
    service = BidService(db_session)

    with pytest.raises(SelfBidForbiddenError):
        await service.place_bid(item_id, seller_id, 500)

    with pytest.raises(ItemNotFoundError):
        await service.place_bid(item_id + 100, bidder_id, 500)

    with pytest.raises(ItemNotFoundError):
        await service.get_bid_history(item_id + 100)


@pytest.mark.asyncio
async def test_history_ties_keep_earliest_first(db_session: AsyncSession):
    seller_id, bidder_id, item_id = await seed(db_session)
    db_session.add_all(
        [
            Bid(item_id=item_id, user_id=bidder_id, amount=300, timestamp=2000),
            Bid(item_id=item_id, user_id=seller_id, amount=300, timestamp=1000),
            Bid(item_id=item_id, user_id=bidder_id, amount=400, timestamp=3000),
        ]
    )
    await db_session.commit()

    history = await BidService(db_session).get_bid_history(item_id)
    assert [(entry.amount, entry.timestamp) for entry in history] == [(400, 3000), (300, 1000), (300, 2000)]
