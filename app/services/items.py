"""Business logic for items: creation, details and search."""

from dataclasses import dataclass
from typing import List, Optional

from loguru import logger
from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import (
    AuthenticationRequiredError,
    ContentRejectedError,
    InvalidEndDateError,
    InvalidStatusError,
    ItemNotFoundError,
)
from app.core.metrics import record_business_event
from app.core.profanity import find_profane_field
from app.db.models import AuctionStatus, Bid, Item, User, item_categories
from app.schemas.items import ItemCreate, ItemDetail, SearchResult
from app.schemas.schemas import BidderRef
from app.services.categories import CategoryService
from app.utils.clock import now_ms


@dataclass(frozen=True)
class ItemCreateResult:
    """
    Outcome of an item creation.

    The item itself is the primary write and is always committed when this is
    returned. Attaching categories is secondary: when it fails the item stays
    and ``category_warning`` explains what was not applied.
    """

    item_id: int
    category_warning: Optional[str] = None


@dataclass(frozen=True)
class SearchParams:
    status: Optional[str] = None
    q: Optional[str] = None
    category: Optional[int] = None
    limit: int = settings.SEARCH_DEFAULT_LIMIT
    offset: int = 0


def parse_status(raw: Optional[str]) -> Optional[AuctionStatus]:
    """Translate the ``status`` query value; empty means no status filter."""
    if not raw:
        return None
    try:
        return AuctionStatus(raw)
    except ValueError:
        raise InvalidStatusError() from None


class ItemService:
    """Service for item-related operations."""

    def __init__(self, db: AsyncSession):
        """Initialize with database session."""
        self.db = db

    async def get_item(self, item_id: int) -> Item:
        """Get an item by ID or raise ItemNotFoundError."""
        result = await self.db.execute(select(Item).where(Item.id == item_id))
        item = result.scalar_one_or_none()
        if item is None:
            raise ItemNotFoundError()
        return item

    async def create_item(self, creator_id: int, item_data: ItemCreate) -> ItemCreateResult:
        """Create a new item starting now, then attach its categories on a best-effort basis."""
        now = now_ms()
        end_date = int(item_data.end_date)
        if end_date <= now:
            raise InvalidEndDateError()

        field = find_profane_field({"name": item_data.name, "description": item_data.description})
        if field:
            raise ContentRejectedError(field)

        item = Item(
            name=item_data.name,
            description=item_data.description,
            starting_bid=item_data.starting_bid,
            start_date=now,
            end_date=end_date,
            creator_id=creator_id,
        )
        self.db.add(item)
        await self.db.commit()
        await self.db.refresh(item)
        item_id = int(item.id)

        record_business_event("item_created")
        logger.info(f"Created new item with ID {item_id}")

        warning = None
        if item_data.categories:
            try:
                await CategoryService(self.db).set_for_item(item_id, item_data.categories)
            except Exception as e:
                await self.db.rollback()
                warning = f"Item created but categories were not attached: {e}"
                logger.error(f"Failed to add categories to item {item_id}: {e}")

        return ItemCreateResult(item_id=item_id, category_warning=warning)

    async def get_item_details(self, item_id: int) -> ItemDetail:
        """Item with creator names, current bid, current holder and categories."""
        query = (
            select(Item, User.first_name, User.last_name)
            .join(User, Item.creator_id == User.id)
            .where(Item.id == item_id)
        )
        row = (await self.db.execute(query)).first()
        if row is None:
            raise ItemNotFoundError()
        item, first_name, last_name = row

        top_query = (
            select(Bid.amount, Bid.user_id, User.first_name, User.last_name)
            .join(User, Bid.user_id == User.id)
            .where(Bid.item_id == item_id)
            .order_by(Bid.amount.desc())
            .limit(1)
        )
        top = (await self.db.execute(top_query)).first()

        detail = ItemDetail(
            item_id=item.id,
            name=item.name,
            description=item.description,
            starting_bid=item.starting_bid,
            start_date=item.start_date,
            end_date=item.end_date,
            creator_id=item.creator_id,
            first_name=first_name,
            last_name=last_name,
            current_bid=top.amount if top else item.starting_bid,
            current_bid_holder=(
                BidderRef(user_id=top.user_id, first_name=top.first_name, last_name=top.last_name) if top else None
            ),
        )

        try:
            detail.categories = await CategoryService(self.db).get_for_item(item_id)
        except Exception as e:
            logger.error(f"Failed to fetch categories for item {item_id}: {e}")

        return detail

    def build_search_query(self, params: SearchParams, viewer_id: Optional[int], now: int) -> Select:
        """
        Compose the listing query for a status, free text and category filter.

        Raises InvalidStatusError for unknown statuses and AuthenticationRequiredError
        when OPEN or BID is requested without a viewer.
        """
        status = parse_status(params.status)
        if status in (AuctionStatus.OPEN, AuctionStatus.BID) and viewer_id is None:
            raise AuthenticationRequiredError()

        current_bid = (
            select(func.max(Bid.amount)).where(Bid.item_id == Item.id).correlate(Item).scalar_subquery()
        )
        query = select(
            Item.id.label("item_id"),
            Item.name,
            Item.description,
            Item.starting_bid,
            Item.end_date,
            Item.creator_id,
            User.first_name,
            User.last_name,
            current_bid.label("current_bid"),
        ).join(User, Item.creator_id == User.id)

        if status is AuctionStatus.OPEN:
            query = query.where(Item.creator_id == viewer_id, Item.end_date > now)
        elif status is AuctionStatus.BID:
            query = query.where(
                Item.id.in_(select(Bid.item_id).where(Bid.user_id == viewer_id)),
                Item.end_date > now,
            )
        elif status is AuctionStatus.ARCHIVE:
            query = query.where(Item.end_date <= now)
        else:
            query = query.where(Item.end_date > now)

        if params.q:
            pattern = f"%{params.q}%"
            query = query.where(or_(Item.name.ilike(pattern), Item.description.ilike(pattern)))

        if params.category is not None:
            query = query.where(
                Item.id.in_(
                    select(item_categories.c.item_id).where(item_categories.c.category_id == params.category)
                )
            )

        return query.order_by(Item.id.asc()).limit(params.limit).offset(params.offset)

    async def search(self, params: SearchParams, viewer_id: Optional[int] = None) -> List[SearchResult]:
        """Run a listing search for the viewer."""
        query = self.build_search_query(params, viewer_id, now_ms())
        result = await self.db.execute(query)
        return [SearchResult.model_validate(row) for row in result.all()]
