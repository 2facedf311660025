"""Business logic for categories."""

from typing import Iterable, List

from loguru import logger
from sqlalchemy import delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import CategoryNotFoundError
from app.db.models import DEFAULT_CATEGORIES, Category, item_categories
from app.schemas.categories import CategoryResponse


def _to_response(category: Category) -> CategoryResponse:
    return CategoryResponse(category_id=category.id, name=category.name, description=category.description)


class CategoryService:
    """Service for category catalogue and item association operations."""

    def __init__(self, db: AsyncSession):
        """Initialize with database session."""
        self.db = db

    async def list_all(self) -> List[CategoryResponse]:
        """All categories, sorted by name."""
        result = await self.db.execute(select(Category).order_by(Category.name.asc()))
        return [_to_response(category) for category in result.scalars().all()]

    async def get_for_item(self, item_id: int) -> List[CategoryResponse]:
        """Categories attached to an item, sorted by name."""
        query = (
            select(Category)
            .join(item_categories, item_categories.c.category_id == Category.id)
            .where(item_categories.c.item_id == item_id)
            .order_by(Category.name.asc())
        )
        result = await self.db.execute(query)
        return [_to_response(category) for category in result.scalars().all()]

    async def set_for_item(self, item_id: int, category_ids: Iterable[int]) -> List[int]:
        """
        Replace the item's category set.

        The existing associations are deleted and the new set inserted in a single
        transaction; an empty set clears the item's categories.
        """
        wanted = list(dict.fromkeys(category_ids))

        if wanted:
            result = await self.db.execute(select(Category.id).where(Category.id.in_(wanted)))
            known = set(result.scalars().all())
            missing = [category_id for category_id in wanted if category_id not in known]
            if missing:
                raise CategoryNotFoundError(missing)

        try:
            await self.db.execute(delete(item_categories).where(item_categories.c.item_id == item_id))
            if wanted:
                await self.db.execute(
                    insert(item_categories),
                    [{"item_id": item_id, "category_id": category_id} for category_id in wanted],
                )
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(f"Set categories {wanted} on item {item_id}")
        return wanted

    async def seed_defaults(self) -> int:
        """Insert the default categories if the table is empty. Returns the number inserted."""
        result = await self.db.execute(select(func.count(Category.id)))
        if result.scalar():
            return 0

        self.db.add_all([Category(name=name, description=description) for name, description in DEFAULT_CATEGORIES])
        await self.db.commit()

        logger.info(f"Seeded {len(DEFAULT_CATEGORIES)} default categories")
        return len(DEFAULT_CATEGORIES)
