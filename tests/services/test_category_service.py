import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import CategoryNotFoundError
from app.db.models import DEFAULT_CATEGORIES, Item, User
from app.services.categories import CategoryService
from app.utils.clock import now_ms


async def make_item(db: AsyncSession) -> int:
    user = User(first_name="Sam", last_name="Seller", email="sam@example.com", password="x", salt="y")
    db.add(user)
    await db.commit()
    now = now_ms()
    item = Item(
        name="Lamp", description="Brass", starting_bid=5, start_date=now, end_date=now + 1000, creator_id=user.id
    )
    db.add(item)
    await db.commit()
    return item.id


@pytest.mark.asyncio
async def test_seed_defaults_is_idempotent(db_session: AsyncSession):
    service = CategoryService(db_session)
    assert await service.seed_defaults() == 0
    assert len(await service.list_all()) == len(DEFAULT_CATEGORIES)


@pytest.mark.asyncio
async def test_set_for_item_replaces_previous_set(db_session: AsyncSession):
    item_id = await make_item(db_session)
    service = CategoryService(db_session)

    await service.set_for_item(item_id, [1, 3])
    assert sorted(c.category_id for c in await service.get_for_item(item_id)) == [1, 3]

    await service.set_for_item(item_id, [2])
    assert [c.category_id for c in await service.get_for_item(item_id)] == [2]

    await service.set_for_item(item_id, [])
    assert await service.get_for_item(item_id) == []


@pytest.mark.asyncio
async def test_set_for_item_deduplicates(db_session: AsyncSession):
    item_id = await make_item(db_session)
    service = CategoryService(db_session)

    assert await service.set_for_item(item_id, [4, 4, 5]) == [4, 5]
    assert len(await service.get_for_item(item_id)) == 2


@pytest.mark.asyncio
async def test_set_for_item_unknown_ids_leave_set_untouched(db_session: AsyncSession):
    item_id = await make_item(db_session)
    service = CategoryService(db_session)
    await service.set_for_item(item_id, [1])

    with pytest.raises(CategoryNotFoundError) as exc:
        await service.set_for_item(item_id, [2, 999])

    assert exc.value.category_ids == [999]
    assert [c.category_id for c in await service.get_for_item(item_id)] == [1]
