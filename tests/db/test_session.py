import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import session


def test_engine_options_for_sqlite():
    options = session.engine_options("sqlite+aiosqlite://")
    assert options == {"connect_args": {"check_same_thread": False}}


def test_engine_options_for_postgres():
    options = session.engine_options("postgresql+asyncpg://user:pw@localhost/auctionary")
    assert options["pool_pre_ping"] is True
    assert options["pool_size"] == 10


@pytest.mark.asyncio
async def test_get_db_yields_session():
    async_gen = session.get_db()
    session_obj = await async_gen.__anext__()

    assert isinstance(session_obj, AsyncSession)
    try:
        await async_gen.__anext__()
    except StopAsyncIteration:
        pass
