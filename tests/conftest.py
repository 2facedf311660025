import os

os.environ.setdefault("DATABASE_URI", "sqlite+aiosqlite://")
os.environ["ENABLE_TRACING"] = "false"
os.environ["JSON_LOGS"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["PASSWORD_HASH_ITERATIONS"] = "1000"

from typing import Any, AsyncGenerator, Awaitable, Callable, Dict, Optional  # noqa: E402

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.core.config import settings  # noqa: E402
from app.db.models import Item  # noqa: E402
from app.db.session import Base, get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.services.categories import CategoryService  # noqa: E402
from app.utils.clock import now_ms  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite://"
DAY_MS = 24 * 60 * 60 * 1000
DEFAULT_PASSWORD = "Passw0rd!"


@pytest_asyncio.fixture(scope="function")
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def session_factory(test_engine: AsyncEngine) -> AsyncGenerator[async_sessionmaker, None]:
    factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with factory() as session:
        await CategoryService(session).seed_defaults()
    yield factory


@pytest_asyncio.fixture(scope="function")
async def db_session(session_factory: async_sessionmaker) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def client(session_factory: async_sessionmaker) -> AsyncGenerator[AsyncClient, None]:
    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides = {}


def auth_headers(token: str) -> Dict[str, str]:
    return {settings.SESSION_HEADER: token}


@pytest_asyncio.fixture(scope="function")
async def make_user(client: AsyncClient) -> Callable[..., Awaitable[Dict[str, Any]]]:
    """Register and log in a user through the API."""
    counter = {"n": 0}

    async def _make_user(first_name: str = "Ada", last_name: str = "Lovelace", email: Optional[str] = None):
        counter["n"] += 1
        email = email or f"user{counter['n']}@example.com"
        response = await client.post(
            "/users",
            json={"first_name": first_name, "last_name": last_name, "email": email, "password": DEFAULT_PASSWORD},
        )
        assert response.status_code == 201, response.text
        user_id = response.json()["user_id"]

        response = await client.post("/login", json={"email": email, "password": DEFAULT_PASSWORD})
        assert response.status_code == 200, response.text
        token = response.json()["session_token"]
        return {"user_id": user_id, "email": email, "token": token, "headers": auth_headers(token)}

    return _make_user


@pytest_asyncio.fixture(scope="function")
async def make_item(client: AsyncClient) -> Callable[..., Awaitable[int]]:
    """Create an item through the API, ending a day from now unless told otherwise."""

    async def _make_item(
        headers: Dict[str, str],
        name: str = "Brass lamp",
        description: str = "A polished brass desk lamp",
        starting_bid: int = 100,
        end_date: Optional[int] = None,
        **extra: Any,
    ) -> int:
        payload = {
            "name": name,
            "description": description,
            "starting_bid": starting_bid,
            "end_date": end_date or now_ms() + DAY_MS,
            **extra,
        }
        response = await client.post("/item", json=payload, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()["item_id"]

    return _make_item


@pytest_asyncio.fixture(scope="function")
async def make_ended_item(session_factory: async_sessionmaker) -> Callable[..., Awaitable[int]]:
    """Insert an item whose auction already ended; the API only accepts future end dates."""

    async def _make_ended_item(creator_id: int, name: str = "Old clock", starting_bid: int = 10) -> int:
        async with session_factory() as session:
            now = now_ms()
            item = Item(
                name=name,
                description="An auction that has finished",
                starting_bid=starting_bid,
                start_date=now - 2 * DAY_MS,
                end_date=now - DAY_MS,
                creator_id=creator_id,
            )
            session.add(item)
            await session.commit()
            await session.refresh(item)
            return int(item.id)

    return _make_ended_item
