"""
Application lifecycle event handlers.

These functions are executed during application startup and shutdown.
"""

from typing import Callable, List

from loguru import logger
from sqlalchemy import text

from app.core.config import settings
from app.db.session import Base, async_session_factory, engine
from app.services.categories import CategoryService


async def init_db() -> None:
    """
    Create missing tables, seed the category catalogue and verify the connection.
    """
    try:
        logger.info("Connecting to database...")

        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        async with async_session_factory() as session:
            if settings.SEED_DEFAULT_CATEGORIES:
                seeded = await CategoryService(session).seed_defaults()
                if seeded:
                    logger.info(f"Seeded {seeded} default categories")
            await session.execute(text("SELECT 1"))

        logger.info("Database connection established and verified")
    except Exception as e:
        logger.error(f"Database initialisation failed: {e}")
        raise


async def close_db_connection() -> None:
    """
    Close database connection.
    """
    try:
        logger.info("Closing database connections...")
        await engine.dispose()
        logger.info("Database connections closed")
    except Exception as e:
        logger.error(f"Error closing database connections: {e}")


# Startup event handlers, executed in order
startup_event_handlers: List[Callable] = [
    init_db,
]

# Shutdown event handlers, executed in order
shutdown_event_handlers: List[Callable] = [
    close_db_connection,
]
