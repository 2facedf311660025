"""
FastAPI API dependencies.
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import APIKeyHeader
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import AuthenticationError, NotFoundError
from app.db.session import get_db
from app.schemas.schemas import MAX_INT
from app.services.users import UserService

session_token_header = APIKeyHeader(
    name=settings.SESSION_HEADER,
    auto_error=False,
    description="Opaque session token returned by POST /login",
)


async def get_session_token(token: Optional[str] = Depends(session_token_header)) -> Optional[str]:
    """Raw session token from the request header, if any."""
    return token or None


async def get_current_user_id(
    db: AsyncSession = Depends(get_db),
    token: Optional[str] = Depends(get_session_token),
) -> int:
    """Resolve the session token to a user id; missing or unknown tokens are unauthorised."""
    user_id = await UserService(db).resolve_session(token)
    if user_id is None:
        raise AuthenticationError()
    return user_id


async def get_optional_user_id(
    db: AsyncSession = Depends(get_db),
    token: Optional[str] = Depends(get_session_token),
) -> Optional[int]:
    """Resolve the session token when present; anonymous or unknown tokens yield None."""
    return await UserService(db).resolve_session(token)


def parse_path_id(raw: str, error: type[NotFoundError]) -> int:
    """
    Parse a numeric path identifier.

    Identifiers that are not integers within the key column range cannot match
    any row, so they answer with the resource's not-found error rather than a
    validation error.
    """
    if not (raw.isascii() and raw.isdigit()) or int(raw) > MAX_INT:
        raise error()
    return int(raw)
