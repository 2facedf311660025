from typing import Any, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_session_token, parse_path_id
from app.api.responses import error_responses
from app.core.exceptions import UserNotFoundError
from app.db.session import get_db
from app.schemas.schemas import LoginRequest, Message, Session, UserCreate, UserCreated, UserProfile
from app.services.users import UserService

router = APIRouter()


@router.post(
    "/users",
    response_model=UserCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user.",
    responses=error_responses(status.HTTP_400_BAD_REQUEST, status.HTTP_500_INTERNAL_SERVER_ERROR),
)
async def create_user(
    user_in: UserCreate,
    db: AsyncSession = Depends(get_db),
) -> Any:
    """Register a new user."""
    user_id = await UserService(db).register(user_in)
    return {"user_id": user_id}


@router.get(
    "/users/{user_id}",
    response_model=UserProfile,
    summary="Get a user's public profile.",
    responses=error_responses(status.HTTP_404_NOT_FOUND, status.HTTP_500_INTERNAL_SERVER_ERROR),
)
async def get_user(
    user_id: str,
    db: AsyncSession = Depends(get_db),
) -> Any:
    """Profile with the items the user is selling, bidding on and whose auctions ended."""
    return await UserService(db).get_profile(parse_path_id(user_id, UserNotFoundError))


@router.post(
    "/login",
    response_model=Session,
    summary="Login and get a session token.",
    responses=error_responses(status.HTTP_400_BAD_REQUEST, status.HTTP_500_INTERNAL_SERVER_ERROR),
)
async def login(
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_db),
) -> Any:
    """Login and get a session token. Logging in again returns the active token."""
    return await UserService(db).login(credentials.email, credentials.password)


@router.post(
    "/logout",
    response_model=Message,
    summary="Invalidate the current session token.",
    responses=error_responses(status.HTTP_401_UNAUTHORIZED, status.HTTP_500_INTERNAL_SERVER_ERROR),
)
async def logout(
    token: Optional[str] = Depends(get_session_token),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """Logout."""
    await UserService(db).logout(token)
    return {"message": "Logged out successfully"}
