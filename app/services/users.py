"""Business logic for users, sessions and profiles."""

from typing import List, Optional

from loguru import logger
from sqlalchemy import or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import (
    AuthenticationError,
    DuplicateEmailError,
    InvalidCredentialsError,
    UserNotFoundError,
)
from app.core.metrics import record_business_event
from app.core.security import generate_salt, generate_session_token, get_password_hash, verify_password
from app.db.models import Bid, Item, User
from app.schemas.schemas import ItemSummary, Session, UserCreate, UserProfile
from app.utils.clock import now_ms


class UserService:
    """Service for registration, login/logout and profile aggregation."""

    def __init__(self, db: AsyncSession):
        """Initialize with database session."""
        self.db = db

    async def get_user_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalars().first()

    async def register(self, user_in: UserCreate) -> int:
        """Create a user with a freshly salted password hash and return its id."""
        if await self.get_user_by_email(user_in.email):
            raise DuplicateEmailError()

        salt = generate_salt()
        user = User(
            first_name=user_in.first_name,
            last_name=user_in.last_name,
            email=user_in.email,
            password=get_password_hash(user_in.password, salt),
            salt=salt,
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration for the same email
            await self.db.rollback()
            raise DuplicateEmailError()
        await self.db.refresh(user)

        record_business_event("user_registered")
        logger.info(f"Registered user {user.id}")
        return int(user.id)

    async def login(self, email: str, password: str) -> Session:
        """
        Authenticate and return a session.

        Unknown email and wrong password fail with the same error. A user that is
        already logged in gets the existing token back.
        """
        user = await self.get_user_by_email(email)
        if not user or not verify_password(password, str(user.salt), str(user.password)):
            logger.warning("Failed login attempt")
            raise InvalidCredentialsError()

        if user.session_token:
            return Session(user_id=user.id, session_token=user.session_token)

        token = generate_session_token()
        user.session_token = token  # type: ignore
        await self.db.commit()

        logger.info(f"User {user.id} logged in")
        return Session(user_id=user.id, session_token=token)

    async def resolve_session(self, token: Optional[str]) -> Optional[int]:
        """Map a session token to a user id, or None when the token is missing or unknown."""
        if not token:
            return None
        result = await self.db.execute(select(User.id).where(User.session_token == token))
        return result.scalar_one_or_none()

    async def logout(self, token: Optional[str]) -> None:
        """Clear the session token. Missing or unknown tokens are unauthorised."""
        user_id = await self.resolve_session(token)
        if user_id is None:
            raise AuthenticationError()

        await self.db.execute(update(User).where(User.id == user_id).values(session_token=None))
        await self.db.commit()
        logger.info(f"User {user_id} logged out")

    async def get_profile(self, user_id: int) -> UserProfile:
        """Assemble the user's selling, bidding and ended auctions."""
        result = await self.db.execute(select(User).where(User.id == user_id))
        user = result.scalar_one_or_none()
        if user is None:
            raise UserNotFoundError()

        now = now_ms()
        bid_item_ids = select(Bid.item_id).where(Bid.user_id == user_id)

        selling = await self._item_summaries(Item.creator_id == user_id, Item.end_date > now)
        bidding_on = await self._item_summaries(Item.id.in_(bid_item_ids), Item.end_date > now)
        auctions_ended = await self._item_summaries(
            Item.end_date <= now,
            or_(Item.creator_id == user_id, Item.id.in_(bid_item_ids)),
        )

        return UserProfile(
            user_id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            selling=selling,
            bidding_on=bidding_on,
            auctions_ended=auctions_ended,
        )

    async def _item_summaries(self, *conditions) -> List[ItemSummary]:
        query = (
            select(
                Item.id.label("item_id"),
                Item.name,
                Item.description,
                Item.end_date,
                Item.creator_id,
                User.first_name,
                User.last_name,
            )
            .join(User, Item.creator_id == User.id)
            .where(*conditions)
            .order_by(Item.id.asc())
        )
        result = await self.db.execute(query)
        return [ItemSummary.model_validate(row) for row in result.all()]
