import re
from typing import List

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

# Bounds of the INTEGER and BIGINT columns
MAX_INT = 2**31 - 1
MAX_BIGINT = 2**63 - 1

PASSWORD_RULES = (
    (re.compile(r"[A-Z]"), "uppercase letter"),
    (re.compile(r"[a-z]"), "lowercase letter"),
    (re.compile(r"[0-9]"), "number"),
    (re.compile(r"[!@#$%^&*(),.?\":{}|<>]"), "special character"),
)


# User schemas
class UserCreate(BaseModel):
    """Schema for user registration."""

    model_config = ConfigDict(extra="forbid")

    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=32)

    @field_validator("first_name", "last_name")
    @classmethod
    def strip_names(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name must not be blank")
        return v

    @field_validator("password")
    @classmethod
    def password_strength(cls, v: str) -> str:
        """Require at least one of each character class."""
        for pattern, label in PASSWORD_RULES:
            if not pattern.search(v):
                raise ValueError(f"Password must contain at least one {label}")
        return v


class UserCreated(BaseModel):
    user_id: int


class LoginRequest(BaseModel):
    """Schema for login."""

    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str = Field(..., min_length=1)


class Session(BaseModel):
    """Session issued on login."""

    user_id: int
    session_token: str


class Message(BaseModel):
    message: str


class ItemSummary(BaseModel):
    """Item row as listed on a user profile."""

    model_config = ConfigDict(from_attributes=True)

    item_id: int
    name: str
    description: str
    end_date: int
    creator_id: int
    first_name: str
    last_name: str


class UserProfile(BaseModel):
    """Public profile with the user's auction activity."""

    user_id: int
    first_name: str
    last_name: str
    selling: List[ItemSummary] = Field(default_factory=list)
    bidding_on: List[ItemSummary] = Field(default_factory=list)
    auctions_ended: List[ItemSummary] = Field(default_factory=list)


class BidderRef(BaseModel):
    user_id: int
    first_name: str
    last_name: str


class ErrorMessage(BaseModel):
    """Error body shared by every failing endpoint."""

    error_message: str
