"""
Shared OpenAPI response declarations.
"""

from typing import Any

from fastapi import status

from app.schemas.schemas import ErrorMessage


class Tags:
    """API route tags for documentation grouping."""

    HEALTH = "Health"
    USERS = "Users"
    ITEMS = "Items"
    BIDS = "Bids"
    QUESTIONS = "Questions"
    CATEGORIES = "Categories"


def error_responses(*codes: int) -> dict[int | str, dict[str, Any]]:
    """Build the ``responses=`` mapping for the given failure codes."""
    descriptions = {
        status.HTTP_400_BAD_REQUEST: "Bad Request – Invalid input or business rule violation",
        status.HTTP_401_UNAUTHORIZED: "Unauthorized – Missing or unknown session token",
        status.HTTP_403_FORBIDDEN: "Forbidden – Acting on a resource you may not act on",
        status.HTTP_404_NOT_FOUND: "Not Found – Unknown identifier",
        status.HTTP_500_INTERNAL_SERVER_ERROR: "Internal Error – Unexpected server failure",
    }
    return {code: {"model": ErrorMessage, "description": descriptions[code]} for code in codes}


default_error_responses = error_responses(
    status.HTTP_400_BAD_REQUEST,
    status.HTTP_401_UNAUTHORIZED,
    status.HTTP_403_FORBIDDEN,
    status.HTTP_404_NOT_FOUND,
    status.HTTP_500_INTERNAL_SERVER_ERROR,
)
