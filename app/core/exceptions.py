"""
Domain exceptions raised by the service layer.

Each exception carries the HTTP status it maps to and a message that is safe
to return to the client. The handlers in ``app.api.errors`` turn them into
``{"error_message": ...}`` responses.
"""

from typing import Optional

from fastapi import status


class AuctionError(Exception):
    """Base class for all business rule failures."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    message: str = "Bad request!"

    def __init__(self, message: Optional[str] = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class BadRequestError(AuctionError):
    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(AuctionError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Unauthorised!"


class AuthorizationError(AuctionError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Forbidden!"


class NotFoundError(AuctionError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found!"


# Credentials


class DuplicateEmailError(BadRequestError):
    message = "Email already exists!"


class InvalidCredentialsError(BadRequestError):
    message = "Invalid email or password!"


class UserNotFoundError(NotFoundError):
    message = "User not found!"


# Items and bids


class ItemNotFoundError(NotFoundError):
    message = "Item not found!"


class InvalidEndDateError(BadRequestError):
    message = "End date must be in the future!"


class ContentRejectedError(BadRequestError):
    message = "Inappropriate language detected!"

    def __init__(self, field: Optional[str] = None) -> None:
        self.field = field
        super().__init__(f"Inappropriate language detected in {field}!" if field else None)


class SelfBidForbiddenError(AuthorizationError):
    message = "Cannot bid on your own item!"


class BidTooLowError(BadRequestError):
    message = "Bid must be higher than the current bid!"


# Search


class InvalidStatusError(BadRequestError):
    message = "Invalid status!"


class AuthenticationRequiredError(BadRequestError):
    message = "Authentication required for this status!"


# Questions


class QuestionNotFoundError(NotFoundError):
    message = "Question not found!"


class SelfQuestionForbiddenError(AuthorizationError):
    message = "Cannot ask a question on your own item!"


class NotItemOwnerError(AuthorizationError):
    message = "Only the item creator can answer questions!"


# Categories


class CategoryNotFoundError(BadRequestError):
    message = "Category not found!"

    def __init__(self, category_ids: Optional[list] = None) -> None:
        self.category_ids = category_ids or []
        super().__init__(
            f"Unknown category ids: {', '.join(str(c) for c in self.category_ids)}" if self.category_ids else None
        )
