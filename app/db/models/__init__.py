"""
Database models.
"""

from app.db.models.bid import Bid
from app.db.models.category import DEFAULT_CATEGORIES, Category
from app.db.models.item import AuctionStatus, Item, item_categories
from app.db.models.question import Question
from app.db.models.user import User

__all__ = [
    "AuctionStatus",
    "Bid",
    "Category",
    "DEFAULT_CATEGORIES",
    "Item",
    "Question",
    "User",
    "item_categories",
]
