"""
Database model for auction items.
"""

from enum import Enum

from sqlalchemy import BigInteger, CheckConstraint, Column, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import relationship

from app.db.session import Base

# Association table for the many-to-many relationship between items and categories
item_categories = Table(
    "item_categories",
    Base.metadata,
    Column("item_id", Integer, ForeignKey("items.item_id", ondelete="CASCADE"), primary_key=True),
    Column("category_id", Integer, ForeignKey("categories.category_id"), primary_key=True),
)


class AuctionStatus(str, Enum):
    """
    Viewer-relative auction states used to filter searches.
    """

    OPEN = "OPEN"
    BID = "BID"
    ARCHIVE = "ARCHIVE"


class Item(Base):
    """
    Database model for items listed for timed bidding.
    """

    __tablename__ = "items"

    id = Column("item_id", Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=False)
    starting_bid = Column(Integer, nullable=False)

    # Epoch milliseconds
    start_date = Column(BigInteger, nullable=False)
    end_date = Column(BigInteger, nullable=False, index=True)

    # Foreign keys
    creator_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)

    # Relationships
    creator = relationship("User", back_populates="items")
    bids = relationship("Bid", back_populates="item", cascade="all, delete-orphan")
    questions = relationship("Question", back_populates="item", cascade="all, delete-orphan")
    categories = relationship("Category", secondary=item_categories, back_populates="items")

    __table_args__ = (CheckConstraint("starting_bid > 0", name="chk_item_starting_bid_positive"),)
