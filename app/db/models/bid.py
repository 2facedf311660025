"""
Database model for bids.
"""

from sqlalchemy import BigInteger, CheckConstraint, Column, ForeignKey, Index, Integer
from sqlalchemy.orm import relationship

from app.db.session import Base


class Bid(Base):
    """
    A single bid on an item.

    Bids are append-only. The composite key guarantees that a bidder
    can never place the same amount twice on one item.
    """

    __tablename__ = "bids"

    item_id = Column(Integer, ForeignKey("items.item_id", ondelete="CASCADE"), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), primary_key=True)
    amount = Column(Integer, primary_key=True)
    timestamp = Column(BigInteger, nullable=False)  # epoch milliseconds

    # Relationships
    item = relationship("Item", back_populates="bids")
    bidder = relationship("User", back_populates="bids")

    __table_args__ = (
        CheckConstraint("amount > 0", name="chk_bid_amount_positive"),
        Index("idx_bids_item_amount", "item_id", "amount"),
        Index("idx_bids_user", "user_id"),
    )
