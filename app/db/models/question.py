"""
Database model for questions asked about items.
"""

from sqlalchemy import Column, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship

from app.db.session import Base


class Question(Base):
    """Question asked by a non-owner, optionally answered by the item creator."""

    __tablename__ = "questions"

    id = Column("question_id", Integer, primary_key=True, index=True)
    question = Column(Text, nullable=False)
    answer = Column(Text, nullable=True)
    asked_by = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    item_id = Column(Integer, ForeignKey("items.item_id", ondelete="CASCADE"), nullable=False, index=True)

    # Relationships
    asker = relationship("User", back_populates="questions")
    item = relationship("Item", back_populates="questions")
