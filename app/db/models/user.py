"""
Database model for users.
"""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from app.db.session import Base


class User(Base):
    """Registered marketplace user."""

    __tablename__ = "users"

    id = Column("user_id", Integer, primary_key=True, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(128), nullable=False)  # PBKDF2-SHA512 hex digest
    salt = Column(String(64), nullable=False)
    session_token = Column(String(64), unique=True, index=True, nullable=True)

    # Relationships
    items = relationship("Item", back_populates="creator")
    bids = relationship("Bid", back_populates="bidder")
    questions = relationship("Question", back_populates="asker")
