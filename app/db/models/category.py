"""
Database model for categories.
"""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from app.db.models.item import item_categories
from app.db.session import Base

DEFAULT_CATEGORIES = (
    ("Alkali Metals", "Highly reactive metals in Group 1 of the periodic table"),
    ("Alkaline Earth Metals", "Reactive metals in Group 2 of the periodic table"),
    ("Transition Metals", "Metals in Groups 3–12 with variable oxidation states"),
    ("Post-Transition Metals", "Metals with lower melting points and higher electronegativity"),
    ("Metalloids", "Elements with properties of both metals and nonmetals"),
    ("Nonmetals", "Elements that lack metallic characteristics"),
    ("Halogens", "Highly reactive nonmetals in Group 17"),
    ("Noble Gases", "Inert gases with full valence electron shells"),
    ("Lanthanides", "Rare earth elements with atomic numbers 57–71"),
    ("Actinides", "Radioactive elements with atomic numbers 89–103"),
)


class Category(Base):
    """
    Database model for categories.
    """

    __tablename__ = "categories"

    id = Column("category_id", Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, unique=True)
    description = Column(String(500), nullable=True)

    # Relationships
    items = relationship("Item", secondary=item_categories, back_populates="categories")
