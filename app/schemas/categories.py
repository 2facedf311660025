"""
Pydantic schemas for categories.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class CategoryResponse(BaseModel):
    """
    Schema for category response.
    """

    model_config = ConfigDict(from_attributes=True)

    category_id: int
    name: str
    description: Optional[str] = None
