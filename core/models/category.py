"""Category domain models."""

from datetime import datetime

from pydantic import BaseModel, Field

from core.models.common import OptionalText


class CategoryCreate(BaseModel):
    """Data required to create a category."""

    name: str = Field(..., min_length=1, max_length=255)
    description: OptionalText = Field(None, max_length=2000)

    model_config = {"str_strip_whitespace": True}


class CategoryUpdate(CategoryCreate):
    """Full replacement of a category's mutable fields."""


class Category(BaseModel):
    """Full category entity as stored."""

    id: int
    name: str
    description: str | None
    created_at: datetime

    model_config = {"from_attributes": True}
