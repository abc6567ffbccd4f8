"""Item domain models.

Prices are stored as floating point dollars; quantity is the on-hand stock count.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from core.models.common import OptionalText


class ItemCreate(BaseModel):
    """Data required to create an item."""

    name: str = Field(..., min_length=1, max_length=255)
    category_id: int
    price: float = Field(..., gt=0)
    quantity: int = Field(0, ge=0)
    description: OptionalText = Field(None, max_length=2000)

    model_config = {"str_strip_whitespace": True}


class ItemUpdate(ItemCreate):
    """Full replacement of an item's mutable fields."""


class Item(BaseModel):
    """Full item entity as stored."""

    id: int
    name: str
    category_id: int
    price: float
    quantity: int
    description: str | None
    created_at: datetime

    model_config = {"from_attributes": True}

    @property
    def in_stock(self) -> bool:
        """Whether any units are on hand."""
        return self.quantity > 0
