"""Customer domain models."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, EmailStr, Field

from core.models.common import OptionalText, blank_to_none

# Digits with optional leading +, spaces, dashes and parentheses; at least 10 chars
PHONE_PATTERN = r"^\+?[\d\s\-()]{10,}$"


class CustomerCreate(BaseModel):
    """Data required to create a customer."""

    name: str = Field(..., min_length=2, max_length=255)
    phone: str = Field(..., pattern=PHONE_PATTERN, max_length=50)
    email: Annotated[EmailStr | None, BeforeValidator(blank_to_none)] = None

    model_config = {"str_strip_whitespace": True}


class CustomerUpdate(CustomerCreate):
    """Full replacement of a customer's mutable fields."""


class Customer(BaseModel):
    """Full customer entity as stored."""

    id: int
    name: str
    phone: str
    email: OptionalText
    created_at: datetime

    model_config = {"from_attributes": True}
