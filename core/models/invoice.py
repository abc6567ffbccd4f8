"""Invoice domain models.

Amounts are floating point dollars. Totals on an Invoice are derived from its
line items when the invoice is written and stored alongside it; they are not
recomputed on read. Each InvoiceItem snapshots the unit price at sale time.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field

from core.models.common import OptionalText


class InvoiceLineCreate(BaseModel):
    """One line of an invoice as entered by the user.

    unit_price may differ from the item's current catalog price. The
    extended amount is always computed by the store.
    """

    item_id: int
    quantity: int = Field(..., ge=1)
    unit_price: float = Field(..., gt=0)


class InvoiceCreate(BaseModel):
    """Data required to create an invoice.

    invoice_number is normally left unset so the store allocates the next
    number in sequence; a caller that previewed one via generate_number()
    may pass it back.
    """

    customer_id: int
    invoice_date: date
    lines: list[InvoiceLineCreate] = Field(..., min_length=1)
    invoice_number: OptionalText = Field(None, max_length=50)


class InvoiceUpdate(BaseModel):
    """Full replacement of an invoice's customer, date and line items."""

    customer_id: int
    invoice_date: date
    lines: list[InvoiceLineCreate] = Field(..., min_length=1)


class InvoiceItem(BaseModel):
    """Invoice line item as stored."""

    id: int
    invoice_id: int
    item_id: int
    quantity: int
    unit_price: float
    extended_amount: float

    model_config = {"from_attributes": True}


class Invoice(BaseModel):
    """Full invoice entity as stored."""

    id: int
    invoice_number: str
    customer_id: int
    invoice_date: date
    subtotal: float
    vat_amount: float
    total_amount: float
    created_at: datetime

    model_config = {"from_attributes": True}
