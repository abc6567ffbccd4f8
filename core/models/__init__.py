"""Core domain models."""

from core.models.category import Category, CategoryCreate, CategoryUpdate
from core.models.item import Item, ItemCreate, ItemUpdate
from core.models.customer import Customer, CustomerCreate, CustomerUpdate
from core.models.invoice import (
    Invoice, InvoiceCreate, InvoiceUpdate, InvoiceItem, InvoiceLineCreate,
)
from core.models.dashboard import DashboardCounts

__all__ = [
    # Category
    "Category", "CategoryCreate", "CategoryUpdate",
    # Item
    "Item", "ItemCreate", "ItemUpdate",
    # Customer
    "Customer", "CustomerCreate", "CustomerUpdate",
    # Invoice
    "Invoice", "InvoiceCreate", "InvoiceUpdate", "InvoiceItem", "InvoiceLineCreate",
    # Dashboard
    "DashboardCounts",
]
