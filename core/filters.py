"""
Caller-side search and stock filters.

The store always returns full result sets; screens narrow them down with
these helpers. Everything here is pure and works on already-loaded models.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Mapping

from core.models import Category, Customer, Invoice, Item

UNKNOWN_CATEGORY = "Unknown"
UNKNOWN_CUSTOMER = "Unknown Customer"
LOW_STOCK_THRESHOLD = 10


class StockLevel(str, Enum):
    """Stock status of a single item."""

    OUT = "out"
    LOW = "low"
    IN = "in"


class StockFilter(str, Enum):
    """Stock filter choices on the inventory screen."""

    ALL = "all"
    LOW = "low"
    OUT = "out"


@dataclass(frozen=True)
class StockSummary:
    """Counts per stock level over a set of items."""

    total: int
    out_of_stock: int
    low_stock: int
    in_stock: int


def stock_level(quantity: int, threshold: int = LOW_STOCK_THRESHOLD) -> StockLevel:
    """0 is out, 1..threshold is low, anything above is in stock."""
    if quantity <= 0:
        return StockLevel.OUT
    if quantity <= threshold:
        return StockLevel.LOW
    return StockLevel.IN


def summarize_stock(items: Iterable[Item], threshold: int = LOW_STOCK_THRESHOLD) -> StockSummary:
    levels = [stock_level(item.quantity, threshold) for item in items]
    return StockSummary(
        total=len(levels),
        out_of_stock=levels.count(StockLevel.OUT),
        low_stock=levels.count(StockLevel.LOW),
        in_stock=levels.count(StockLevel.IN),
    )


def category_names(categories: Iterable[Category]) -> dict[int, str]:
    return {category.id: category.name for category in categories}


def _matches(query: str, *fields: str | None) -> bool:
    return any(field and query in field.lower() for field in fields)


def filter_items(
    items: Iterable[Item],
    categories: Mapping[int, str],
    search: str | None = None,
    category_id: int | None = None,
    stock: StockFilter = StockFilter.ALL,
    threshold: int = LOW_STOCK_THRESHOLD,
) -> list[Item]:
    """
    Narrow an item list the way the inventory screen does.

    Args:
        items: Full item list
        categories: Category id -> name; items whose category is gone match
            as "Unknown"
        search: Case-insensitive substring of item name or category name
        category_id: Keep only this category
        stock: ALL, LOW (1..threshold) or OUT (0)
        threshold: Upper bound of low stock

    Returns:
        Matching items in their original order
    """
    query = (search or "").strip().lower()
    result = []

    for item in items:
        if query:
            category_name = categories.get(item.category_id, UNKNOWN_CATEGORY)
            if not _matches(query, item.name, category_name):
                continue

        if category_id and item.category_id != category_id:
            continue

        level = stock_level(item.quantity, threshold)
        if stock == StockFilter.LOW and level != StockLevel.LOW:
            continue
        if stock == StockFilter.OUT and level != StockLevel.OUT:
            continue

        result.append(item)

    return result


def filter_customers(customers: Iterable[Customer], search: str | None = None) -> list[Customer]:
    """Case-insensitive match on name, phone or email."""
    query = (search or "").strip().lower()
    if not query:
        return list(customers)

    return [c for c in customers if _matches(query, c.name, c.phone, c.email)]


def filter_invoices(
    invoices: Iterable[Invoice],
    customers: Iterable[Customer],
    search: str | None = None,
) -> list[Invoice]:
    """Case-insensitive match on invoice number or customer name."""
    query = (search or "").strip().lower()
    if not query:
        return list(invoices)

    names = {customer.id: customer.name for customer in customers}
    return [
        inv for inv in invoices
        if _matches(query, inv.invoice_number, names.get(inv.customer_id, UNKNOWN_CUSTOMER))
    ]
