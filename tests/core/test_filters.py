"""Tests for caller-side search and stock filters."""

from datetime import date, datetime, timezone

import pytest

from core.filters import (
    StockFilter, StockLevel, category_names, filter_customers,
    filter_invoices, filter_items, stock_level, summarize_stock,
)
from core.models import Category, Customer, Invoice, Item

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _item(id: int, name: str, category_id: int, quantity: int) -> Item:
    return Item(
        id=id, name=name, category_id=category_id, price=1.0,
        quantity=quantity, description=None, created_at=NOW,
    )


@pytest.fixture
def categories():
    return category_names([
        Category(id=1, name="Electronics", description=None, created_at=NOW),
        Category(id=2, name="Books", description=None, created_at=NOW),
    ])


@pytest.fixture
def items():
    return [
        _item(1, "Laptop", 1, 0),
        _item(2, "Headphones", 1, 5),
        _item(3, "Novel", 2, 10),
        _item(4, "Atlas", 2, 11),
        _item(5, "Mystery Box", 99, 3),
    ]


class TestStockLevel:
    """Tests for stock_level."""

    @pytest.mark.parametrize("quantity,expected", [
        (0, StockLevel.OUT),
        (1, StockLevel.LOW),
        (10, StockLevel.LOW),
        (11, StockLevel.IN),
    ])
    def test_boundaries(self, quantity, expected):
        assert stock_level(quantity) == expected

    def test_custom_threshold(self):
        assert stock_level(10, threshold=5) == StockLevel.IN

    def test_summary(self, items):
        summary = summarize_stock(items)

        assert summary.total == 5
        assert summary.out_of_stock == 1
        assert summary.low_stock == 3
        assert summary.in_stock == 1


class TestFilterItems:
    """Tests for filter_items."""

    def test_no_filters_returns_all(self, items, categories):
        assert filter_items(items, categories) == items

    def test_search_matches_item_name_case_insensitive(self, items, categories):
        result = filter_items(items, categories, search="LAP")

        assert [i.name for i in result] == ["Laptop"]

    def test_search_matches_category_name(self, items, categories):
        result = filter_items(items, categories, search="books")

        assert [i.name for i in result] == ["Novel", "Atlas"]

    def test_orphaned_item_matches_unknown(self, items, categories):
        """Items whose category was deleted search as 'Unknown'."""
        result = filter_items(items, categories, search="unknown")

        assert [i.name for i in result] == ["Mystery Box"]

    def test_category_filter(self, items, categories):
        result = filter_items(items, categories, category_id=1)

        assert [i.name for i in result] == ["Laptop", "Headphones"]

    def test_low_stock_filter(self, items, categories):
        result = filter_items(items, categories, stock=StockFilter.LOW)

        assert [i.name for i in result] == ["Headphones", "Novel", "Mystery Box"]

    def test_out_of_stock_filter(self, items, categories):
        result = filter_items(items, categories, stock=StockFilter.OUT)

        assert [i.name for i in result] == ["Laptop"]

    def test_filters_combine(self, items, categories):
        result = filter_items(items, categories, search="o", category_id=2, stock=StockFilter.LOW)

        assert [i.name for i in result] == ["Novel"]


class TestFilterCustomersAndInvoices:
    """Tests for filter_customers and filter_invoices."""

    @pytest.fixture
    def customers(self):
        return [
            Customer(id=1, name="Alice", phone="555-000-1111", email="alice@example.com", created_at=NOW),
            Customer(id=2, name="Bob", phone="555-222-3333", email=None, created_at=NOW),
        ]

    def test_customer_search_by_phone(self, customers):
        assert [c.name for c in filter_customers(customers, "222")] == ["Bob"]

    def test_customer_search_by_email(self, customers):
        assert [c.name for c in filter_customers(customers, "EXAMPLE")] == ["Alice"]

    def test_blank_search_returns_all(self, customers):
        assert filter_customers(customers, "   ") == customers

    def test_invoice_search_by_number_or_customer(self, customers):
        invoices = [
            Invoice(id=1, invoice_number="INV-000001", customer_id=1, invoice_date=date(2024, 1, 1),
                    subtotal=1, vat_amount=0.15, total_amount=1.15, created_at=NOW),
            Invoice(id=2, invoice_number="INV-000002", customer_id=2, invoice_date=date(2024, 1, 2),
                    subtotal=1, vat_amount=0.15, total_amount=1.15, created_at=NOW),
        ]

        assert [i.id for i in filter_invoices(invoices, customers, "000002")] == [2]
        assert [i.id for i in filter_invoices(invoices, customers, "alice")] == [1]
