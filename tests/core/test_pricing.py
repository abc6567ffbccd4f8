"""Tests for invoice arithmetic."""

import pytest

from core.models import InvoiceLineCreate
from core.pricing import VAT_RATE, compute_totals, extended_amount


def _line(quantity: int, unit_price: float) -> InvoiceLineCreate:
    return InvoiceLineCreate(item_id=1, quantity=quantity, unit_price=unit_price)


class TestExtendedAmount:
    """Tests for extended_amount."""

    @pytest.mark.parametrize("quantity,unit_price", [
        (1, 0.01),
        (3, 19.99),
        (12, 2.5),
        (250, 1234.56),
    ])
    def test_is_quantity_times_unit_price(self, quantity, unit_price):
        assert extended_amount(quantity, unit_price) == quantity * unit_price


class TestComputeTotals:
    """Tests for compute_totals."""

    def test_vat_is_fifteen_percent(self):
        assert VAT_RATE == 0.15

    def test_single_line(self):
        totals = compute_totals([_line(2, 50.0)])

        assert totals.subtotal == 100.0
        assert totals.vat_amount == pytest.approx(15.0)
        assert totals.total_amount == pytest.approx(115.0)

    def test_multiple_lines(self):
        """Subtotal sums every line's extended amount."""
        totals = compute_totals([_line(3, 10.0), _line(1, 4.5), _line(2, 0.25)])

        assert totals.subtotal == pytest.approx(35.0)
        assert totals.vat_amount == pytest.approx(5.25)
        assert totals.total_amount == pytest.approx(40.25)

    def test_total_is_subtotal_plus_vat(self):
        totals = compute_totals([_line(7, 13.37), _line(3, 2.99)])

        assert totals.total_amount == totals.subtotal + totals.vat_amount
        assert totals.vat_amount == totals.subtotal * 0.15

    def test_custom_rate(self):
        totals = compute_totals([_line(1, 200.0)], vat_rate=0.2)

        assert totals.vat_amount == pytest.approx(40.0)

    def test_no_lines(self):
        totals = compute_totals([])

        assert totals.subtotal == 0
        assert totals.total_amount == 0
