"""
Invoice service for sale invoices and their line items.

Invoices capture the lines of a sale at a point in time: each line snapshots
its unit price, and the invoice stores subtotal, VAT and total computed from
those lines when written. Creating an invoice removes the sold units from
stock. Updating one rewrites its lines but leaves stock untouched.

Every multi-row write runs in a single transaction.
"""

import logging

from clients.database_client import DatabaseClient
from core.models import Invoice, InvoiceCreate, InvoiceItem, InvoiceLineCreate, InvoiceUpdate
from core.pricing import VAT_RATE, compute_totals, extended_amount
from core.services.item_service import ItemService
from utils.timezone import now_iso

logger = logging.getLogger(__name__)


class InvoiceService:
    """Service for invoice operations."""

    def __init__(
        self,
        db: DatabaseClient,
        items: ItemService,
        vat_rate: float = VAT_RATE,
        number_prefix: str = "INV-",
        number_width: int = 6,
    ):
        self.db = db
        self.items = items
        self.vat_rate = vat_rate
        self.number_prefix = number_prefix
        self.number_width = number_width

    def format_number(self, sequence: int) -> str:
        """Render a sequence value as an invoice number, e.g. 42 -> INV-000042."""
        return f"{self.number_prefix}{sequence:0{self.number_width}d}"

    def generate_number(self) -> str:
        """
        Preview the number the next created invoice will receive.

        Nothing is reserved; the sequence only advances when an invoice is
        actually inserted.
        """
        return self.format_number(self._next_free_sequence())

    def _number_taken(self, invoice_number: str) -> bool:
        count = self.db.execute_scalar(
            "SELECT COUNT(*) FROM invoices WHERE invoice_number = :invoice_number",
            {"invoice_number": invoice_number}
        )
        return count > 0

    def _next_free_sequence(self) -> int:
        """
        First sequence value after last_value whose number is not in use.

        Caller-supplied numbers can sit ahead of the sequence; those values
        are skipped instead of colliding on insert.
        """
        last_value = self.db.execute_scalar(
            "SELECT last_value FROM invoice_sequence WHERE id = 1"
        )
        candidate = (last_value or 0) + 1
        while self._number_taken(self.format_number(candidate)):
            candidate += 1
        return candidate

    def _allocate_number(self) -> int:
        """Advance the invoice sequence. Must run inside the insert's transaction."""
        sequence = self._next_free_sequence()
        self.db.execute(
            "UPDATE invoice_sequence SET last_value = :last_value WHERE id = 1",
            {"last_value": sequence}
        )
        return sequence

    def _insert_line(self, invoice_id: int, line: InvoiceLineCreate) -> InvoiceItem:
        row = self.db.execute_returning(
            """
            INSERT INTO invoice_items (invoice_id, item_id, quantity, unit_price, extended_amount)
            VALUES (:invoice_id, :item_id, :quantity, :unit_price, :extended_amount)
            RETURNING *
            """,
            {
                "invoice_id": invoice_id,
                "item_id": line.item_id,
                "quantity": line.quantity,
                "unit_price": line.unit_price,
                "extended_amount": extended_amount(line.quantity, line.unit_price),
            }
        )[0]
        return InvoiceItem.model_validate(row)

    def create(self, data: InvoiceCreate) -> Invoice:
        """
        Create an invoice with its lines and take the sold units out of stock.

        Totals are computed from the lines. For each line, in order, the line
        is inserted and the item's quantity is reduced by the line quantity,
        floored at zero. All of it commits together or not at all.

        Args:
            data: Customer, date, lines and optionally a previewed number

        Returns:
            Created invoice

        Raises:
            IntegrityError: If the invoice number is already used
        """
        totals = compute_totals(data.lines, self.vat_rate)

        with self.db.transaction():
            sequence = self._allocate_number()
            invoice_number = data.invoice_number or self.format_number(sequence)

            row = self.db.execute_returning(
                """
                INSERT INTO invoices (
                    invoice_number, customer_id, invoice_date,
                    subtotal, vat_amount, total_amount, created_at
                ) VALUES (
                    :invoice_number, :customer_id, :invoice_date,
                    :subtotal, :vat_amount, :total_amount, :created_at
                )
                RETURNING *
                """,
                {
                    "invoice_number": invoice_number,
                    "customer_id": data.customer_id,
                    "invoice_date": data.invoice_date.isoformat(),
                    "subtotal": totals.subtotal,
                    "vat_amount": totals.vat_amount,
                    "total_amount": totals.total_amount,
                    "created_at": now_iso(),
                }
            )[0]
            invoice = Invoice.model_validate(row)

            for line in data.lines:
                self._insert_line(invoice.id, line)
                self.items.decrement_stock(line.item_id, line.quantity)

        logger.info(
            f"Created invoice {invoice.invoice_number} with {len(data.lines)} lines, "
            f"total {invoice.total_amount:.2f}"
        )
        return invoice

    def update(self, invoice_id: int, data: InvoiceUpdate) -> Invoice:
        """
        Replace an invoice's customer, date and lines, recomputing totals.

        Existing lines are deleted and the new set inserted. Stock is NOT
        adjusted: the decrement applied at creation is neither reversed nor
        reapplied for the new quantities.

        Raises:
            ValueError: If invoice not found
        """
        totals = compute_totals(data.lines, self.vat_rate)

        with self.db.transaction():
            rows = self.db.execute_returning(
                """
                UPDATE invoices
                SET customer_id = :customer_id, invoice_date = :invoice_date,
                    subtotal = :subtotal, vat_amount = :vat_amount, total_amount = :total_amount
                WHERE id = :id
                RETURNING *
                """,
                {
                    "customer_id": data.customer_id,
                    "invoice_date": data.invoice_date.isoformat(),
                    "subtotal": totals.subtotal,
                    "vat_amount": totals.vat_amount,
                    "total_amount": totals.total_amount,
                    "id": invoice_id,
                }
            )
            if not rows:
                raise ValueError(f"Invoice {invoice_id} not found")

            self.db.execute(
                "DELETE FROM invoice_items WHERE invoice_id = :invoice_id",
                {"invoice_id": invoice_id}
            )
            for line in data.lines:
                self._insert_line(invoice_id, line)

        updated = Invoice.model_validate(rows[0])
        logger.info(f"Updated invoice {updated.invoice_number} with {len(data.lines)} lines")
        return updated

    def get_by_id(self, invoice_id: int) -> Invoice | None:
        """
        Get invoice by ID.

        Returns:
            Invoice if found, None otherwise.
        """
        row = self.db.execute_single(
            "SELECT * FROM invoices WHERE id = :id",
            {"id": invoice_id}
        )

        if row is None:
            return None

        return Invoice.model_validate(row)

    def list_all(self) -> list[Invoice]:
        """
        List all invoices.

        Returns:
            List of invoices ordered by creation time DESC
        """
        rows = self.db.execute("SELECT * FROM invoices ORDER BY created_at DESC, id DESC")

        return [Invoice.model_validate(row) for row in rows]

    def list_line_items(self, invoice_id: int) -> list[InvoiceItem]:
        """List an invoice's lines in the order they were added."""
        rows = self.db.execute(
            "SELECT * FROM invoice_items WHERE invoice_id = :invoice_id ORDER BY id ASC",
            {"invoice_id": invoice_id}
        )

        return [InvoiceItem.model_validate(row) for row in rows]

    def _require_invoice(self, invoice_id: int) -> None:
        exists = self.db.execute_scalar(
            "SELECT COUNT(*) FROM invoices WHERE id = :id",
            {"id": invoice_id}
        )
        if not exists:
            raise ValueError(f"Invoice {invoice_id} not found")

    def _refresh_totals(self, invoice_id: int) -> None:
        """Re-derive stored totals from the invoice's current lines."""
        subtotal = self.db.execute_scalar(
            "SELECT COALESCE(SUM(extended_amount), 0) FROM invoice_items WHERE invoice_id = :invoice_id",
            {"invoice_id": invoice_id}
        )
        subtotal = float(subtotal)
        vat_amount = subtotal * self.vat_rate

        self.db.execute(
            """
            UPDATE invoices
            SET subtotal = :subtotal, vat_amount = :vat_amount, total_amount = :total_amount
            WHERE id = :id
            """,
            {
                "subtotal": subtotal,
                "vat_amount": vat_amount,
                "total_amount": subtotal + vat_amount,
                "id": invoice_id,
            }
        )

    def add_line_item(self, invoice_id: int, line: InvoiceLineCreate) -> InvoiceItem:
        """
        Append one line to an existing invoice.

        The extended amount is computed here and the invoice totals are
        re-derived from all its lines. Stock is not adjusted.

        Raises:
            ValueError: If invoice not found
        """
        with self.db.transaction():
            self._require_invoice(invoice_id)
            item = self._insert_line(invoice_id, line)
            self._refresh_totals(invoice_id)

        return item

    def delete_line_items(self, invoice_id: int) -> int:
        """
        Remove all lines from an invoice; its totals drop to zero.

        Returns:
            Number of lines removed

        Raises:
            ValueError: If invoice not found
        """
        with self.db.transaction():
            self._require_invoice(invoice_id)
            removed = self.db.execute_rowcount(
                "DELETE FROM invoice_items WHERE invoice_id = :invoice_id",
                {"invoice_id": invoice_id}
            )
            self._refresh_totals(invoice_id)

        return removed
