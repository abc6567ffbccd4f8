"""
Customer service for CRUD operations.

Customers are the billed party on invoices. Email is optional; phone is
required.
"""

import logging

from clients.database_client import DatabaseClient
from core.config import DeletePolicy
from core.exceptions import ReferencedEntityError
from core.models import Customer, CustomerCreate, CustomerUpdate
from utils.timezone import now_iso

logger = logging.getLogger(__name__)


class CustomerService:
    """Service for customer operations."""

    def __init__(self, db: DatabaseClient, delete_policy: DeletePolicy = DeletePolicy.ORPHAN):
        self.db = db
        self.delete_policy = delete_policy

    def create(self, data: CustomerCreate) -> Customer:
        """
        Create a new customer.

        Args:
            data: Customer creation data

        Returns:
            Created customer
        """
        row = self.db.execute_returning(
            """
            INSERT INTO customers (name, phone, email, created_at)
            VALUES (:name, :phone, :email, :created_at)
            RETURNING *
            """,
            {
                "name": data.name,
                "phone": data.phone,
                "email": data.email,
                "created_at": now_iso(),
            }
        )[0]

        return Customer.model_validate(row)

    def get_by_id(self, customer_id: int) -> Customer | None:
        """
        Get customer by ID.

        Returns:
            Customer if found, None otherwise.
        """
        row = self.db.execute_single(
            "SELECT * FROM customers WHERE id = :id",
            {"id": customer_id}
        )

        if row is None:
            return None

        return Customer.model_validate(row)

    def list_all(self) -> list[Customer]:
        """List all customers ordered by name."""
        rows = self.db.execute("SELECT * FROM customers ORDER BY name ASC, id ASC")

        return [Customer.model_validate(row) for row in rows]

    def update(self, customer_id: int, data: CustomerUpdate) -> Customer:
        """
        Replace a customer's name, phone and email.

        Raises:
            ValueError: If customer not found
        """
        rows = self.db.execute_returning(
            """
            UPDATE customers
            SET name = :name, phone = :phone, email = :email
            WHERE id = :id
            RETURNING *
            """,
            {"name": data.name, "phone": data.phone, "email": data.email, "id": customer_id}
        )
        if not rows:
            raise ValueError(f"Customer {customer_id} not found")

        return Customer.model_validate(rows[0])

    def delete(self, customer_id: int) -> bool:
        """
        Delete a customer.

        Returns:
            True if deleted, False if no such customer

        Raises:
            ReferencedEntityError: Restrict policy and invoices reference it
        """
        if self.delete_policy == DeletePolicy.RESTRICT:
            count = self.db.execute_scalar(
                "SELECT COUNT(*) FROM invoices WHERE customer_id = :id",
                {"id": customer_id}
            )
            if count:
                logger.warning(f"Refusing to delete customer {customer_id}: {count} invoices reference it")
                raise ReferencedEntityError("customer", customer_id, "invoices", count)

        deleted = self.db.execute_rowcount(
            "DELETE FROM customers WHERE id = :id",
            {"id": customer_id}
        )
        return deleted > 0
