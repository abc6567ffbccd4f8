"""
Item service for catalog items and stock levels.

Stock (quantity) is set directly through create/update/update_quantity and
decremented as a side effect of invoice creation (see InvoiceService).
"""

import logging

from clients.database_client import DatabaseClient
from core.config import DeletePolicy
from core.exceptions import ReferencedEntityError
from core.models import Item, ItemCreate, ItemUpdate
from utils.timezone import now_iso

logger = logging.getLogger(__name__)


class ItemService:
    """Service for item operations."""

    def __init__(self, db: DatabaseClient, delete_policy: DeletePolicy = DeletePolicy.ORPHAN):
        self.db = db
        self.delete_policy = delete_policy

    def create(self, data: ItemCreate) -> Item:
        """
        Create a new item.

        The category is not checked for existence.

        Args:
            data: Item creation data

        Returns:
            Created item
        """
        row = self.db.execute_returning(
            """
            INSERT INTO items (name, category_id, price, quantity, description, created_at)
            VALUES (:name, :category_id, :price, :quantity, :description, :created_at)
            RETURNING *
            """,
            {
                "name": data.name,
                "category_id": data.category_id,
                "price": data.price,
                "quantity": data.quantity,
                "description": data.description,
                "created_at": now_iso(),
            }
        )[0]

        return Item.model_validate(row)

    def get_by_id(self, item_id: int) -> Item | None:
        """
        Get item by ID.

        Returns:
            Item if found, None otherwise.
        """
        row = self.db.execute_single(
            "SELECT * FROM items WHERE id = :id",
            {"id": item_id}
        )

        if row is None:
            return None

        return Item.model_validate(row)

    def list_all(self) -> list[Item]:
        """List all items ordered by name."""
        rows = self.db.execute("SELECT * FROM items ORDER BY name ASC, id ASC")

        return [Item.model_validate(row) for row in rows]

    def list_by_category(self, category_id: int) -> list[Item]:
        """List items in one category ordered by name."""
        rows = self.db.execute(
            """
            SELECT * FROM items
            WHERE category_id = :category_id
            ORDER BY name ASC, id ASC
            """,
            {"category_id": category_id}
        )

        return [Item.model_validate(row) for row in rows]

    def update(self, item_id: int, data: ItemUpdate) -> Item:
        """
        Replace all mutable fields of an item.

        Raises:
            ValueError: If item not found
        """
        rows = self.db.execute_returning(
            """
            UPDATE items
            SET name = :name, category_id = :category_id, price = :price,
                quantity = :quantity, description = :description
            WHERE id = :id
            RETURNING *
            """,
            {
                "name": data.name,
                "category_id": data.category_id,
                "price": data.price,
                "quantity": data.quantity,
                "description": data.description,
                "id": item_id,
            }
        )
        if not rows:
            raise ValueError(f"Item {item_id} not found")

        return Item.model_validate(rows[0])

    def update_quantity(self, item_id: int, quantity: int) -> Item:
        """
        Set an item's stock level.

        Raises:
            ValueError: If quantity is negative or item not found
        """
        if quantity < 0:
            raise ValueError(f"Quantity must be non-negative, got {quantity}")

        rows = self.db.execute_returning(
            "UPDATE items SET quantity = :quantity WHERE id = :id RETURNING *",
            {"quantity": quantity, "id": item_id}
        )
        if not rows:
            raise ValueError(f"Item {item_id} not found")

        return Item.model_validate(rows[0])

    def decrement_stock(self, item_id: int, quantity: int) -> None:
        """
        Remove sold units from stock, flooring at zero.

        Selling more than is on hand clamps to zero rather than failing. A
        missing item is ignored.
        """
        self.db.execute(
            """
            UPDATE items
            SET quantity = CASE WHEN quantity > :quantity THEN quantity - :quantity ELSE 0 END
            WHERE id = :id
            """,
            {"quantity": quantity, "id": item_id}
        )

    def delete(self, item_id: int) -> bool:
        """
        Delete an item.

        Under the orphan policy invoice lines keep the removed item id. Under
        the restrict policy the delete is refused while any invoice line
        references it.

        Returns:
            True if deleted, False if no such item

        Raises:
            ReferencedEntityError: Restrict policy and invoice lines reference it
        """
        if self.delete_policy == DeletePolicy.RESTRICT:
            count = self.db.execute_scalar(
                "SELECT COUNT(*) FROM invoice_items WHERE item_id = :id",
                {"id": item_id}
            )
            if count:
                logger.warning(f"Refusing to delete item {item_id}: {count} invoice lines reference it")
                raise ReferencedEntityError("item", item_id, "invoice lines", count)

        deleted = self.db.execute_rowcount(
            "DELETE FROM items WHERE id = :id",
            {"id": item_id}
        )
        return deleted > 0
