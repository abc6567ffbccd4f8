"""
Category service for item categories.

Categories group catalog items. Names are unique; a duplicate name surfaces
as the database's IntegrityError.
"""

import logging

from clients.database_client import DatabaseClient
from core.config import DeletePolicy
from core.exceptions import ReferencedEntityError
from core.models import Category, CategoryCreate, CategoryUpdate
from utils.timezone import now_iso

logger = logging.getLogger(__name__)


class CategoryService:
    """Service for category operations."""

    def __init__(self, db: DatabaseClient, delete_policy: DeletePolicy = DeletePolicy.ORPHAN):
        self.db = db
        self.delete_policy = delete_policy

    def create(self, data: CategoryCreate) -> Category:
        """
        Create a new category.

        Args:
            data: Category creation data

        Returns:
            Created category

        Raises:
            IntegrityError: If a category with the same name exists
        """
        row = self.db.execute_returning(
            """
            INSERT INTO categories (name, description, created_at)
            VALUES (:name, :description, :created_at)
            RETURNING *
            """,
            {"name": data.name, "description": data.description, "created_at": now_iso()}
        )[0]

        return Category.model_validate(row)

    def get_by_id(self, category_id: int) -> Category | None:
        """
        Get category by ID.

        Returns:
            Category if found, None otherwise.
        """
        row = self.db.execute_single(
            "SELECT * FROM categories WHERE id = :id",
            {"id": category_id}
        )

        if row is None:
            return None

        return Category.model_validate(row)

    def list_all(self) -> list[Category]:
        """
        List all categories.

        Returns:
            List of categories ordered by name
        """
        rows = self.db.execute("SELECT * FROM categories ORDER BY name ASC, id ASC")

        return [Category.model_validate(row) for row in rows]

    def update(self, category_id: int, data: CategoryUpdate) -> Category:
        """
        Replace a category's name and description.

        Raises:
            ValueError: If category not found
            IntegrityError: If the new name belongs to another category
        """
        rows = self.db.execute_returning(
            """
            UPDATE categories
            SET name = :name, description = :description
            WHERE id = :id
            RETURNING *
            """,
            {"name": data.name, "description": data.description, "id": category_id}
        )
        if not rows:
            raise ValueError(f"Category {category_id} not found")

        return Category.model_validate(rows[0])

    def delete(self, category_id: int) -> bool:
        """
        Delete a category.

        Under the orphan policy items in the category are left pointing at
        the removed id. Under the restrict policy the delete is refused while
        any item references it.

        Returns:
            True if deleted, False if no such category

        Raises:
            ReferencedEntityError: Restrict policy and items still reference it
        """
        if self.delete_policy == DeletePolicy.RESTRICT:
            count = self.db.execute_scalar(
                "SELECT COUNT(*) FROM items WHERE category_id = :id",
                {"id": category_id}
            )
            if count:
                logger.warning(f"Refusing to delete category {category_id}: {count} items reference it")
                raise ReferencedEntityError("category", category_id, "items", count)

        deleted = self.db.execute_rowcount(
            "DELETE FROM categories WHERE id = :id",
            {"id": category_id}
        )
        return deleted > 0
