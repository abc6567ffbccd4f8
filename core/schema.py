"""
Database schema and seed data.

All DDL is create-if-absent so ensure_schema() can run on every start.
Foreign keys are declared for documentation but not enforced (SQLite's
foreign_keys pragma stays off); whether a referenced row may be deleted is
decided by the services' delete policy.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from clients.database_client import DatabaseClient
from core.config import SeedCategory

logger = logging.getLogger(__name__)

TABLES = (
    """
    CREATE TABLE IF NOT EXISTS categories (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL UNIQUE,
        description TEXT,
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS items (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        category_id INTEGER NOT NULL,
        price REAL NOT NULL,
        quantity INTEGER NOT NULL DEFAULT 0,
        description TEXT,
        created_at TEXT NOT NULL,
        FOREIGN KEY (category_id) REFERENCES categories (id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS customers (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        phone TEXT NOT NULL,
        email TEXT,
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS invoices (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        invoice_number TEXT NOT NULL UNIQUE,
        customer_id INTEGER NOT NULL,
        invoice_date TEXT NOT NULL,
        subtotal REAL NOT NULL,
        vat_amount REAL NOT NULL,
        total_amount REAL NOT NULL,
        created_at TEXT NOT NULL,
        FOREIGN KEY (customer_id) REFERENCES customers (id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS invoice_items (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        invoice_id INTEGER NOT NULL,
        item_id INTEGER NOT NULL,
        quantity INTEGER NOT NULL,
        unit_price REAL NOT NULL,
        extended_amount REAL NOT NULL,
        FOREIGN KEY (invoice_id) REFERENCES invoices (id),
        FOREIGN KEY (item_id) REFERENCES items (id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS invoice_sequence (
        id INTEGER PRIMARY KEY CHECK (id = 1),
        last_value INTEGER NOT NULL
    )
    """,
)

INDEXES = (
    "CREATE INDEX IF NOT EXISTS idx_items_category_id ON items (category_id)",
    "CREATE INDEX IF NOT EXISTS idx_invoices_customer_id ON invoices (customer_id)",
    "CREATE INDEX IF NOT EXISTS idx_invoice_items_invoice_id ON invoice_items (invoice_id)",
    "CREATE INDEX IF NOT EXISTS idx_invoice_items_item_id ON invoice_items (item_id)",
)


def ensure_schema(db: DatabaseClient) -> None:
    """
    Create all tables and indexes if absent, and the invoice sequence row.

    The sequence row starts at the current invoice count so a database that
    already holds invoices continues numbering after them.
    """
    with db.transaction():
        for ddl in TABLES + INDEXES:
            db.execute(ddl)

        db.execute(
            """
            INSERT INTO invoice_sequence (id, last_value)
            SELECT 1, (SELECT COUNT(*) FROM invoices)
            WHERE NOT EXISTS (SELECT 1 FROM invoice_sequence WHERE id = 1)
            """
        )

    logger.info("Schema ready")


def seed_default_categories(db: DatabaseClient, categories: list[SeedCategory], created_at: str) -> int:
    """
    Insert each seed category unless one with the same name exists.

    Never overwrites an existing category, so user edits to a seeded
    category's description survive re-initialization. Failures are logged
    and swallowed: missing seed data must not block startup.

    Returns:
        Number of categories inserted
    """
    inserted = 0
    try:
        for category in categories:
            inserted += db.execute_rowcount(
                """
                INSERT INTO categories (name, description, created_at)
                VALUES (:name, :description, :created_at)
                ON CONFLICT (name) DO NOTHING
                """,
                {"name": category.name, "description": category.description, "created_at": created_at}
            )
    except SQLAlchemyError:
        logger.exception("Failed to insert default categories")

    if inserted:
        logger.info(f"Seeded {inserted} default categories")
    return inserted
