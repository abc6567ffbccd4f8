"""
Inventory store: the single gateway to persisted state.

Builds the database client and one service per entity family from a
StoreConfig. Nothing touches the database until init() runs; until then (and
after close()) every operation raises StoreNotInitializedError.

Usage:
    store = InventoryStore(StoreConfig(database_path="inventory.db"))
    store.init()

    category = store.categories.create(CategoryCreate(name="Tools"))
    counts = store.dashboard.get_counts()

    store.close()

Or as a context manager:
    with InventoryStore(config) as store:
        store.items.list_all()
"""

import logging

from clients.database_client import DatabaseClient
from core.config import StoreConfig
from core.filters import StockFilter, StockSummary, category_names, filter_items, summarize_stock
from core.models import Item
from core.schema import ensure_schema, seed_default_categories
from core.services.category_service import CategoryService
from core.services.customer_service import CustomerService
from core.services.dashboard_service import DashboardService
from core.services.invoice_service import InvoiceService
from core.services.item_service import ItemService
from utils.timezone import now_iso

logger = logging.getLogger(__name__)


class InventoryStore:
    """Explicitly constructed store with an init/close lifecycle."""

    def __init__(self, config: StoreConfig | None = None, db: DatabaseClient | None = None):
        self.config = config or StoreConfig()
        self.db = db or DatabaseClient(self.config.database_path, echo=self.config.echo_sql)

        policy = self.config.delete_policy
        self.categories = CategoryService(self.db, policy)
        self.items = ItemService(self.db, policy)
        self.customers = CustomerService(self.db, policy)
        self.invoices = InvoiceService(
            self.db,
            self.items,
            vat_rate=self.config.vat_rate,
            number_prefix=self.config.invoice_prefix,
            number_width=self.config.invoice_number_width,
        )
        self.dashboard = DashboardService(self.db)

    @property
    def is_initialized(self) -> bool:
        return self.db.is_connected

    @property
    def low_stock_threshold(self) -> int:
        return self.config.low_stock_threshold

    def stock_summary(self) -> StockSummary:
        """Out/low/in stock counts over every item, using the configured threshold."""
        return summarize_stock(self.items.list_all(), self.low_stock_threshold)

    def search_items(
        self,
        search: str | None = None,
        category_id: int | None = None,
        stock: StockFilter = StockFilter.ALL,
    ) -> list[Item]:
        """
        Inventory screen query: all items narrowed by the caller-side filters.

        Category names for search come from the current categories, and LOW
        means 1 up to the configured low_stock_threshold.
        """
        names = category_names(self.categories.list_all())
        return filter_items(
            self.items.list_all(),
            names,
            search=search,
            category_id=category_id,
            stock=stock,
            threshold=self.low_stock_threshold,
        )

    def init(self) -> None:
        """
        Connect, create the schema if absent and seed default categories.

        Idempotent: running it again never duplicates seed data and never
        overwrites edits to seeded categories.
        """
        self.db.connect()
        ensure_schema(self.db)
        seed_default_categories(self.db, self.config.default_categories, now_iso())
        logger.info(f"Inventory store ready at {self.config.database_path}")

    def close(self) -> None:
        """Release the database. The store must be re-initialized before reuse."""
        self.db.close()

    def __enter__(self) -> "InventoryStore":
        self.init()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
