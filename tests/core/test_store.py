"""Tests for InventoryStore lifecycle."""

import pytest

from core.config import DeletePolicy, StoreConfig
from core.exceptions import StoreNotInitializedError
from core.store import InventoryStore


class TestInitialization:
    """init/close and the uninitialized guard."""

    def test_operations_before_init_raise(self, config):
        """Every service fails fast until init() runs."""
        store = InventoryStore(config)

        assert store.is_initialized is False
        with pytest.raises(StoreNotInitializedError):
            store.categories.list_all()
        with pytest.raises(StoreNotInitializedError):
            store.invoices.generate_number()
        with pytest.raises(StoreNotInitializedError):
            store.dashboard.get_counts()

    def test_operations_after_close_raise(self, config):
        """close() returns the store to the uninitialized state."""
        store = InventoryStore(config)
        store.init()
        store.close()

        with pytest.raises(StoreNotInitializedError):
            store.items.list_all()

    def test_reinitializing_never_duplicates_defaults(self, config):
        """Two init() calls leave exactly one row per default category name."""
        store = InventoryStore(config)
        store.init()
        store.init()

        names = [c.name for c in store.categories.list_all()]
        store.close()

        assert len(names) == len(set(names)) == 4

    def test_data_persists_across_reopen(self, config):
        """State lives in the database file, not the store instance."""
        from core.models import CustomerCreate

        with InventoryStore(config) as store:
            store.customers.create(CustomerCreate(name="Persisted", phone="0123456789"))

        with InventoryStore(config) as store:
            names = [c.name for c in store.customers.list_all()]

        assert names == ["Persisted"]

    def test_memory_database(self):
        """':memory:' gives a working throwaway store."""
        with InventoryStore(StoreConfig(database_path=":memory:")) as store:
            assert len(store.categories.list_all()) == 4

    def test_context_manager_closes(self, config):
        """Leaving the with-block closes the store."""
        with InventoryStore(config) as store:
            assert store.is_initialized

        assert store.is_initialized is False


class TestWiring:
    """Config flows into the services."""

    def test_delete_policy_passed_to_services(self, db_path):
        """Every deleting service sees the configured policy."""
        store = InventoryStore(StoreConfig(database_path=db_path, delete_policy=DeletePolicy.RESTRICT))

        assert store.categories.delete_policy == DeletePolicy.RESTRICT
        assert store.items.delete_policy == DeletePolicy.RESTRICT
        assert store.customers.delete_policy == DeletePolicy.RESTRICT

    def test_invoice_settings_passed_to_service(self, db_path):
        """VAT rate and number format come from config."""
        store = InventoryStore(StoreConfig(
            database_path=db_path,
            vat_rate=0.2,
            invoice_prefix="S-",
            invoice_number_width=4,
        ))

        assert store.invoices.vat_rate == 0.2
        assert store.invoices.format_number(7) == "S-0007"


class TestStockQueries:
    """Stock summary and item search use the configured low-stock threshold."""

    @pytest.fixture
    def small_store(self, db_path):
        from core.models import CategoryCreate, ItemCreate

        store = InventoryStore(StoreConfig(database_path=db_path, low_stock_threshold=3))
        store.init()
        category = store.categories.create(CategoryCreate(name="Tools"))
        for name, quantity in [("Awl", 0), ("Bolt", 2), ("Chisel", 5)]:
            store.items.create(ItemCreate(name=name, category_id=category.id, price=1.0, quantity=quantity))
        yield store
        store.close()

    def test_threshold_exposed(self, small_store):
        assert small_store.low_stock_threshold == 3

    def test_stock_summary(self, small_store):
        """Quantity 5 is above a threshold of 3, so it counts as in stock."""
        summary = small_store.stock_summary()

        assert summary.total == 3
        assert summary.out_of_stock == 1
        assert summary.low_stock == 1
        assert summary.in_stock == 1

    def test_search_items_low_stock(self, small_store):
        from core.filters import StockFilter

        low = small_store.search_items(stock=StockFilter.LOW)

        assert [item.name for item in low] == ["Bolt"]

    def test_search_items_by_category_name(self, small_store):
        assert [item.name for item in small_store.search_items(search="tool")] == ["Awl", "Bolt", "Chisel"]
