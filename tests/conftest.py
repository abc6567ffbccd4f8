"""Shared test fixtures for the inventory store test suite."""

import pytest

from clients.database_client import DatabaseClient
from core.config import StoreConfig
from core.store import InventoryStore


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture
def db_path(tmp_path) -> str:
    """Isolated database file per test."""
    return str(tmp_path / "inventory.db")


@pytest.fixture
def config(db_path) -> StoreConfig:
    """Default configuration pointed at the per-test database."""
    return StoreConfig(database_path=db_path)


@pytest.fixture
def store(config):
    """Initialized InventoryStore, closed after the test."""
    store = InventoryStore(config)
    store.init()
    yield store
    store.close()


@pytest.fixture
def db(store) -> DatabaseClient:
    """The store's connected DatabaseClient, for direct SQL assertions."""
    return store.db


# =============================================================================
# ENTITY FIXTURES
# =============================================================================


@pytest.fixture
def test_category(store):
    """A user-created category."""
    from core.models import CategoryCreate

    return store.categories.create(CategoryCreate(name="Tools", description="Hand and power tools"))


@pytest.fixture
def test_item(store, test_category):
    """An item with 10 units in stock at $25.00."""
    from core.models import ItemCreate

    return store.items.create(ItemCreate(
        name="Hammer",
        category_id=test_category.id,
        price=25.0,
        quantity=10
    ))


@pytest.fixture
def test_customer(store):
    """A customer with phone and email."""
    from core.models import CustomerCreate

    return store.customers.create(CustomerCreate(
        name="Alice Smith",
        phone="+1 555 123 4567",
        email="alice@example.com"
    ))
