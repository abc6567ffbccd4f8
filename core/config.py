"""Inventory store configuration."""

import os
from enum import Enum

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from core.filters import LOW_STOCK_THRESHOLD


class DeletePolicy(str, Enum):
    """What happens when deleting a row that other rows still reference."""

    ORPHAN = "orphan"  # remove anyway, references dangle
    RESTRICT = "restrict"  # refuse with ReferencedEntityError


class SeedCategory(BaseModel):
    """A category inserted at initialization if no category has its name."""

    name: str
    description: str | None = None


DEFAULT_CATEGORIES = [
    SeedCategory(name="Electronics", description="Electronic devices and accessories"),
    SeedCategory(name="Clothing", description="Apparel and fashion items"),
    SeedCategory(name="Books", description="Books and educational materials"),
    SeedCategory(name="Home & Garden", description="Home improvement and garden supplies"),
]


class StoreConfig(BaseModel):
    """
    Inventory store configuration.

    Defaults reproduce the application's fixed behavior: a local
    inventory.db file, 15% VAT, INV-000001 style numbering and orphaning
    deletes.
    """

    # Storage
    database_path: str = Field(
        default="inventory.db",
        description="SQLite database file path, or ':memory:'",
        min_length=1,
    )
    echo_sql: bool = Field(
        default=False,
        description="Log every SQL statement through SQLAlchemy",
    )

    # Invoicing
    vat_rate: float = Field(
        default=0.15,
        description="VAT applied to invoice subtotals",
        ge=0,
        le=1,
    )
    invoice_prefix: str = Field(
        default="INV-",
        description="Prefix for generated invoice numbers",
    )
    invoice_number_width: int = Field(
        default=6,
        description="Zero-padded width of the invoice sequence number",
        ge=1,
        le=12,
    )

    # Referential policy
    delete_policy: DeletePolicy = Field(
        default=DeletePolicy.ORPHAN,
        description="How deletes treat rows that are still referenced",
    )

    # Inventory
    low_stock_threshold: int = Field(
        default=LOW_STOCK_THRESHOLD,
        description="Quantities from 1 up to this value count as low stock",
        ge=1,
    )
    default_categories: list[SeedCategory] = Field(
        default_factory=lambda: list(DEFAULT_CATEGORIES),
        description="Categories seeded at initialization",
    )

    @classmethod
    def from_env(cls, env_file: str | None = None) -> "StoreConfig":
        """
        Build config from environment variables (after loading .env).

        Recognised: INVENTORY_DB_PATH, INVENTORY_VAT_RATE,
        INVENTORY_DELETE_POLICY, INVENTORY_ECHO_SQL. Unset variables keep
        their defaults.
        """
        load_dotenv(env_file)

        overrides = {}
        if os.getenv("INVENTORY_DB_PATH"):
            overrides["database_path"] = os.getenv("INVENTORY_DB_PATH")
        if os.getenv("INVENTORY_VAT_RATE"):
            overrides["vat_rate"] = os.getenv("INVENTORY_VAT_RATE")
        if os.getenv("INVENTORY_DELETE_POLICY"):
            overrides["delete_policy"] = os.getenv("INVENTORY_DELETE_POLICY").lower()
        if os.getenv("INVENTORY_ECHO_SQL"):
            overrides["echo_sql"] = os.getenv("INVENTORY_ECHO_SQL").lower() in ("1", "true", "yes")

        return cls.model_validate(overrides)
