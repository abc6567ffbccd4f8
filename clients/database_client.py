"""
SQLite client for the local inventory database.

Wraps a SQLAlchemy engine bound to a single database file. Queries are raw SQL
with named parameters; rows come back as plain dicts.

The client is inert until connect() is called. Any query issued before that
(or after close()) raises StoreNotInitializedError - callers must initialize
the store first.
"""

import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection, Engine

from core.exceptions import StoreNotInitializedError

logger = logging.getLogger(__name__)

MEMORY_DATABASE = ":memory:"


def sqlite_url(database_path: str) -> str:
    """Build a SQLAlchemy URL for a database file path (or :memory:)."""
    if database_path == MEMORY_DATABASE:
        return "sqlite://"
    return f"sqlite:///{database_path}"


class DatabaseClient:
    """
    SQLite client with explicit connect/close lifecycle.

    Each call outside a transaction runs on its own connection and commits
    immediately. Inside transaction() every call shares one connection and
    commits (or rolls back) together.

    Usage:
        db = DatabaseClient("inventory.db")
        db.connect()

        rows = db.execute("SELECT * FROM items ORDER BY name")

        with db.transaction():
            db.execute("UPDATE items SET quantity = :q WHERE id = :id", {"q": 0, "id": 1})
            db.execute("DELETE FROM invoice_items WHERE item_id = :id", {"id": 1})
    """

    def __init__(self, database_path: str, echo: bool = False):
        self._database_path = database_path
        self._echo = echo
        self._engine: Engine | None = None
        self._local = threading.local()

    @property
    def database_path(self) -> str:
        return self._database_path

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    def connect(self) -> None:
        """Create the engine. Safe to call more than once."""
        if self._engine is not None:
            return

        if self._database_path != MEMORY_DATABASE:
            Path(self._database_path).parent.mkdir(parents=True, exist_ok=True)

        self._engine = create_engine(sqlite_url(self._database_path), echo=self._echo)
        logger.info(f"Database engine created for {self._database_path}")

    def _require_engine(self) -> Engine:
        if self._engine is None:
            raise StoreNotInitializedError(
                "Database not initialized. Call InventoryStore.init() first."
            )
        return self._engine

    def _active_connection(self) -> Connection | None:
        return getattr(self._local, "connection", None)

    @contextmanager
    def get_connection(self) -> Iterator[Connection]:
        """
        Yield a connection for one unit of work.

        Reuses the open transaction's connection if there is one, otherwise
        opens a fresh connection that commits on success.
        """
        active = self._active_connection()
        if active is not None:
            yield active
            return

        engine = self._require_engine()
        with engine.begin() as conn:
            yield conn

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """
        Run the enclosed calls atomically.

        Commits on normal exit, rolls back and re-raises on error. Nested
        transaction() blocks join the outermost one.
        """
        if self._active_connection() is not None:
            yield
            return

        engine = self._require_engine()
        with engine.begin() as conn:
            self._local.connection = conn
            try:
                yield
            finally:
                self._local.connection = None

    def execute(self, query: str, params: Dict[str, Any] | None = None) -> List[Dict[str, Any]]:
        """Execute query, return list of row dicts. Empty list if no results."""
        with self.get_connection() as conn:
            result = conn.execute(text(query), params or {})
            if result.returns_rows:
                return [dict(row) for row in result.mappings().all()]
            return []

    def execute_single(self, query: str, params: Dict[str, Any] | None = None) -> Dict[str, Any] | None:
        """Execute query, return first row or None."""
        results = self.execute(query, params)
        return results[0] if results else None

    def execute_scalar(self, query: str, params: Dict[str, Any] | None = None) -> Any:
        """Execute query, return first value of first row or None."""
        with self.get_connection() as conn:
            return conn.execute(text(query), params or {}).scalar()

    def execute_returning(self, query: str, params: Dict[str, Any] | None = None) -> List[Dict[str, Any]]:
        """Execute INSERT/UPDATE/DELETE with RETURNING, return results."""
        return self.execute(query, params)

    def execute_rowcount(self, query: str, params: Dict[str, Any] | None = None) -> int:
        """Execute a write statement, return number of affected rows."""
        with self.get_connection() as conn:
            return conn.execute(text(query), params or {}).rowcount

    def close(self) -> None:
        """Dispose of the engine. The client must be reconnected before reuse."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            logger.info(f"Database engine disposed for {self._database_path}")
