"""Dashboard aggregate counts."""

from clients.database_client import DatabaseClient
from core.models import DashboardCounts


class DashboardService:
    """Read-only counts for the home screen. Always queried live."""

    def __init__(self, db: DatabaseClient):
        self.db = db

    def get_counts(self) -> DashboardCounts:
        """Count items, invoices and customers."""
        return DashboardCounts(
            items=self.db.execute_scalar("SELECT COUNT(*) FROM items"),
            invoices=self.db.execute_scalar("SELECT COUNT(*) FROM invoices"),
            customers=self.db.execute_scalar("SELECT COUNT(*) FROM customers"),
        )
