"""Dashboard aggregate model."""

from pydantic import BaseModel


class DashboardCounts(BaseModel):
    """Live row counts shown on the home screen."""

    items: int
    invoices: int
    customers: int
