"""Utility modules for cross-cutting concerns."""

from utils.timezone import now_utc, now_iso
from utils.currency import format_currency
