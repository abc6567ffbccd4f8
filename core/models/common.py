"""Shared field types for domain models."""

from typing import Annotated

from pydantic import BeforeValidator


def blank_to_none(value: object) -> object:
    """Treat empty or whitespace-only strings as absent."""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


# Optional free text: "" and "   " are stored as NULL, never as empty strings
OptionalText = Annotated[str | None, BeforeValidator(blank_to_none)]
