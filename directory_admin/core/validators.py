"""Input checks for submitted user forms."""
from __future__ import annotations


def validate_required(value: str | None, field: str) -> str:
    """Trim a required text field.

    Args:
        value: Raw field value
        field: Field name for error messages (e.g., "Name")

    Returns:
        Trimmed value

    Raises:
        ValueError: If the value is missing or blank
    """
    value = (value or "").strip()
    if not value:
        raise ValueError(f"{field} is required")
    return value


def optional_text(value: str | None) -> str:
    return (value or "").strip()
