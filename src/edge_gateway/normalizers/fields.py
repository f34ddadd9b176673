"""Field coercion helpers shared by the normalizers."""

from typing import Any


def as_text(value: Any) -> str:
    """Return ``value`` if it is a string, otherwise an empty string."""
    return value if isinstance(value, str) else ""


def as_number(value: Any) -> int | float | None:
    """Return ``value`` if it is a JSON number, otherwise None."""
    # bool is an int subclass but never a count
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    return None
