"""Lenient field readers used when documents cross into typed models."""

from typing import Any, Optional


def text(value: Any, default: str = "") -> str:
    """String field or default when missing / not a string."""
    return value if isinstance(value, str) else default


def optional_text(value: Any) -> Optional[str]:
    """Non-empty string field, else None."""
    return value if isinstance(value, str) and value else None


def count(value: Any) -> int:
    """Non-negative integer counter; anything unusable reads as 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return max(int(value), 0)
    if isinstance(value, str):
        try:
            return max(int(value.strip()), 0)
        except ValueError:
            return 0
    return 0
