"""Coercion helpers for loosely typed snapshot values.

Snapshot rows come from JSON exports and SQLite alike, so the same field
may arrive as ``None``, ``""``, a number, a numeric string or a 0/1 flag.
"""

from typing import Any, Optional


def opt_str(value: Any) -> Optional[str]:
    """Return a non-blank string or None."""
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


def opt_int(value: Any) -> Optional[int]:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def opt_float(value: Any) -> Optional[float]:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def flag(value: Any) -> bool:
    """Snapshot flags arrive as 0/1 integers (SQLite) or booleans."""
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes")
    return bool(value)


def str_list(value: Any) -> list[str]:
    """Normalize a list-ish value (list, comma separated string, None)."""
    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if item is not None and str(item).strip()]
    return [str(value)]
