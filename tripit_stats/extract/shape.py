"""Coerce TripIt's "one object or a list of objects" fields into plain shapes."""

from typing import Any, Dict, List


def as_list(value: Any) -> List[Any]:
    """Zero-or-more: None → [], single record → [record], list → list."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def as_records(value: Any) -> List[Dict[str, Any]]:
    """Like as_list, but keeps only mapping entries."""
    return [v for v in as_list(value) if isinstance(v, dict)]


def as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def text(value: Any) -> str:
    """String view of a scalar field; None and containers become ""."""
    if value is None or isinstance(value, (dict, list, tuple)):
        return ""
    return str(value)
