"""Repair UTF-8 text that was decoded as Latin-1 ("Ã©" → "é")."""

from typing import Any


def fix_text(s: str) -> str:
    """Re-decode a single string; return it unchanged if it isn't mojibake."""
    try:
        return s.encode("latin-1").decode("utf-8")
    except (UnicodeEncodeError, UnicodeDecodeError):
        # Code points above U+00FF, or bytes that aren't valid UTF-8
        return s


def fix_encoding(value: Any) -> Any:
    """Walk mappings, lists and tuples and fix every string value.

    Keys are left alone. Non-string scalars pass through untouched.
    """
    if isinstance(value, str):
        return fix_text(value)
    if isinstance(value, dict):
        return {k: fix_encoding(v) for k, v in value.items()}
    if isinstance(value, list):
        return [fix_encoding(v) for v in value]
    if isinstance(value, tuple):
        return tuple(fix_encoding(v) for v in value)
    return value
