"""Manual visited / not-visited country overrides on top of automated stats.

The override map only records disagreements with automation: a country whose
manual state matches what the trips already say has no entry.
"""

import dataclasses
import re
from typing import Any, Dict, FrozenSet, Iterable, Mapping

from tripit_stats.models import Stats

_ISO2_RE = re.compile(r"[A-Za-z]{2}")


def clean_overrides(raw: Any) -> Dict[str, bool]:
    """Keep only {ISO2: bool} entries, upper-casing keys. Anything else is dropped."""
    if not isinstance(raw, dict):
        return {}
    cleaned = {}
    for key, value in raw.items():
        if isinstance(key, str) and _ISO2_RE.fullmatch(key) and isinstance(value, bool):
            cleaned[key.upper()] = value
    return cleaned


def apply_overrides(countries: Iterable[str], overrides: Mapping[str, bool]) -> FrozenSet[str]:
    final = set(countries)
    for iso, visited in clean_overrides(overrides).items():
        if visited:
            final.add(iso)
        else:
            final.discard(iso)
    return frozenset(final)


def reconcile(stats: Stats, overrides: Mapping[str, bool]) -> Stats:
    """New Stats whose countries reflect the overrides; stats itself is untouched."""
    return dataclasses.replace(
        stats,
        countries_visited=apply_overrides(stats.countries_visited, overrides),
    )


def toggle_override(
    overrides: Mapping[str, bool],
    iso: str,
    automated: Iterable[str],
) -> Dict[str, bool]:
    """Flip a country's final visited state and return the new override map.

    Raises ValueError when iso is not a two-letter code.
    """
    if not isinstance(iso, str) or not _ISO2_RE.fullmatch(iso.strip()):
        raise ValueError(f"Not an ISO alpha-2 country code: {iso!r}")
    iso = iso.strip().upper()
    automated = set(automated)
    updated = clean_overrides(overrides)
    next_status = iso not in apply_overrides(automated, updated)

    if next_status == (iso in automated):
        updated.pop(iso, None)
    else:
        updated[iso] = next_status
    return updated


def country_status(iso: str, automated: Iterable[str], final: Iterable[str]) -> str:
    """One of: automated, manual-visited, manual-not-visited, not-visited."""
    in_auto = iso in set(automated)
    in_final = iso in set(final)
    if in_final and in_auto:
        return "automated"
    if in_final:
        return "manual-visited"
    if in_auto:
        return "manual-not-visited"
    return "not-visited"
