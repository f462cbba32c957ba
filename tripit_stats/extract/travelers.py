"""Traveler / guest name extraction."""

from typing import Any, Dict, Iterable, List, Optional

from tripit_stats.extract.shape import as_records

_PEOPLE_FIELDS = ("Traveler", "Guest")


def normalize_name(name: Any) -> Optional[str]:
    """Capitalized, trimmed ("  jOHN " → "John"). None if unusable."""
    if not isinstance(name, str):
        return None
    name = name.strip()
    if not name:
        return None
    return name[0].upper() + name[1:].lower()


def normalize_first_name(person: Dict[str, Any]) -> Optional[str]:
    return normalize_name(person.get("first_name"))


def object_travelers(obj: Dict[str, Any]) -> List[str]:
    """Sorted, de-duplicated first names of everyone attached to one object."""
    names = set()
    for fld in _PEOPLE_FIELDS:
        for person in as_records(obj.get(fld)):
            name = normalize_first_name(person)
            if name:
                names.add(name)
    return sorted(names)


def trip_travelers(objects: Iterable[Dict[str, Any]]) -> List[str]:
    names = set()
    for obj in objects:
        names.update(object_travelers(obj))
    return sorted(names)
