"""Classify TripIt objects into timeline items.

Rules are evaluated top to bottom and the first matching predicate wins; an
object that matches nothing becomes an OTHER item. Flight objects may expand to
several items (one per segment).
"""

from typing import Any, Callable, Dict, List, Optional, Tuple

from tripit_stats.config import CAR_RENTAL_KEYWORDS, CAR_RENTAL_VENDORS
from tripit_stats.extract.shape import as_dict, as_list, text
from tripit_stats.extract.travelers import object_travelers
from tripit_stats.models import Flight, ItemType, Stamp, TimelineItem

Predicate = Callable[[Dict[str, Any]], bool]
Builder = Callable[[Dict[str, Any], Dict[str, Any]], List[TimelineItem]]


def stamp_from_raw(raw: Any) -> Optional[Stamp]:
    """{"date": ..., "time": ...} → Stamp; None when there is no date block."""
    if not isinstance(raw, dict):
        return None
    return Stamp(date=text(raw.get("date")) or None, time=text(raw.get("time")) or None)


def _has_start(obj: Dict[str, Any]) -> bool:
    stamp = stamp_from_raw(obj.get("StartDateTime"))
    return bool(stamp and stamp.date)


def _name(obj: Dict[str, Any]) -> str:
    return text(obj.get("display_name")).lower()


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------

def _has_segment_block(obj: Dict[str, Any]) -> bool:
    seg = obj.get("Segment")
    return isinstance(seg, (dict, list)) and len(seg) > 0


def _is_flight_without_segments(obj: Dict[str, Any]) -> bool:
    return text(obj.get("display_name")) == "Flight"


def _is_lodging(obj: Dict[str, Any]) -> bool:
    return bool(obj.get("room_type")) or "hotel" in _name(obj)


def _is_car(obj: Dict[str, Any]) -> bool:
    name = _name(obj)
    supplier = text(obj.get("supplier_name")).lower()
    return (
        any(k in name for k in CAR_RENTAL_KEYWORDS)
        or any(v in supplier for v in CAR_RENTAL_VENDORS)
    )


def _is_rail(obj: Dict[str, Any]) -> bool:
    name = _name(obj)
    return "train" in name or "rail" in name


def _is_named(obj: Dict[str, Any]) -> bool:
    return bool(_name(obj))


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

def _generic(item_type: ItemType) -> Builder:
    def build(obj: Dict[str, Any], trip_data: Dict[str, Any]) -> List[TimelineItem]:
        if not _has_start(obj):
            return []
        return [TimelineItem(
            item_type=item_type,
            name=text(obj.get("display_name")) or item_type.value,
            start=stamp_from_raw(obj.get("StartDateTime")),
            end=stamp_from_raw(obj.get("EndDateTime")),
            travelers=object_travelers(obj),
            details=dict(obj),
        )]
    return build


def flight_from_segment(seg: Dict[str, Any], travelers: List[str]) -> Flight:
    airline_code = text(seg.get("marketing_airline_code"))
    number = text(seg.get("marketing_flight_number"))
    dest_label = text(seg.get("end_city_name")) or text(seg.get("end_airport_code")) or "Unknown"
    return Flight(
        item_type=ItemType.FLIGHT,
        name=f"Flight to {dest_label}",
        start=stamp_from_raw(seg.get("StartDateTime")),
        end=stamp_from_raw(seg.get("EndDateTime")),
        travelers=list(travelers),
        details=dict(seg),
        airline=text(seg.get("marketing_airline")),
        airline_code=airline_code,
        flight_number=f"{airline_code} {number}" if number else "Unknown Flight",
        origin=text(seg.get("start_airport_code")),
        destination=text(seg.get("end_airport_code")),
        origin_city=text(seg.get("start_city_name")),
        destination_city=text(seg.get("end_city_name")),
        duration=text(seg.get("duration")),
        distance=text(seg.get("distance")),
        aircraft=text(seg.get("aircraft_display_name")),
    )


def _build_from_segments(obj: Dict[str, Any], trip_data: Dict[str, Any]) -> List[TimelineItem]:
    segments = [s for s in as_list(obj.get("Segment")) if isinstance(s, dict) and s]
    if not segments:
        # Segment block holds only empty entries: keep it as a plain booking
        return _generic(ItemType.FLIGHT_BOOKING)(obj, trip_data)
    travelers = object_travelers(obj)
    return [flight_from_segment(seg, travelers) for seg in segments]


def _build_unavailable_flight(obj: Dict[str, Any], trip_data: Dict[str, Any]) -> List[TimelineItem]:
    flight_date = text(trip_data.get("start_date")) or text(obj.get("booking_date")) or None
    stamp = Stamp(date=flight_date) if flight_date else None
    return [Flight(
        item_type=ItemType.FLIGHT,
        name="Flight (Details Unavailable)",
        start=stamp,
        end=Stamp(date=flight_date) if flight_date else None,
        travelers=object_travelers(obj),
        details=dict(obj),
        airline=text(obj.get("booking_site_name")) or "Unknown Airline",
        flight_number="Unknown",
        origin="Unknown",
        destination="Unknown",
        duration="N/A",
    )]


RULES: List[Tuple[str, Predicate, Builder]] = [
    ("segments", _has_segment_block, _build_from_segments),
    ("flight_without_segments", _is_flight_without_segments, _build_unavailable_flight),
    ("lodging", _is_lodging, _generic(ItemType.LODGING)),
    ("car", _is_car, _generic(ItemType.CAR)),
    ("rail", _is_rail, _generic(ItemType.RAIL)),
    ("activity", _is_named, _generic(ItemType.ACTIVITY)),
]
DEFAULT_BUILDER: Builder = _generic(ItemType.OTHER)


def match_rule(obj: Dict[str, Any]) -> str:
    """Name of the first rule that claims obj ("other" if none)."""
    for name, predicate, _ in RULES:
        if predicate(obj):
            return name
    return "other"


def classify_object(obj: Dict[str, Any], trip_data: Optional[Dict[str, Any]] = None) -> List[TimelineItem]:
    """Turn one TripIt object into zero or more timeline items."""
    trip_data = as_dict(trip_data)
    for _, predicate, builder in RULES:
        if predicate(obj):
            return builder(obj, trip_data)
    return DEFAULT_BUILDER(obj, trip_data)
