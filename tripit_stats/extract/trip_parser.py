"""TripIt export → normalized Trip list."""

import logging
import uuid
from typing import Any, Dict, List, Optional

from tripit_stats.extract.classify import classify_object
from tripit_stats.extract.shape import as_dict, as_records, text
from tripit_stats.extract.travelers import normalize_name, trip_travelers
from tripit_stats.models import Flight, TimelineItem, Trip
from tripit_stats.normalize.country_resolver import resolve_country
from tripit_stats.normalize.date_parser import compose_instant, inclusive_days, parse_date
from tripit_stats.normalize.encoding import fix_encoding

logger = logging.getLogger(__name__)


def _fallback_id() -> str:
    # Not stable across re-parses of the same document
    return uuid.uuid4().hex[:12]


def _start_instant(item: TimelineItem):
    if item.start is None:
        return compose_instant(None)
    return compose_instant(item.start.date, item.start.time)


def parse_trip(raw_trip: Dict[str, Any]) -> Trip:
    """Build one Trip from a raw TripIt trip record."""
    trip = fix_encoding(raw_trip)
    data = as_dict(trip.get("TripData"))
    objects = as_records(trip.get("Objects"))

    timeline: List[TimelineItem] = []
    for i, obj in enumerate(objects):
        try:
            timeline.extend(classify_object(obj, data))
        except (AttributeError, TypeError, ValueError) as e:
            logger.warning("Skipping malformed object %d in trip %r: %s", i, data.get("id"), e)

    # Stable: items with the same instant keep source order
    timeline.sort(key=_start_instant)
    flights = [item for item in timeline if isinstance(item, Flight)]

    start_date = text(data.get("start_date")) or None
    end_date = text(data.get("end_date")) or None
    start = parse_date(start_date)

    address = as_dict(data.get("PrimaryLocationAddress"))
    location = text(data.get("primary_location"))

    return Trip(
        id=text(data.get("id")) or _fallback_id(),
        display_name=text(data.get("displayName")) or text(data.get("display_name")),
        location=location,
        start_date=start_date,
        end_date=end_date,
        image=text(data.get("image_url")),
        year=start.year if start else None,
        days=inclusive_days(start_date, end_date),
        country=resolve_country(address.get("country")) or resolve_country(location),
        travelers=trip_travelers(objects),
        flights=flights,
        timeline=timeline,
    )


def _trip_sort_key(trip: Trip):
    start = parse_date(trip.start_date)
    # Newest first, undated last
    return (start is None, -start.toordinal() if start else 0)


def parse_trips(document: Any) -> List[Trip]:
    """Parse every trip in a TripIt export. Newest trips first.

    Returns [] for anything without a Trips collection. Never raises on
    unexpected shapes; bad records are skipped.
    """
    if not isinstance(document, dict) or not document.get("Trips"):
        return []

    trips: List[Trip] = []
    for i, raw_trip in enumerate(as_records(document.get("Trips"))):
        try:
            trips.append(parse_trip(raw_trip))
        except (AttributeError, TypeError, ValueError) as e:
            logger.warning("Skipping malformed trip %d: %s", i, e)

    return sorted(trips, key=_trip_sort_key)


def all_travelers(trips: List[Trip]) -> List[str]:
    names = set()
    for trip in trips:
        names.update(trip.travelers)
    return sorted(names)


def filter_trips(trips: List[Trip], travelers: Optional[List[str]] = None) -> List[Trip]:
    """Keep trips that include at least one selected traveler. No selection keeps all.

    Selected names are matched the way trip travelers are stored, so "anna"
    matches "Anna".
    """
    wanted = {normalize_name(name) for name in travelers or ()} - {None}
    if not wanted:
        return list(trips)
    return [t for t in trips if wanted.intersection(t.travelers)]
