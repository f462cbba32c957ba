"""Place trips on the calendar relative to today: current, planned, past."""

from datetime import date
from typing import Dict, List, Optional

from tripit_stats.models import Trip
from tripit_stats.normalize.date_parser import parse_date


def categorize_trips(trips: List[Trip], today: Optional[date] = None) -> Dict[str, List[Trip]]:
    """Split trips into {"current", "planned", "past"}.

    Planned trips are soonest first, past trips most recent first. A trip with
    no usable start date is treated as past; a missing end date means a
    one-day trip.
    """
    today = today or date.today()
    current: List[Trip] = []
    planned: List[Trip] = []
    past: List[Trip] = []

    for trip in trips:
        start = parse_date(trip.start_date)
        if start is None:
            past.append(trip)
            continue
        end = parse_date(trip.end_date) or start

        if start <= today <= end:
            current.append(trip)
        elif start > today:
            planned.append(trip)
        else:
            past.append(trip)

    planned.sort(key=lambda t: parse_date(t.start_date))
    # Undated trips sink to the bottom of "past"
    past.sort(key=lambda t: (parse_date(t.start_date) is None,
                             -(parse_date(t.start_date) or date.min).toordinal()))

    return {"current": current, "planned": planned, "past": past}
