from datetime import date

from tripit_stats.assemble.timeline import categorize_trips
from tripit_stats.models import Trip

TODAY = date(2024, 6, 15)


def _ids(trips):
    return [t.id for t in trips]


def test_categorize_trips():
    trips = [
        Trip(id="past-old", start_date="2023-01-01", end_date="2023-01-05"),
        Trip(id="now", start_date="2024-06-10", end_date="2024-06-20"),
        Trip(id="later", start_date="2025-01-01", end_date="2025-01-03"),
        Trip(id="soon", start_date="2024-07-01", end_date="2024-07-03"),
        Trip(id="undated"),
        Trip(id="past-recent", start_date="2024-05-01", end_date="2024-05-03"),
        Trip(id="today-only", start_date="2024-06-15"),
    ]
    groups = categorize_trips(trips, today=TODAY)
    assert _ids(groups["current"]) == ["now", "today-only"]
    assert _ids(groups["planned"]) == ["soon", "later"]
    assert _ids(groups["past"]) == ["past-recent", "past-old", "undated"]


def test_trip_ending_today_is_current():
    groups = categorize_trips([Trip(id="t", start_date="2024-06-01", end_date="2024-06-15")],
                              today=TODAY)
    assert _ids(groups["current"]) == ["t"]


def test_empty():
    assert categorize_trips([], today=TODAY) == {"current": [], "planned": [], "past": []}
