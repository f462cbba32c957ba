"""Output formatters: CSV, JSON, export bundle, and a human-readable summary."""

import csv
import json
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from tripit_stats.assemble.overrides import country_status
from tripit_stats.assemble.timeline import categorize_trips
from tripit_stats.config import EXPORT_FORMAT_MARKER, EXPORT_VERSION
from tripit_stats.models import Stats, Trip
from tripit_stats.normalize.continents import group_by_continent

CSV_HEADERS = [
    "DisplayName", "StartDate", "EndDate", "Location", "Country",
    "Year", "Days", "FlightsCount", "Travelers",
]


def _cell(value) -> str:
    return "" if value is None else str(value)


# ---------------------------------------------------------------------------
# Human-readable summary
# ---------------------------------------------------------------------------

def format_summary(
    stats: Stats,
    automated: Optional[Stats] = None,
    trips: Optional[List[Trip]] = None,
    today: Optional[date] = None,
) -> str:
    """Produce a plain-text report of the stats."""
    lines = []
    lines.append("=" * 72)
    lines.append("  TRAVEL STATS")
    lines.append("=" * 72)
    lines.append("")
    lines.append(f"  Trips:      {stats.total_trips}")
    lines.append(f"  Flights:    {stats.total_flights}")
    lines.append(f"  Distance:   {stats.total_distance_mi:,.0f} mi")
    lines.append(f"  Days away:  {stats.total_days}")
    lines.append(f"  Countries:  {stats.countries_count}")
    if stats.all_travelers:
        lines.append(f"  Travelers:  {', '.join(stats.all_travelers)}")

    if trips:
        groups = categorize_trips(trips, today)
        for label, key in (("Current", "current"), ("Upcoming", "planned")):
            if not groups[key]:
                continue
            lines.append(f"\n--- {label} trips {'─' * (62 - len(label))}")
            for t in groups[key]:
                when = t.start_date if t.end_date in (None, t.start_date) else f"{t.start_date} → {t.end_date}"
                lines.append(f"  {when:<26}{t.display_name or t.location}")

    if stats.years:
        lines.append(f"\n--- By year {'─' * 60}")
        lines.append(f"  {'Year':<8}{'Trips':>7}{'Flights':>9}{'Days':>7}{'Miles':>12}")
        for year, ys in stats.years.items():
            lines.append(
                f"  {year:<8}{ys.trips:>7}{ys.flights:>9}{ys.days:>7}{ys.distance:>12,.0f}"
            )

    if stats.top_airlines:
        lines.append(f"\n--- Top airlines {'─' * 55}")
        for name, count in stats.top_airlines:
            code = stats.airline_codes.get(name, "")
            label = f"{name} ({code})" if code else name
            lines.append(f"  {count:>4}  {label}")

    if stats.countries_visited:
        auto = automated.countries_visited if automated else stats.countries_visited
        lines.append(f"\n--- Countries {'─' * 58}")
        for continent, codes in group_by_continent(stats.countries_visited).items():
            if not codes:
                continue
            marked = []
            for iso in codes:
                status = country_status(iso, auto, stats.countries_visited)
                marked.append(iso if status == "automated" else f"{iso}*")
            lines.append(f"  {continent}: {' '.join(marked)}")
        if automated is not None and automated.countries_visited != stats.countries_visited:
            lines.append("  (* added manually)")

    lines.append(f"\n{'=' * 72}")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# CSV output
# ---------------------------------------------------------------------------

def trips_to_csv(trips: List[Trip], path: Path):
    """Write one summary row per trip."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_HEADERS)
        for t in trips:
            writer.writerow([
                t.display_name, _cell(t.start_date), _cell(t.end_date),
                t.location, _cell(t.country), _cell(t.year), t.days,
                len(t.flights), ", ".join(t.travelers),
            ])


# ---------------------------------------------------------------------------
# JSON output
# ---------------------------------------------------------------------------

def stats_to_dict(stats: Stats) -> Dict[str, Any]:
    """JSON-ready view of the stats (raw source data excluded)."""
    return {
        "totalTrips": stats.total_trips,
        "totalFlights": stats.total_flights,
        "totalDistanceMi": stats.total_distance_mi,
        "totalDays": stats.total_days,
        "countriesCount": stats.countries_count,
        "uniqueCountries": stats.unique_countries,
        "airlines": dict(stats.airlines),
        "airlineCodes": dict(stats.airline_codes),
        "topAirlines": [[name, count] for name, count in stats.top_airlines],
        "allTravelers": list(stats.all_travelers),
        "years": {
            year: {
                "trips": ys.trips,
                "flights": ys.flights,
                "days": ys.days,
                "distance": ys.distance,
                "airlines": dict(ys.airlines),
                "airlineCodes": dict(ys.airline_codes),
                "months": {
                    str(month): {
                        "trips": ms.trips,
                        "flights": ms.flights,
                        "days": ms.days,
                        "distance": ms.distance,
                    }
                    for month, ms in ys.months.items()
                },
            }
            for year, ys in stats.years.items()
        },
    }


def stats_to_json(stats: Stats, path: Path):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(stats_to_dict(stats), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )


def build_bundle(raw_data: Any, overrides: Mapping[str, bool]) -> Dict[str, Any]:
    """Raw export + manual overrides, tagged so load_document() can tell it apart."""
    return {
        EXPORT_FORMAT_MARKER: True,
        "version": EXPORT_VERSION,
        "exportedAt": datetime.now(timezone.utc).isoformat(),
        "rawData": raw_data,
        "manualVisitedCountries": dict(overrides),
    }


def write_bundle(stats: Stats, overrides: Mapping[str, bool], path: Path):
    """Write the re-importable bundle, taking the raw document from stats.raw_data."""
    if stats.raw_data is None:
        raise ValueError("stats has no raw data attached; nothing to export")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(build_bundle(stats.raw_data, overrides), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
