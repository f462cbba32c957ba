"""Fold parsed trips into aggregate travel statistics."""

import logging
import math
import re
from collections import defaultdict
from datetime import date
from typing import Any, Dict, Iterable, Mapping, Optional, Set, Tuple

from tripit_stats.config import TOP_AIRLINES_LIMIT
from tripit_stats.extract.shape import as_dict
from tripit_stats.models import Flight, ItemType, MonthStats, Stats, Trip, YearStats
from tripit_stats.normalize.country_resolver import resolve_country
from tripit_stats.normalize.date_parser import each_day, parse_date
from tripit_stats.normalize.iata import airport_country

logger = logging.getLogger(__name__)

UNKNOWN_YEAR = "Unknown"

_NUMBER_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_ISO2_RE = re.compile(r"^[A-Z]{2}$")


def parse_distance(raw: Any) -> float:
    """Numeric prefix of a distance string: "1,234 mi" → 1234.0; junk → 0.0."""
    if isinstance(raw, bool):
        return 0.0
    if isinstance(raw, (int, float)):
        return float(raw) if math.isfinite(raw) else 0.0
    if not isinstance(raw, str):
        return 0.0
    tokens = raw.replace(",", "").split()
    if not tokens:
        return 0.0
    m = _NUMBER_RE.match(tokens[0])
    return float(m.group(0)) if m else 0.0


class _Tally:
    """Accumulators for one calculate_stats() call. Never outlives it."""

    def __init__(self, iata_to_country: Mapping[str, str]):
        self.iata = iata_to_country
        self.total_trips = 0
        self.total_flights = 0
        self.distance = 0.0
        self.countries: Set[str] = set()
        self.travelers: Set[str] = set()
        self.airlines: Dict[str, int] = {}
        self.airline_codes: Dict[str, str] = {}
        self.years: Dict[str, YearStats] = {}
        self.all_days: Set[date] = set()
        self.year_days: Dict[str, Set[date]] = defaultdict(set)
        self.month_days: Dict[Tuple[str, int], Set[date]] = defaultdict(set)

    # -- helpers ----------------------------------------------------------

    def _year(self, key: str) -> YearStats:
        if key not in self.years:
            self.years[key] = YearStats()
        return self.years[key]

    def _month(self, year_key: str, month: int) -> MonthStats:
        months = self._year(year_key).months
        if month not in months:
            months[month] = MonthStats()
        return months[month]

    def _add_country(self, code: Optional[str]):
        if code and _ISO2_RE.match(code.upper()):
            self.countries.add(code.upper())

    # -- folding ----------------------------------------------------------

    def add_trip(self, trip: Trip):
        self.total_trips += 1
        self.travelers.update(trip.travelers)

        self._add_country(trip.country)
        for item in trip.timeline:
            if item.item_type == ItemType.LODGING:
                address = as_dict(item.details.get("Address"))
                self._add_country(resolve_country(address.get("country")))

        self._add_days(trip)

        if trip.year is not None:
            year_key = str(trip.year)
            self._year(year_key).trips += 1
            start = parse_date(trip.start_date)
            if start:
                self._month(year_key, start.month).trips += 1

        for flight in trip.flights:
            self._add_flight(flight, trip)

    def _add_days(self, trip: Trip):
        start = parse_date(trip.start_date)
        end = parse_date(trip.end_date)
        if start is None or end is None:
            return
        try:
            days = each_day(start, end)
        except ValueError as e:
            logger.warning("Skipping days for trip %r: %s", trip.display_name, e)
            return
        for d in days:
            self.all_days.add(d)
            self.year_days[str(d.year)].add(d)
            self.month_days[(str(d.year), d.month)].add(d)

    def _add_flight(self, flight: Flight, trip: Trip):
        self.total_flights += 1

        self._add_country(airport_country(flight.origin, self.iata))
        self._add_country(airport_country(flight.destination, self.iata))

        # Bucket by the flight's own date: trips can straddle a year/month boundary
        flown = parse_date(flight.start.date) if flight.start else None
        if flown:
            year_key = str(flown.year)
        elif trip.year is not None:
            year_key = str(trip.year)
        else:
            year_key = UNKNOWN_YEAR
        year = self._year(year_key)
        month = self._month(year_key, flown.month) if flown else None

        year.flights += 1
        if month:
            month.flights += 1

        dist = parse_distance(flight.distance)
        self.distance += dist
        year.distance += dist
        if month:
            month.distance += dist

        airline = flight.airline or "Unknown"
        self.airlines[airline] = self.airlines.get(airline, 0) + 1
        year.airlines[airline] = year.airlines.get(airline, 0) + 1
        if flight.airline_code:
            self.airline_codes.setdefault(airline, flight.airline_code)
            year.airline_codes.setdefault(airline, flight.airline_code)

    # -- result -----------------------------------------------------------

    def finish(self) -> Stats:
        for year_key, days in self.year_days.items():
            self._year(year_key).days = len(days)
        for (year_key, month), days in self.month_days.items():
            self._month(year_key, month).days = len(days)

        years = {}
        for key in sorted(self.years, key=lambda k: (k == UNKNOWN_YEAR, k)):
            ys = self.years[key]
            ys.months = dict(sorted(ys.months.items()))
            years[key] = ys

        top = sorted(self.airlines.items(), key=lambda kv: -kv[1])[:TOP_AIRLINES_LIMIT]

        return Stats(
            total_trips=self.total_trips,
            total_flights=self.total_flights,
            total_distance_mi=self.distance,
            total_days=len(self.all_days),
            countries_visited=frozenset(self.countries),
            airlines=dict(self.airlines),
            airline_codes=dict(self.airline_codes),
            years=years,
            all_travelers=sorted(self.travelers),
            top_airlines=top,
        )


def calculate_stats(trips: Iterable[Trip], iata_to_country: Optional[Mapping[str, str]] = None) -> Stats:
    """Aggregate trips into a fresh Stats.

    Day counts (total, per year, per month) come from sets of calendar dates,
    so overlapping trips never count a day twice.
    """
    tally = _Tally(iata_to_country or {})
    for trip in trips:
        tally.add_trip(trip)
    return tally.finish()
