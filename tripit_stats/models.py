"""Data models for the TripIt statistics pipeline."""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Tuple


class ItemType(str, Enum):
    FLIGHT = "flight"
    FLIGHT_BOOKING = "flight_booking"
    LODGING = "lodging"
    CAR = "car"
    RAIL = "rail"
    ACTIVITY = "activity"
    OTHER = "other"


@dataclass
class Stamp:
    """A naive local date with an optional time, as TripIt writes StartDateTime."""
    date: Optional[str] = None  # "YYYY-MM-DD"
    time: Optional[str] = None  # "HH:MM:SS" or "HH:MM"


@dataclass
class TimelineItem:
    item_type: ItemType
    name: str = ""
    start: Optional[Stamp] = None
    end: Optional[Stamp] = None
    travelers: List[str] = field(default_factory=list)
    details: Dict[str, Any] = field(default_factory=dict)  # source object, kept as-is


@dataclass
class Flight(TimelineItem):
    airline: str = ""
    airline_code: str = ""
    flight_number: str = ""
    origin: str = ""  # IATA
    destination: str = ""  # IATA
    origin_city: str = ""
    destination_city: str = ""
    duration: str = ""
    distance: str = ""  # "1,234 mi", may be empty
    aircraft: str = ""


@dataclass
class Trip:
    id: str
    display_name: str = ""
    location: str = ""
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    image: str = ""
    year: Optional[int] = None
    days: int = 0
    country: Optional[str] = None  # ISO alpha-2
    travelers: List[str] = field(default_factory=list)
    flights: List[Flight] = field(default_factory=list)
    timeline: List[TimelineItem] = field(default_factory=list)


@dataclass
class MonthStats:
    trips: int = 0
    flights: int = 0
    days: int = 0
    distance: float = 0.0


@dataclass
class YearStats:
    trips: int = 0
    flights: int = 0
    days: int = 0
    distance: float = 0.0
    airlines: Dict[str, int] = field(default_factory=dict)
    airline_codes: Dict[str, str] = field(default_factory=dict)
    months: Dict[int, MonthStats] = field(default_factory=dict)


@dataclass
class Stats:
    total_trips: int = 0
    total_flights: int = 0
    total_distance_mi: float = 0.0
    total_days: int = 0
    countries_visited: FrozenSet[str] = frozenset()
    airlines: Dict[str, int] = field(default_factory=dict)
    airline_codes: Dict[str, str] = field(default_factory=dict)
    years: Dict[str, YearStats] = field(default_factory=dict)
    all_travelers: List[str] = field(default_factory=list)
    top_airlines: List[Tuple[str, int]] = field(default_factory=list)
    raw_data: Any = None  # source document, attached by the caller for re-export

    @property
    def unique_countries(self) -> List[str]:
        return sorted(self.countries_visited)

    @property
    def countries_count(self) -> int:
        return len(self.countries_visited)
