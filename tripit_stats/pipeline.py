"""Orchestrates the full pipeline: load → parse → filter → aggregate → reconcile."""

import dataclasses
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from tripit_stats.assemble.overrides import clean_overrides, reconcile
from tripit_stats.assemble.stats import calculate_stats
from tripit_stats.config import DEFAULT_TRAVELERS, EXPORT_FORMAT_MARKER, IATA_TABLE_PATH, TRIPIT_EXPORT_PATH
from tripit_stats.extract.trip_parser import filter_trips, parse_trips
from tripit_stats.models import Stats, Trip
from tripit_stats.normalize.iata import load_iata_table


class DocumentError(ValueError):
    """The input file as a whole could not be read as JSON."""


def unpack_document(data: Any) -> Tuple[Any, Dict[str, bool]]:
    """Split a loaded JSON value into (raw TripIt data, manual overrides).

    Bundles written by write_bundle() carry the export marker; anything else
    is a plain TripIt export with no overrides.
    """
    if isinstance(data, dict) and data.get(EXPORT_FORMAT_MARKER) and "rawData" in data:
        return data["rawData"], clean_overrides(data.get("manualVisitedCountries"))
    return data, {}


def load_document(path: Path) -> Tuple[Any, Dict[str, bool]]:
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DocumentError(f"{path} is not a valid JSON file: {e}") from e
    return unpack_document(data)


def compute(
    raw_data: Any,
    iata_to_country: Mapping[str, str],
    overrides: Optional[Mapping[str, bool]] = None,
    travelers: Optional[List[str]] = None,
) -> Tuple[List[Trip], Stats, Stats]:
    """Pure part of the pipeline. Returns (trips, final_stats, automated_stats).

    final_stats carries the overrides and the raw document (for re-export);
    automated_stats is what the trips alone say.
    """
    trips = filter_trips(parse_trips(raw_data), travelers)
    automated = calculate_stats(trips, iata_to_country)
    final = dataclasses.replace(reconcile(automated, overrides or {}), raw_data=raw_data)
    return trips, final, automated


def run_pipeline(
    input_path: Optional[str] = None,
    iata_path: Optional[str] = None,
    overrides: Optional[Mapping[str, bool]] = None,
    travelers: Optional[List[str]] = None,
    verbose: bool = True,
) -> Tuple[List[Trip], Stats, Stats, Dict[str, bool]]:
    """Run the full pipeline end to end.

    Args:
        input_path: TripIt export or a previously written bundle. Defaults to config.
        iata_path: IATA → country table (JSON or CSV). Defaults to config.
        overrides: Manual overrides; merged over any stored in a bundle.
        travelers: Keep only trips with these travelers. Defaults to config.
        verbose: Print progress to stderr.

    Returns:
        (trips, final_stats, automated_stats, overrides)
    """
    input_path = input_path or TRIPIT_EXPORT_PATH
    iata_path = iata_path or IATA_TABLE_PATH
    travelers = travelers if travelers is not None else DEFAULT_TRAVELERS

    def log(msg):
        if verbose:
            print(msg, file=sys.stderr)

    # Step 1: Load
    log(f"Loading export: {input_path}")
    raw_data, bundled = load_document(Path(input_path))
    merged = {**bundled, **clean_overrides(dict(overrides or {}))}
    if bundled:
        log(f"  Bundle with {len(bundled)} manual country overrides")

    iata = load_iata_table(Path(iata_path))
    log(f"  IATA table: {len(iata)} airports")

    # Step 2-4: Parse, filter, aggregate, reconcile
    trips, final, automated = compute(raw_data, iata, merged, travelers)
    if travelers:
        log(f"  Trips: {len(trips)} (travelers: {', '.join(travelers)})")
    else:
        log(f"  Trips: {len(trips)}")
    log(f"  Flights: {final.total_flights}, days: {final.total_days}")
    log(f"  Countries: {automated.countries_count} automated, {final.countries_count} after overrides")

    return trips, final, automated, merged
