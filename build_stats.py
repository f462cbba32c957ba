#!/usr/bin/env python3
"""CLI entry point for the TripIt statistics builder.

Usage:
    python build_stats.py --input path/to/tripit.json [--iata data/iata_to_country.json]

Options:
    --input PATH          TripIt JSON export, or a bundle written by --format bundle
    --iata PATH           IATA → country table (JSON mapping or airports.csv)
    --overrides PATH      JSON file holding manual country overrides
    --traveler NAME       Only count trips with this traveler (repeatable)
    --toggle-country CC   Flip a country's visited state and save the override
    --list-travelers      Print every traveler found in the export and exit
    --output-dir DIR      Directory for output files (default: output/)
    --format FMT          summary, csv, json, bundle, all (default: all)
    --dry-run             Show stats without writing files
"""

import argparse
import logging
import sys
from pathlib import Path

from tripit_stats.assemble.overrides import toggle_override
from tripit_stats.config import (
    DEFAULT_TRAVELERS,
    IATA_TABLE_PATH,
    LOG_LEVEL,
    OUTPUT_DIR,
    OVERRIDES_PATH,
    TRIPIT_EXPORT_PATH,
)
from tripit_stats.extract.trip_parser import all_travelers, parse_trips
from tripit_stats.output import format_summary, stats_to_json, trips_to_csv, write_bundle
from tripit_stats.pipeline import DocumentError, load_document, run_pipeline
from tripit_stats.store import OverrideStore


def main():
    parser = argparse.ArgumentParser(
        description="Build travel statistics from a TripIt JSON export.",
    )
    parser.add_argument("--input", default=TRIPIT_EXPORT_PATH, help="TripIt export or bundle")
    parser.add_argument("--iata", default=IATA_TABLE_PATH, help="IATA → country table")
    parser.add_argument("--overrides", default=str(OVERRIDES_PATH), help="Manual overrides file")
    parser.add_argument(
        "--traveler",
        action="append",
        dest="travelers",
        help="Filter to trips with this traveler (repeatable)",
    )
    parser.add_argument(
        "--toggle-country",
        action="append",
        default=[],
        metavar="CC",
        help="Toggle a country's visited state (ISO alpha-2, repeatable)",
    )
    parser.add_argument(
        "--list-travelers",
        action="store_true",
        help="List travelers in the export and exit",
    )
    parser.add_argument("--output-dir", default=str(OUTPUT_DIR), help="Output directory")
    parser.add_argument(
        "--format",
        choices=["summary", "csv", "json", "bundle", "all"],
        default="all",
        help="Output format (summary, csv, json, bundle, all)",
    )
    parser.add_argument("--dry-run", action="store_true", help="Show stats only, don't write files")
    parser.add_argument("--quiet", action="store_true", help="No progress output")
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.WARNING),
        format="[%(asctime)s] %(levelname)-8s %(name)s: %(message)s",
        datefmt="%m/%d/%y %H:%M:%S",
    )

    if args.list_travelers:
        try:
            raw_data, _ = load_document(Path(args.input))
        except DocumentError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        for name in all_travelers(parse_trips(raw_data)):
            print(name)
        return

    store = OverrideStore(Path(args.overrides))
    travelers = args.travelers if args.travelers is not None else DEFAULT_TRAVELERS

    try:
        trips, stats, automated, overrides = run_pipeline(
            input_path=args.input,
            iata_path=args.iata,
            overrides=store.overrides,
            travelers=travelers,
            verbose=not args.quiet,
        )
    except DocumentError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    # Bundled overrides become the stored ones
    if overrides != store.overrides:
        store.replace(overrides)

    if args.toggle_country:
        toggled = store.overrides
        try:
            for iso in args.toggle_country:
                toggled = toggle_override(toggled, iso, automated.countries_visited)
        except ValueError as e:
            parser.error(str(e))
        store.replace(toggled)
        for iso in args.toggle_country:
            print(f"Toggled {iso.strip().upper()}")
        trips, stats, automated, overrides = run_pipeline(
            input_path=args.input,
            iata_path=args.iata,
            overrides=store.overrides,
            travelers=travelers,
            verbose=False,
        )

    summary = format_summary(stats, automated, trips)

    if args.dry_run:
        print(summary)
        print(f"\nDry run complete. {len(trips)} trips, {stats.total_flights} flights.")
        return

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    if args.format in ("summary", "all"):
        summary_path = output_dir / "summary.txt"
        summary_path.write_text(summary, encoding="utf-8")
        print(f"\nSummary written to: {summary_path}")
        print(summary)

    if args.format in ("csv", "all"):
        csv_path = output_dir / "trips.csv"
        trips_to_csv(trips, csv_path)
        print(f"CSV written to: {csv_path}")

    if args.format in ("json", "all"):
        json_path = output_dir / "stats.json"
        stats_to_json(stats, json_path)
        print(f"JSON written to: {json_path}")

    if args.format in ("bundle", "all"):
        bundle_path = output_dir / "tripit_stats_export.json"
        write_bundle(stats, overrides, bundle_path)
        print(f"Bundle written to: {bundle_path}")


if __name__ == "__main__":
    main()
