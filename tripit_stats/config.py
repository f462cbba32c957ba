"""Configuration: .env loading, paths, constants."""

import os
from pathlib import Path
from dotenv import load_dotenv

# Project root = parent of tripit_stats/
PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(PROJECT_ROOT / ".env")

# --- Inputs ---
TRIPIT_EXPORT_PATH = os.getenv("TRIPIT_EXPORT_PATH", str(PROJECT_ROOT / "tripit_export.json"))
IATA_TABLE_PATH = os.getenv("IATA_TABLE_PATH", str(PROJECT_ROOT / "data" / "iata_to_country.json"))

# --- State / outputs ---
OVERRIDES_PATH = Path(os.getenv("OVERRIDES_PATH", str(PROJECT_ROOT / "manual_countries.json")))
OUTPUT_DIR = PROJECT_ROOT / "output"

# --- Travelers ---
# Comma-separated first names; empty means "everyone"
DEFAULT_TRAVELERS = [t.strip() for t in os.getenv("TRAVELERS", "").split(",") if t.strip()]

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING").upper()

# --- Export bundle ---
EXPORT_FORMAT_MARKER = "_tripitViewerExport"
EXPORT_VERSION = 1

# --- Stats ---
TOP_AIRLINES_LIMIT = 10

# --- Classification ---
CAR_RENTAL_KEYWORDS = ("car rental", "rental car")
CAR_RENTAL_VENDORS = (
    "sixt", "hertz", "avis", "europcar", "enterprise",
    "budget", "alamo", "national car", "thrifty", "dollar rent",
)
