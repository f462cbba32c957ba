"""Airport (IATA) → country lookup table."""

import csv
import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)

_IATA_RE = re.compile(r"^[A-Z]{3}$")
_ISO2_RE = re.compile(r"^[A-Z]{2}$")


def _clean_pair(code: Any, country: Any) -> Optional[tuple]:
    iata = str(code or "").strip().upper()
    iso = str(country or "").strip().upper()
    if not _IATA_RE.match(iata) or not _ISO2_RE.match(iso):
        return None
    return iata, iso


def table_from_mapping(raw: Mapping[str, Any]) -> Dict[str, str]:
    """Validate a {"CDG": "FR"} mapping; bad rows are dropped."""
    table: Dict[str, str] = {}
    dropped = 0
    for code, country in raw.items():
        pair = _clean_pair(code, country)
        if pair is None:
            dropped += 1
            continue
        table[pair[0]] = pair[1]
    if dropped:
        logger.debug("Dropped %d malformed IATA rows", dropped)
    return table


def load_iata_table(path: Path) -> Dict[str, str]:
    """Load IATA → ISO alpha-2 from a JSON mapping or an OurAirports airports.csv.

    A missing file yields an empty table; flights then add no countries.
    """
    path = Path(path)
    if not path.exists():
        logger.warning("IATA table not found: %s", path)
        return {}

    if path.suffix.lower() == ".csv":
        table: Dict[str, str] = {}
        with path.open("r", encoding="utf-8", newline="") as f:
            for row in csv.DictReader(f):
                pair = _clean_pair(row.get("iata_code"), row.get("iso_country"))
                if pair:
                    table[pair[0]] = pair[1]
        return table

    raw = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        logger.warning("IATA table %s is not a JSON object", path)
        return {}
    return table_from_mapping(raw)


def airport_country(code: Any, table: Mapping[str, str]) -> Optional[str]:
    """Country for an airport code, or None when unknown or malformed."""
    if not code or not isinstance(code, str):
        return None
    country = table.get(code.strip().upper())
    if not country or not isinstance(country, str):
        return None
    country = country.strip().upper()
    return country if _ISO2_RE.match(country) else None
