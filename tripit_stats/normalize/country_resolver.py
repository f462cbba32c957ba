"""Resolve free-text country names, ISO3 codes and "City, CC" strings to ISO alpha-2.

Best effort, not a gazetteer: when names overlap, whichever alias comes first in
_ALIASES wins the substring scan.
"""

import logging
import re
from typing import Any, Optional

logger = logging.getLogger(__name__)

# Maps lower-cased names / native names → ISO alpha-2.
# Order matters for the substring scan in resolve_country().
_ALIASES = {
    # Europe
    "france": "FR",
    "frans": "FR",
    "united kingdom": "GB",
    "uk": "GB",
    "great britain": "GB",
    "scotland": "GB",
    "northern ireland": "GB",
    "united states": "US",
    "united states of america": "US",
    "usa": "US",
    "germany": "DE",
    "deutschland": "DE",
    "spain": "ES",
    "españa": "ES",
    "italy": "IT",
    "italia": "IT",
    "brazil": "BR",
    "brasil": "BR",
    "mexico": "MX",
    "méxico": "MX",
    "canada": "CA",
    "australia": "AU",
    "china": "CN",
    "japan": "JP",
    "india": "IN",
    "netherlands": "NL",
    "nederland": "NL",
    "holland": "NL",
    "switzerland": "CH",
    "schweiz": "CH",
    "suisse": "CH",
    "svizzera": "CH",
    "belgium": "BE",
    "belgië": "BE",
    "belgique": "BE",
    "portugal": "PT",
    "austria": "AT",
    "österreich": "AT",
    "sweden": "SE",
    "sverige": "SE",
    "norway": "NO",
    "norge": "NO",
    "denmark": "DK",
    "danmark": "DK",
    "finland": "FI",
    "suomi": "FI",
    "ireland": "IE",
    "éire": "IE",
    "iceland": "IS",
    "ísland": "IS",
    "luxembourg": "LU",
    "monaco": "MC",
    "malta": "MT",
    "croatia": "HR",
    "hrvatska": "HR",
    "slovenia": "SI",
    "slovenija": "SI",
    "slovakia": "SK",
    "romania": "RO",
    "bulgaria": "BG",
    "serbia": "RS",
    "estonia": "EE",
    "latvia": "LV",
    "lithuania": "LT",
    "ukraine": "UA",
    "cyprus": "CY",
    # Americas
    "argentina": "AR",
    "chile": "CL",
    "colombia": "CO",
    "peru": "PE",
    "perú": "PE",
    "ecuador": "EC",
    "uruguay": "UY",
    "costa rica": "CR",
    "panama": "PA",
    "panamá": "PA",
    "guatemala": "GT",
    "belize": "BZ",
    "cuba": "CU",
    "dominican republic": "DO",
    "puerto rico": "PR",
    "jamaica": "JM",
    "bahamas": "BS",
    # Rest of the world
    "russia": "RU",
    "south africa": "ZA",
    "new zealand": "NZ",
    "singapore": "SG",
    "thailand": "TH",
    "vietnam": "VN",
    "viet nam": "VN",
    "indonesia": "ID",
    "malaysia": "MY",
    "philippines": "PH",
    "south korea": "KR",
    "taiwan": "TW",
    "hong kong": "HK",
    "united arab emirates": "AE",
    "uae": "AE",
    "qatar": "QA",
    "saudi arabia": "SA",
    "turkey": "TR",
    "türkiye": "TR",
    "greece": "GR",
    "hellas": "GR",
    "poland": "PL",
    "polska": "PL",
    "czech republic": "CZ",
    "czechia": "CZ",
    "hungary": "HU",
    "magyarország": "HU",
    "israel": "IL",
    "egypt": "EG",
    "morocco": "MA",
    "maroc": "MA",
    "tunisia": "TN",
    "kenya": "KE",
    "tanzania": "TZ",
}

# ISO3 → ISO2. Only matched against the whole string: many are everyday
# words ("are", "can", "pol").
_ISO3 = {
    "fra": "FR",
    "nor": "NO",
    "gbr": "GB",
    "deu": "DE",
    "esp": "ES",
    "ita": "IT",
    "can": "CA",
    "aus": "AU",
    "jpn": "JP",
    "chn": "CN",
    "ind": "IN",
    "nld": "NL",
    "che": "CH",
    "bel": "BE",
    "prt": "PT",
    "aut": "AT",
    "swe": "SE",
    "dnk": "DK",
    "fin": "FI",
    "irl": "IE",
    "tha": "TH",
    "tur": "TR",
    "bra": "BR",
    "mex": "MX",
    "arg": "AR",
    "grc": "GR",
    "pol": "PL",
    "cze": "CZ",
    "hun": "HU",
    "isl": "IS",
    "hrv": "HR",
    "nzl": "NZ",
    "zaf": "ZA",
    "are": "AE",
    "sgp": "SG",
    "kor": "KR",
}

_ISO2_RE = re.compile(r"[a-z]{2}")
# "Paris, FR" / "London GB"
_TRAILING_ISO2_RE = re.compile(r"[\s,]([a-z]{2})$")
# Whole-word occurrence: no letter (any script) directly before or after
_WORD_PATTERNS = [
    (re.compile(r"(?<![^\W\d_])" + re.escape(name) + r"(?![^\W\d_])"), iso)
    for name, iso in _ALIASES.items()
]


def resolve_country(raw: Any) -> Optional[str]:
    """Normalize a raw country/location string to an ISO alpha-2 code.

    Tries in order:
    1. Bare 2-letter code
    2. Exact alias match (names, native names) or ISO3 code
    3. Trailing ", CC" / " CC" suffix
    4. Alias appearing as a whole word anywhere in the string
    Returns None when nothing matches.
    """
    if not raw or not isinstance(raw, str):
        return None

    cleaned = raw.strip().lower()

    # "The Netherlands" → "netherlands"
    if cleaned.startswith("the "):
        cleaned = cleaned[4:]

    # 1. Already an alpha-2 code
    if _ISO2_RE.fullmatch(cleaned):
        return cleaned.upper()

    # 2. Direct alias or ISO3 code
    if cleaned in _ALIASES:
        return _ALIASES[cleaned]
    if cleaned in _ISO3:
        return _ISO3[cleaned]

    # 3. Country code at the end
    m = _TRAILING_ISO2_RE.search(cleaned)
    if m:
        return m.group(1).upper()

    # 4. Known name somewhere inside: "Oslo, Norway", "France - Paris"
    for pattern, iso in _WORD_PATTERNS:
        if pattern.search(cleaned):
            return iso

    logger.debug("No country for %r", raw)
    return None
