"""ISO alpha-2 → continent table, used to group visited countries for display."""

from typing import Dict, Iterable, List

CONTINENTS = [
    "Europe",
    "Asia",
    "North America",
    "South America",
    "Africa",
    "Oceania",
    "Antarctica",
]

_BY_CONTINENT = {
    "Europe": (
        "AD AL AT AX BA BE BG BY CH CY CZ DE DK EE ES FI FO FR GB GG GI GR HR HU "
        "IE IM IS IT JE LI LT LU LV MC MD ME MK MT NL NO PL PT RO RS RU SE SI SJ "
        "SK SM UA VA XK"
    ),
    "Asia": (
        "AE AF AM AZ BD BH BN BT CN GE HK ID IL IN IQ IR JO JP KG KH KP KR KW KZ "
        "LA LB LK MM MN MO MV MY NP OM PH PK PS QA SA SG SY TH TJ TL TM TR TW UZ "
        "VN YE"
    ),
    "North America": (
        "AG AI AW BB BL BM BQ BS BZ CA CR CU CW DM DO GD GL GP GT HN HT JM KN KY "
        "LC MF MQ MS MX NI PA PM PR SV SX TC TT US VC VG VI"
    ),
    "South America": "AR BO BR CL CO EC FK GF GY PE PY SR UY VE",
    "Africa": (
        "AO BF BI BJ BW CD CF CG CI CM CV DJ DZ EG EH ER ET GA GH GM GN GQ GW KE "
        "KM LR LS LY MA MG ML MR MU MW MZ NA NE NG RE RW SC SD SH SL SN SO SS ST "
        "SZ TD TG TN TZ UG YT ZA ZM ZW"
    ),
    "Oceania": (
        "AS AU CK FJ FM GU KI MH MP NC NF NR NU NZ PF PG PN PW SB TK TO TV UM VU "
        "WF WS"
    ),
    "Antarctica": "AQ BV GS HM TF",
}

ISO_TO_CONTINENT: Dict[str, str] = {
    iso: continent
    for continent, codes in _BY_CONTINENT.items()
    for iso in codes.split()
}


def continent_of(iso: str) -> str:
    return ISO_TO_CONTINENT.get((iso or "").upper(), "Unknown")


def group_by_continent(codes: Iterable[str]) -> Dict[str, List[str]]:
    """Bucket alpha-2 codes by continent, in CONTINENTS order; codes sorted.

    Codes missing from the table land under "Unknown" (only if any exist).
    """
    grouped: Dict[str, List[str]] = {c: [] for c in CONTINENTS}
    for iso in sorted(set(codes)):
        grouped.setdefault(continent_of(iso), []).append(iso)
    return grouped
