import pytest

from tripit_stats.normalize.country_resolver import resolve_country


@pytest.mark.parametrize("raw,expected", [
    ("Paris, FR", "FR"),
    ("The Netherlands", "NL"),
    ("XYZ999", None),
    ("fra", "FR"),
    ("de", "DE"),
    ("  gb  ", "GB"),
    ("Germany", "DE"),
    ("España", "ES"),
    ("London GB", "GB"),
    ("Oslo, Norway", "NO"),
    ("Norway (Europe)", "NO"),
    ("France - Paris", "FR"),
    ("München, Deutschland", "DE"),
    ("Zürich, Schweiz", "CH"),
])
def test_resolve_country(raw, expected):
    assert resolve_country(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "   ", 42, ["FR"], {"country": "FR"}])
def test_unusable_input_returns_none(raw):
    assert resolve_country(raw) is None


def test_substring_needs_word_boundaries():
    # "india" inside "indiana" is not a whole word
    assert resolve_country("Indianapolis, Indiana") is None


def test_substring_scan_uses_table_order():
    # Both names present: the one listed first in the alias table wins
    assert resolve_country("Between Germany and France") == "FR"


def test_result_is_always_two_upper_letters():
    samples = ["Paris, fr", "the uk", "Italia", "tur", "Kyoto Japan", "nowhere"]
    for s in samples:
        code = resolve_country(s)
        assert code is None or (len(code) == 2 and code.isupper() and code.isalpha())


@pytest.mark.parametrize("raw,expected", [
    ("are", "AE"),
    ("POL", "PL"),
    ("isl", "IS"),
    ("Where we are now", None),
    ("Pol Pot Museum", None),
    ("Isl of Skye", None),
    ("Can Tho", None),
])
def test_iso3_codes_only_match_whole_string(raw, expected):
    assert resolve_country(raw) == expected
