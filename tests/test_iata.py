import json
import logging

from tripit_stats.normalize.iata import airport_country, load_iata_table, table_from_mapping


def test_load_json_table(tmp_path):
    path = tmp_path / "iata.json"
    path.write_text(json.dumps({"cdg": "fr", "FRA": "DE", "BAD1": "DE", "LHR": "GBR"}),
                    encoding="utf-8")
    assert load_iata_table(path) == {"CDG": "FR", "FRA": "DE"}


def test_load_airports_csv(tmp_path):
    path = tmp_path / "airports.csv"
    path.write_text(
        "ident,type,name,iso_country,iata_code\n"
        "LFPG,large_airport,Charles de Gaulle,FR,CDG\n"
        "EDDF,large_airport,Frankfurt,DE,FRA\n"
        "00AK,small_airport,Lowell Field,US,\n",
        encoding="utf-8",
    )
    assert load_iata_table(path) == {"CDG": "FR", "FRA": "DE"}


def test_missing_table_is_empty(tmp_path, caplog):
    with caplog.at_level(logging.WARNING, logger="tripit_stats.normalize.iata"):
        assert load_iata_table(tmp_path / "nope.json") == {}
    assert "not found" in caplog.text


def test_non_object_json_is_empty(tmp_path):
    path = tmp_path / "iata.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    assert load_iata_table(path) == {}


def test_table_from_mapping_drops_bad_rows():
    assert table_from_mapping({"JFK": "US", "": "US", "NRT": None}) == {"JFK": "US"}


def test_airport_country():
    table = {"JFK": "us", "XXX": "ZZZ", "NUL": ""}
    assert airport_country("JFK", table) == "US"
    assert airport_country(" jfk ", table) == "US"
    assert airport_country("XXX", table) is None
    assert airport_country("NUL", table) is None
    assert airport_country("AMS", table) is None
    assert airport_country(None, table) is None
    assert airport_country(123, table) is None
