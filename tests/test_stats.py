import logging

import pytest

from tripit_stats.assemble.stats import UNKNOWN_YEAR, calculate_stats, parse_distance
from tripit_stats.extract.trip_parser import parse_trips


@pytest.mark.parametrize("raw,expected", [
    ("1,234 mi", 1234.0),
    ("612 mi", 612.0),
    ("98.5 km", 98.5),
    ("1234mi", 1234.0),
    ("", 0.0),
    ("N/A", 0.0),
    (None, 0.0),
    (450, 450.0),
    (float("nan"), 0.0),
])
def test_parse_distance(raw, expected):
    assert parse_distance(raw) == expected


def test_totals_for_sample(sample_document, iata_table):
    stats = calculate_stats(parse_trips(sample_document), iata_table)
    assert stats.total_trips == 1
    assert stats.total_flights == 2
    assert stats.total_distance_mi == 2468
    assert stats.total_days == 5
    # FR from the trip, DE from the hotel address and FRA
    assert stats.unique_countries == ["DE", "FR"]
    assert stats.countries_count == 2
    assert stats.airlines == {"Lufthansa": 2}
    assert stats.airline_codes == {"Lufthansa": "LH"}
    assert stats.all_travelers == ["Anna", "Bob"]
    assert stats.raw_data is None


def test_distance_contributions(trip_record, segment):
    doc = {"Trips": [trip_record("t", "2024-01-01", "2024-01-02", objects=[
        {"Segment": [
            segment("2024-01-01", distance="1,234 mi"),
            segment("2024-01-01", distance=""),
            segment("2024-01-02", distance="N/A"),
        ]},
    ])]}
    stats = calculate_stats(parse_trips(doc))
    assert stats.total_flights == 3
    assert stats.total_distance_mi == 1234


def test_overlapping_trips_do_not_double_count_days(trip_record):
    doc = {"Trips": [
        trip_record("a", "2024-03-01", "2024-03-05"),
        trip_record("b", "2024-03-01", "2024-03-05"),
    ]}
    stats = calculate_stats(parse_trips(doc))
    assert stats.total_days == 5
    assert stats.years["2024"].days == 5
    assert stats.years["2024"].months[3].days == 5
    assert stats.years["2024"].trips == 2


def test_partially_overlapping_trips(trip_record):
    doc = {"Trips": [
        trip_record("a", "2024-03-01", "2024-03-05"),
        trip_record("b", "2024-03-04", "2024-03-10"),
    ]}
    assert calculate_stats(parse_trips(doc)).total_days == 10


def test_two_years_one_flight_each(trip_record, segment):
    doc = {"Trips": [
        trip_record("a", "2022-06-01", "2022-06-03", objects=[{"Segment": segment("2022-06-01")}]),
        trip_record("b", "2023-06-01", "2023-06-03", objects=[{"Segment": segment("2023-06-01")}]),
    ]}
    stats = calculate_stats(parse_trips(doc))
    assert set(stats.years) == {"2022", "2023"}
    assert stats.years["2022"].flights == 1
    assert stats.years["2023"].flights == 1
    assert stats.total_flights == 2


def test_flights_bucket_by_their_own_date(trip_record, segment):
    doc = {"Trips": [trip_record("nye", "2023-12-30", "2024-01-02", objects=[
        {"Segment": [segment("2023-12-30", distance="100 mi"),
                     segment("2024-01-02", distance="200 mi")]},
    ])]}
    stats = calculate_stats(parse_trips(doc))

    assert stats.years["2023"].trips == 1
    assert stats.years["2023"].months[12].trips == 1
    assert stats.years["2024"].trips == 0

    assert stats.years["2023"].flights == 1
    assert stats.years["2023"].months[12].distance == 100
    assert stats.years["2024"].flights == 1
    assert stats.years["2024"].months[1].flights == 1
    assert stats.years["2024"].distance == 200

    assert stats.years["2023"].days == 2
    assert stats.years["2024"].days == 2
    assert stats.years["2024"].months[1].days == 2
    assert stats.total_days == 4


def test_flight_without_date_falls_back_to_trip_year(trip_record):
    doc = {"Trips": [
        trip_record("a", "2021-05-01", "2021-05-02", objects=[
            {"display_name": "Flight", "Segment": {"start_airport_code": "JFK",
                                                   "marketing_airline": "Delta"}},
        ]),
        trip_record("b", None, None, objects=[
            {"display_name": "Flight", "Segment": {"start_airport_code": "LHR"}},
        ]),
    ]}
    stats = calculate_stats(parse_trips(doc))
    assert stats.years["2021"].flights == 1
    assert stats.years["2021"].months == {5: stats.years["2021"].months[5]}
    assert stats.years["2021"].months[5].flights == 0
    assert stats.years[UNKNOWN_YEAR].flights == 1
    assert list(stats.years)[-1] == UNKNOWN_YEAR
    assert stats.airlines == {"Delta": 1, "Unknown": 1}


def test_countries_from_all_sources_are_well_formed(trip_record, segment):
    doc = {"Trips": [trip_record("t", "2024-01-01", "2024-01-05", primary_location="Tokyo, Japan",
                                 objects=[
        {"Segment": segment("2024-01-01", origin="JFK", destination="NRT")},
        {"Segment": segment("2024-01-05", origin="NRT", destination="XXX")},
        {"display_name": "Hotel", "StartDateTime": {"date": "2024-01-01"},
         "Address": {"country": "Korea Republic"}},
        {"display_name": "Ryokan", "room_type": "Tatami", "StartDateTime": {"date": "2024-01-03"},
         "Address": {"country": "Italia"}},
    ])]}
    table = {"JFK": "us", "NRT": "JP", "XXX": "ZZZ"}
    stats = calculate_stats(parse_trips(doc), table)
    assert stats.unique_countries == ["IT", "JP", "US"]
    for code in stats.countries_visited:
        assert len(code) == 2 and code.isupper()


def test_invalid_interval_is_logged_and_skipped(trip_record, caplog):
    doc = {"Trips": [
        trip_record("bad", "2024-05-10", "2024-05-01"),
        trip_record("good", "2024-06-01", "2024-06-02"),
    ]}
    with caplog.at_level(logging.WARNING, logger="tripit_stats.assemble.stats"):
        stats = calculate_stats(parse_trips(doc))
    assert stats.total_days == 2
    assert stats.total_trips == 2
    assert "Invalid interval" in caplog.text


def test_airline_codes_first_seen_and_per_year(trip_record, segment):
    doc = {"Trips": [
        trip_record("a", "2020-01-01", "2020-01-02", objects=[{"Segment": [
            segment("2020-01-01", airline="KLM", code="KL"),
            segment("2020-01-02", airline="KLM", code="XX"),
        ]}]),
        trip_record("b", "2021-01-01", "2021-01-02", objects=[{"Segment": [
            segment("2021-01-01", airline="KLM", code="KL"),
            segment("2021-01-01", airline="SAS", code="SK"),
        ]}]),
    ]}
    stats = calculate_stats(parse_trips(doc))
    assert stats.airlines == {"KLM": 3, "SAS": 1}
    assert stats.airline_codes == {"KLM": "KL", "SAS": "SK"}
    assert stats.years["2020"].airlines == {"KLM": 2}
    assert stats.years["2021"].airlines == {"KLM": 1, "SAS": 1}
    assert stats.years["2021"].airline_codes == {"KLM": "KL", "SAS": "SK"}
    assert stats.top_airlines == [("KLM", 3), ("SAS", 1)]


def test_calculate_stats_is_idempotent(sample_document, iata_table):
    trips = parse_trips(sample_document)
    assert calculate_stats(trips, iata_table) == calculate_stats(trips, iata_table)


def test_empty_input():
    stats = calculate_stats([])
    assert stats.total_trips == 0
    assert stats.total_days == 0
    assert stats.years == {}
    assert stats.unique_countries == []
