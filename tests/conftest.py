import pytest


def _segment(date, time="10:00:00", origin="FRA", destination="CDG", airline="Lufthansa",
             code="LH", number="1024", distance="1,234 mi", end_city=None):
    seg = {
        "StartDateTime": {"date": date, "time": time},
        "EndDateTime": {"date": date, "time": time},
        "start_airport_code": origin,
        "end_airport_code": destination,
        "marketing_airline": airline,
        "marketing_airline_code": code,
        "marketing_flight_number": number,
        "distance": distance,
        "duration": "1h 15m",
        "aircraft_display_name": "Airbus A320",
    }
    if end_city:
        seg["end_city_name"] = end_city
    return seg


def _trip(trip_id, start, end, objects=None, primary_location=None, address_country=None,
          display_name=None):
    data = {"start_date": start, "end_date": end}
    if trip_id is not None:
        data["id"] = trip_id
    if display_name is not None:
        data["display_name"] = display_name
    if primary_location is not None:
        data["primary_location"] = primary_location
    if address_country is not None:
        data["PrimaryLocationAddress"] = {"country": address_country}
    return {"TripData": data, "Objects": objects or []}


@pytest.fixture
def segment():
    return _segment


@pytest.fixture
def trip_record():
    return _trip


@pytest.fixture
def iata_table():
    return {"FRA": "DE", "CDG": "FR", "JFK": "US", "LHR": "GB", "NRT": "JP"}


@pytest.fixture
def sample_document():
    """One trip to Paris: two flight legs and a hotel in Germany."""
    return {
        "Trips": [
            _trip(
                "t-1", "2024-05-01", "2024-05-05",
                primary_location="Paris, France",
                display_name="Paris spring",
                objects=[
                    {
                        "display_name": "Flight",
                        "Traveler": [{"first_name": "ANNA"}, {"first_name": "bob"}],
                        "Segment": [
                            _segment("2024-05-05", "18:00:00", "CDG", "FRA", end_city="Frankfurt"),
                            _segment("2024-05-01", "08:00:00", "FRA", "CDG", end_city="Paris"),
                        ],
                    },
                    {
                        "display_name": "Hotel Adlon",
                        "room_type": "Double",
                        "Guest": {"first_name": "anna"},
                        "StartDateTime": {"date": "2024-05-01", "time": "15:00:00"},
                        "EndDateTime": {"date": "2024-05-03", "time": "11:00:00"},
                        "Address": {"country": "Germany"},
                    },
                ],
            ),
        ],
    }
