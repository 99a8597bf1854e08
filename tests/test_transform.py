from conftest import make_offer

from flighter.amadeus.transform import (
    airline_name, airports_from_locations, filter_by_max_price, from_amadeus,
)
from flighter.config import settings


def test_reshapes_offer_into_flight():
    offer = make_offer(7, "189.50", duration="PT5H30M", stops=1, carrier="AA")
    flights = from_amadeus({"data": [offer]})

    assert len(flights) == 1
    f = flights[0]
    assert f.id == "7"
    assert f.price == 189.5
    assert f.currency == "USD"
    assert f.duration == "5h 30m"
    assert f.duration_minutes == 330
    assert f.stops == 1
    assert f.airline == "American Airlines"
    assert f.flight_number == "AA100"
    assert f.origin == "ORD"
    assert f.destination == "LHR"
    assert f.origin_airport == "Chicago O'Hare"
    assert f.destination_airport == "London Heathrow"
    assert f.departure_time == "08:15"
    assert f.arrival_time == "10:45"
    assert f.departure_date == "2025-07-28"
    assert f.aircraft == "738"
    assert f.rating == settings.DEFAULT_FLIGHT_RATING
    assert f.original_offer == offer


def test_serialises_with_browser_field_names():
    f = from_amadeus({"data": [make_offer(1, 300)]})[0]
    dumped = f.model_dump(by_alias=True)
    assert dumped["flightNumber"] == "AA100"
    assert dumped["isRealData"] is True
    assert "originAirport" in dumped


def test_malformed_offers_are_dropped():
    good = make_offer(1, 300)
    no_price = make_offer(2, 300)
    del no_price["price"]
    bad_price = make_offer(3, "n/a")
    flights = from_amadeus({"data": [good, no_price, bad_price]})
    assert [f.id for f in flights] == ["1"]


def test_empty_payloads():
    assert from_amadeus({}) == []
    assert from_amadeus({"data": None}) == []


def test_unknown_airline_keeps_code():
    assert airline_name("ZZ") == "ZZ"


def test_filter_by_max_price_is_inclusive():
    flights = from_amadeus({"data": [make_offer(1, 300), make_offer(2, 400), make_offer(3, 401)]})
    assert [f.id for f in filter_by_max_price(flights, 400)] == ["1", "2"]
    assert len(filter_by_max_price(flights, None)) == 3


def test_airports_from_locations():
    airports = airports_from_locations({"data": [{
        "iataCode": "LHR",
        "name": "HEATHROW",
        "address": {"cityName": "LONDON", "countryName": "UNITED KINGDOM"},
    }]})
    assert airports == [{"iataCode": "LHR", "name": "HEATHROW",
                         "city": "LONDON", "country": "UNITED KINGDOM"}]
