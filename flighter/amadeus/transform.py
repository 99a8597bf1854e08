from typing import Any, Dict, List, Optional
from datetime import datetime

from flighter.config import settings
from flighter.iata.lookup import airport_name
from flighter.obs.logger import log_event
from flighter.types import Flight
from flighter.utils.dates import duration_to_minutes, format_duration_minutes

# Only carriers we can name with certainty; anything else shows its code.
AIRLINE_NAMES: Dict[str, str] = {
    # US airlines
    "AA": "American Airlines", "DL": "Delta Air Lines", "UA": "United Airlines",
    "B6": "JetBlue Airways", "WN": "Southwest Airlines", "AS": "Alaska Airlines",
    "NK": "Spirit Airlines", "F9": "Frontier Airlines",

    # International airlines
    "AF": "Air France", "BA": "British Airways", "LH": "Lufthansa",
    "KL": "KLM", "VS": "Virgin Atlantic", "EK": "Emirates",
    "QR": "Qatar Airways", "SQ": "Singapore Airlines", "JL": "Japan Airlines",
    "NH": "ANA", "TK": "Turkish Airlines", "IB": "Iberia",
    "TP": "TAP Air Portugal", "AZ": "ITA Airways", "LX": "Swiss International",
    "OS": "Austrian Airlines", "SN": "Brussels Airlines", "SK": "SAS",
    "AY": "Finnair", "AC": "Air Canada", "CM": "Copa Airlines",
}


def airline_name(code: str) -> str:
    return AIRLINE_NAMES.get(code, code)


def _clock(iso: str) -> str:
    # '2025-07-28T14:05:00' -> '14:05'
    try:
        return datetime.fromisoformat(iso).strftime("%H:%M")
    except (TypeError, ValueError):
        return ""


def _flight_from_offer(offer: Dict[str, Any]) -> Flight:
    itin = offer["itineraries"][0]
    segments = itin["segments"]
    first, last = segments[0], segments[-1]
    carrier = first.get("carrierCode", "")
    dep_at = first["departure"]["at"]
    arr_at = last["arrival"]["at"]

    return Flight(
        id=str(offer.get("id", "")),
        price=float(offer["price"]["total"]),
        currency=offer["price"].get("currency", "USD"),
        duration=format_duration_minutes(duration_to_minutes(itin.get("duration", "PT0H0M"))),
        stops=len(segments) - 1,
        rating=settings.DEFAULT_FLIGHT_RATING,
        airline=airline_name(carrier),
        airline_code=carrier,
        flight_number=f"{carrier}{first.get('number', '')}",
        origin=first["departure"]["iataCode"],
        destination=last["arrival"]["iataCode"],
        origin_airport=airport_name(first["departure"]["iataCode"]),
        destination_airport=airport_name(last["arrival"]["iataCode"]),
        departure_time=_clock(dep_at),
        arrival_time=_clock(arr_at),
        departure_date=dep_at.split("T")[0],
        arrival_date=arr_at.split("T")[0],
        aircraft=(first.get("aircraft") or {}).get("code", "Unknown"),
        booking_token=str(offer.get("id", "")),
        is_real_data=True,
        segments=segments,
        original_offer=offer,
    )


def from_amadeus(json_obj: Dict[str, Any]) -> List[Flight]:
    """Reshape a Flight Offers Search response into display flights.

    Offers without a usable price are dropped so the ranker only ever sees
    clean records.
    """
    items: List[Flight] = []
    for offer in json_obj.get("data", []) or []:
        try:
            items.append(_flight_from_offer(offer))
        except (KeyError, IndexError, TypeError, ValueError) as e:
            log_event("offer_skipped", level="WARNING", offer_id=offer.get("id") if isinstance(offer, dict) else None,
                      error=f"{type(e).__name__}: {e}")
    return items


def filter_by_max_price(flights: List[Flight], max_price: Optional[int]) -> List[Flight]:
    if not max_price:
        return list(flights)
    return [f for f in flights if f.price <= max_price]


def airports_from_locations(json_obj: Dict[str, Any]) -> List[Dict[str, Any]]:
    airports = []
    for loc in json_obj.get("data", []) or []:
        address = loc.get("address") or {}
        airports.append({
            "iataCode": loc.get("iataCode"),
            "name": loc.get("name"),
            "city": address.get("cityName"),
            "country": address.get("countryName"),
        })
    return airports
