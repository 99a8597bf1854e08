from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional

from flighter.utils.dates import duration_to_minutes


class ParsedQuery(BaseModel):
    origin_code: str = ""           # IATA code or "" when unresolved
    destination_code: str = ""
    departure_date: str = Field(..., description="YYYY-MM-DD")
    max_price: Optional[int] = None

    @property
    def has_route(self) -> bool:
        return bool(self.origin_code and self.destination_code)


class PreferenceWeights(BaseModel):
    price: int = 0
    speed: int = 0
    comfort: int = 0
    convenience: int = 0


class RouteMatch(BaseModel):
    origin: str = ""                # resolved code or ""
    destination: str = ""
    origin_text: str = ""           # cleaned phrase the code came from
    destination_text: str = ""


class Flight(BaseModel):
    """One reshaped provider offer.

    Only price, duration, stops and rating feed the ranking; the rest is
    display payload carried through untouched.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str = ""
    price: float
    currency: str = "USD"
    duration: str = ""              # e.g. "5h 30m"
    stops: int = 0
    rating: float = 0.0
    airline: str = ""
    airline_code: str = Field("", alias="airlineCode")
    flight_number: str = Field("", alias="flightNumber")
    origin: str = ""
    destination: str = ""
    origin_airport: str = Field("", alias="originAirport")
    destination_airport: str = Field("", alias="destinationAirport")
    departure_time: str = Field("", alias="departureTime")
    arrival_time: str = Field("", alias="arrivalTime")
    departure_date: str = Field("", alias="departureDate")
    arrival_date: str = Field("", alias="arrivalDate")
    aircraft: str = "Unknown"
    booking_token: str = Field("", alias="bookingToken")
    is_real_data: bool = Field(True, alias="isRealData")
    segments: List[Dict[str, Any]] = Field(default_factory=list)
    original_offer: Optional[Dict[str, Any]] = Field(None, alias="originalOffer")

    @property
    def duration_minutes(self) -> int:
        return duration_to_minutes(self.duration)


class SearchContext(BaseModel):
    """What one chat message searched for, handed back to the caller with the results."""
    utterance: str
    origin_location_code: str
    destination_location_code: str
    departure_date: str
    adults: int = 1
    max_results: int = 20
    requested_budget: Optional[int] = None
    weights: PreferenceWeights = Field(default_factory=PreferenceWeights)


class ChatReply(BaseModel):
    reply: str
    flights: List[Flight] = Field(default_factory=list)
    search: Optional[SearchContext] = None


class FlightSearchRequest(BaseModel):
    """Body of POST /api/flights/search, field names as the browser sends them."""
    origin_location_code: Optional[str] = Field(None, alias="originLocationCode")
    destination_location_code: Optional[str] = Field(None, alias="destinationLocationCode")
    departure_date: Optional[str] = Field(None, alias="departureDate")
    return_date: Optional[str] = Field(None, alias="returnDate")
    adults: int = 1
    max: int = 20
    max_price: Optional[int] = Field(None, alias="maxPrice")

    @property
    def missing_required(self) -> bool:
        return not (self.origin_location_code and self.destination_location_code
                    and self.departure_date)


class ChatRequest(BaseModel):
    message: str = ""
