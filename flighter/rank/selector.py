from typing import List

from flighter.rank.preferences import analyze_preferences
from flighter.types import Flight, PreferenceWeights


def _relative_score(value: float, worst: float) -> float:
    """0-100, higher when ``value`` is further below the set's maximum."""
    if not worst:
        return 0.0
    return (worst - value) / worst * 100


def score_flight(flight: Flight, weights: PreferenceWeights,
                 max_price: float, max_duration: int, max_stops: int) -> float:
    price_score = _relative_score(flight.price, max_price)
    speed_score = _relative_score(flight.duration_minutes, max_duration)
    comfort_score = flight.rating * 20
    if flight.stops == 0 or max_stops == 0:
        convenience_score = 100.0
    else:
        convenience_score = _relative_score(flight.stops, max_stops)

    return (
        price_score * weights.price
        + speed_score * weights.speed
        + comfort_score * weights.comfort
        + convenience_score * weights.convenience
    )


def rank(flights: List[Flight], weights: PreferenceWeights) -> List[Flight]:
    """Order flights best-first for the given preference weights.

    Sub-scores are relative to this candidate set, so callers must pass a
    non-empty list. Equal scores keep their input order.
    """
    max_price = max(f.price for f in flights)
    max_duration = max(f.duration_minutes for f in flights)
    max_stops = max(f.stops for f in flights)

    scores = [score_flight(f, weights, max_price, max_duration, max_stops) for f in flights]
    order = sorted(range(len(flights)), key=lambda i: scores[i], reverse=True)
    return [flights[i] for i in order]


def rank_flights(flights: List[Flight], utterance: str) -> List[Flight]:
    return rank(flights, analyze_preferences(utterance))
