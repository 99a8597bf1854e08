from typing import List, Optional

from flighter.types import Flight


WELCOME = (
    "Welcome to Flighter, I turn plain-English requests into live flight searches.\n\n"
    "Try things like:\n"
    "• \"Find cheap flights from New York to London next Tuesday\"\n"
    "• \"Show me flights under $400 from Chicago to Miami\"\n"
    "• \"Boston to Paris July 28, nonstop\"\n\n"
    "I weigh price, speed, comfort and convenience from how you phrase it."
)

EXAMPLE_HINT = 'Try: "flights from Chicago to London under $400" or "New York to Paris July 28"'

MISSING_ROUTE = (
    "Please specify both origin and destination cities.\n\n"
    "Example: \"flights from Chicago to London\""
)


def money(amount: float) -> str:
    if float(amount).is_integer():
        return f"${int(amount)}"
    return f"${amount:.2f}"


def cheapest_price(flights: List[Flight]) -> float:
    return min(f.price for f in flights)


def format_unknown_city(unknown: List[str]) -> str:
    names = " or ".join(f"\"{name}\"" for name in unknown)
    return (f"Sorry, I do not recognize {names}.\n\n"
            "Try major cities like: Chicago, New York, London, Paris, Tokyo")


def format_no_flights(origin: str, destination: str, departure_date: str) -> str:
    return (f"No flights available from {origin} to {destination} on {departure_date}.\n\n"
            "Try different dates or cities.")


def format_results(flights: List[Flight], origin: str, destination: str,
                   departure_date: str, max_price: Optional[int] = None) -> str:
    best = money(cheapest_price(flights))
    if max_price:
        return (f"Found {len(flights)} flights under {money(max_price)} from {origin} "
                f"to {destination}!\n\nBest deal: {best}")
    return (f"Found {len(flights)} flights from {origin} to {destination} on "
            f"{departure_date}\n\nBest deal: {best}")


def format_over_budget(flights: List[Flight], origin: str, destination: str,
                       max_price: int) -> str:
    return (f"No flights found under {money(max_price)} from {origin} to {destination}.\n\n"
            f"Cheapest available: {money(cheapest_price(flights))}. "
            f"Here are all {len(flights)} options:")


def format_error(message: str) -> str:
    return f"{message or 'Something went wrong'}\n\n{EXAMPLE_HINT}"
