from datetime import date
from typing import Optional

from flighter.obs.logger import log_event
from flighter.parse.budget import extract_budget
from flighter.parse.route import extract_route
from flighter.types import ParsedQuery
from flighter.utils.dates import parse_date


def parse_query(text: str, today: Optional[date] = None) -> ParsedQuery:
    """Turn one chat message into structured search parameters.

    Never raises. An unresolved route shows up as empty codes and it is up
    to the caller to ask the user for more detail.
    """
    route = extract_route(text)
    parsed = ParsedQuery(
        origin_code=route.origin,
        destination_code=route.destination,
        departure_date=parse_date(text, today=today),
        max_price=extract_budget(text),
    )
    log_event(
        "query_parsed",
        text=text,
        origin=parsed.origin_code or None,
        destination=parsed.destination_code or None,
        departure_date=parsed.departure_date,
        max_price=parsed.max_price,
    )
    return parsed
