import re
from typing import List, Optional, Tuple

from flighter.iata.lookup import lookup
from flighter.types import RouteMatch


_PLACE = r"[a-z\s,.'’-]"
# Words that end a destination phrase: budget words, prepositions, prices, digits, dates.
_STOP = r"(?:for|under|less|below|max|on|in|today|tomorrow|next|this|\$|\d|july|june|may|april|march|february|january|aug|sep|oct|nov|dec)"

# Most specific first. A pattern only wins if both cleaned phrases are usable.
ROUTE_PATTERNS: List[re.Pattern] = [
    re.compile(rf"flights?\s+from\s+({_PLACE}+?)\s+to\s+({_PLACE}+?)(?:\s+{_STOP})"),
    re.compile(rf"from\s+({_PLACE}+?)\s+to\s+({_PLACE}+?)(?:\s+{_STOP})"),
    re.compile(rf"^({_PLACE}+?)\s+to\s+({_PLACE}+?)(?:\s+{_STOP})"),
    re.compile(rf"flights?\s+from\s+({_PLACE}{{2,}})\s+to\s+({_PLACE}{{2,}})"),
    re.compile(rf"from\s+({_PLACE}{{2,}})\s+to\s+({_PLACE}{{2,}})"),
    re.compile(rf"^({_PLACE}{{2,}})\s+to\s+({_PLACE}{{2,}})"),
]

STOP_WORDS = re.compile(
    r"\b(?:flights?|fly|get|go|travel|need|want|show|find|search|cheap|tickets?)\b"
)
TRAILING_PUNCT = re.compile(r"[,.'’-]+$")

MIN_PHRASE_LEN = 2


def clean_place(phrase: str) -> str:
    cleaned = STOP_WORDS.sub("", phrase).strip()
    cleaned = TRAILING_PUNCT.sub("", cleaned).strip()
    # Stop-word removal can leave double spaces inside multi-word cities
    return re.sub(r"\s+", " ", cleaned)


def _match_route(rx: re.Pattern, lower: str) -> Optional[Tuple[str, str]]:
    m = rx.search(lower)
    if not m:
        return None
    origin = clean_place(m.group(1))
    destination = clean_place(m.group(2))
    if len(origin) < MIN_PHRASE_LEN or len(destination) < MIN_PHRASE_LEN:
        return None
    return origin, destination


def extract_route(text: str) -> RouteMatch:
    """Find origin and destination in an utterance and resolve them to codes.

    Cities missing from the lexicon come back as "" with the cleaned phrase
    kept in ``origin_text``/``destination_text`` for the caller's message.
    """
    lower = (text or "").lower()
    for rx in ROUTE_PATTERNS:
        found = _match_route(rx, lower)
        if found is None:
            continue
        origin, destination = found
        return RouteMatch(
            origin=lookup(origin),
            destination=lookup(destination),
            origin_text=origin,
            destination_text=destination,
        )
    return RouteMatch()
