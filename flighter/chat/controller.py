import asyncio
from datetime import date
from typing import Optional

import httpx

from flighter.amadeus.client import AmadeusClient
from flighter.amadeus.transform import filter_by_max_price, from_amadeus
from flighter.config import settings
from flighter.errors import (
    NoFlightsFound, NotConfigured, ProviderError, RouteNotUnderstood,
    SearchTimeout, UnknownCity,
)
from flighter.formatters import chat as fmt
from flighter.infrastructure.resilience import CircuitBreaker
from flighter.obs.logger import log_event
from flighter.obs.metrics import inc_counter
from flighter.parse.query_parser import parse_query
from flighter.parse.route import extract_route
from flighter.rank.preferences import analyze_preferences
from flighter.rank.selector import rank
from flighter.types import ChatReply, ParsedQuery, SearchContext

MIN_CODE_LEN = 3


class ChatController:
    """Turns one chat message into a ranked flight list and a reply.

    Holds no per-conversation state: everything a search used is returned in
    ``ChatReply.search`` for the caller to keep or drop.
    """

    def __init__(self, client: AmadeusClient, breaker: Optional[CircuitBreaker] = None,
                 timeout_seconds: Optional[float] = None):
        self.client = client
        self.breaker = breaker or CircuitBreaker(
            name="amadeus_api",
            failure_threshold=settings.BREAKER_FAILURE_THRESHOLD,
            recovery_timeout=settings.BREAKER_RECOVERY_SECONDS,
            expected_exception=httpx.HTTPError,
        )
        self.timeout_seconds = timeout_seconds or settings.SEARCH_TIMEOUT_SECONDS

    def validate(self, text: str, parsed: ParsedQuery) -> None:
        if parsed.has_route and len(parsed.origin_code) >= MIN_CODE_LEN \
                and len(parsed.destination_code) >= MIN_CODE_LEN:
            return
        route = extract_route(text)
        if not route.origin_text or not route.destination_text:
            raise RouteNotUnderstood(fmt.MISSING_ROUTE)
        sides = ((route.origin, route.origin_text), (route.destination, route.destination_text))
        unknown = [phrase for code, phrase in sides if len(code) < MIN_CODE_LEN]
        raise UnknownCity(fmt.format_unknown_city(unknown))

    async def call_provider(self, *args) -> dict:
        """Run ``client.search_flights`` off the loop, behind the breaker and the deadline.

        Every provider failure leaves here as a FlighterError; an unreadable
        body (bad JSON, missing token field) counts the same as a failed request.
        """
        if not getattr(self.client, "configured", True):
            raise NotConfigured("Amadeus API credentials not configured. Please add "
                                "AMADEUS_CLIENT_ID and AMADEUS_CLIENT_SECRET to your .env file")
        call = asyncio.to_thread(self.breaker.call, self.client.search_flights, *args)
        try:
            return await asyncio.wait_for(call, timeout=self.timeout_seconds)
        except asyncio.TimeoutError:
            inc_counter("chat_search_timeouts_total")
            raise SearchTimeout("Search timed out. Please try again with a simpler query.")
        except httpx.HTTPError as e:
            raise ProviderError(f"Flight search failed: {type(e).__name__}") from e
        except (ValueError, KeyError, RuntimeError) as e:
            log_event("provider_bad_response", level="ERROR", error=f"{type(e).__name__}: {e}")
            raise ProviderError(f"Flight search failed: {type(e).__name__}") from e

    async def search(self, ctx: SearchContext) -> dict:
        return await self.call_provider(
            ctx.origin_location_code,
            ctx.destination_location_code,
            ctx.departure_date,
            None,
            ctx.adults,
            ctx.max_results,
            ctx.requested_budget,
        )

    async def handle_message(self, text: str, today: Optional[date] = None) -> ChatReply:
        parsed = parse_query(text, today=today)
        try:
            self.validate(text, parsed)
        except (RouteNotUnderstood, UnknownCity) as e:
            inc_counter("chat_rejected_total", {"code": e.code.value})
            log_event("chat_rejected", code=e.code.value, text=text)
            raise

        ctx = SearchContext(
            utterance=text,
            origin_location_code=parsed.origin_code,
            destination_location_code=parsed.destination_code,
            departure_date=parsed.departure_date,
            adults=settings.DEFAULT_ADULTS,
            max_results=settings.DEFAULT_MAX_RESULTS,
            requested_budget=parsed.max_price,
            weights=analyze_preferences(text),
        )
        log_event("chat_search", origin=ctx.origin_location_code,
                  destination=ctx.destination_location_code,
                  departure_date=ctx.departure_date, max_price=ctx.requested_budget,
                  weights=ctx.weights.model_dump())

        raw = await self.search(ctx)
        flights = from_amadeus(raw)
        if not flights:
            raise NoFlightsFound(fmt.format_no_flights(
                ctx.origin_location_code, ctx.destination_location_code, ctx.departure_date))

        within = filter_by_max_price(flights, ctx.requested_budget)
        if ctx.requested_budget and not within:
            reply = fmt.format_over_budget(flights, ctx.origin_location_code,
                                           ctx.destination_location_code, ctx.requested_budget)
            shown = flights
        else:
            reply = fmt.format_results(within, ctx.origin_location_code,
                                       ctx.destination_location_code, ctx.departure_date,
                                       ctx.requested_budget)
            shown = within

        inc_counter("chat_searches_total")
        return ChatReply(reply=reply, flights=rank(shown, ctx.weights), search=ctx)
