import asyncio
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from dotenv import load_dotenv
import httpx

from flighter.config import settings
from flighter.amadeus.client import AmadeusClient
from flighter.amadeus.transform import airports_from_locations, filter_by_max_price, from_amadeus
from flighter.chat.controller import ChatController
from flighter.errors import FlighterError, InvalidRequest, NotConfigured, ProviderError
from flighter.formatters.chat import WELCOME, format_error
from flighter.obs.middleware import ObservabilityMiddleware
from flighter.obs.logger import log_event
from flighter.types import ChatReply, ChatRequest, FlightSearchRequest
from flighter.utils.dates import to_iso_date

load_dotenv()


@asynccontextmanager
async def lifespan(app: FastAPI):
    log_event("startup", env=settings.APP_ENV, amadeus_env=settings.AMADEUS_ENV,
              credentials=settings.has_amadeus_credentials)

    app.state.amadeus = AmadeusClient()
    app.state.chat = ChatController(app.state.amadeus)

    yield

    app.state.amadeus.close()
    log_event("shutdown")


app = FastAPI(
    title="Flighter",
    version="1.0.0",
    lifespan=lifespan
)


def _error_response(e: FlighterError, **extra) -> JSONResponse:
    return JSONResponse({**e.to_dict(), **extra}, status_code=e.status_code)


def _require_credentials() -> None:
    if not settings.has_amadeus_credentials:
        raise NotConfigured("Amadeus API credentials not configured. Please add "
                            "AMADEUS_CLIENT_ID and AMADEUS_CLIENT_SECRET to your .env file")


@app.get("/")
async def root():
    return {
        "service": "Flighter",
        "version": "1.0.0",
        "status": "running",
        "welcome": WELCOME,
    }


@app.get("/health")
async def health():
    return {"status": "healthy", "service": "flighter"}


@app.get("/metrics")
async def metrics(request: Request):
    from flighter.obs.metrics import get_metrics_snapshot
    snapshot = get_metrics_snapshot()
    chat = getattr(request.app.state, "chat", None)
    snapshot["circuit_breaker"] = chat.breaker.get_state() if chat else None
    return snapshot


@app.post("/api/chat")
async def chat(request: Request, body: ChatRequest):
    message = body.message.strip()
    if not message:
        return _error_response(InvalidRequest("Message is required"))

    try:
        reply = await request.app.state.chat.handle_message(message)
    except FlighterError as e:
        log_event("chat_error", level="WARNING", code=e.code.value, error=e.message)
        reply = ChatReply(reply=format_error(e.message))
        payload = reply.model_dump(by_alias=True)
        payload["error"] = e.to_dict()
        return payload
    return reply.model_dump(by_alias=True)


@app.post("/api/flights/search")
async def search_flights(request: Request, body: FlightSearchRequest):
    try:
        _require_credentials()
        if body.missing_required:
            raise InvalidRequest("Missing required parameters: originLocationCode, "
                                 "destinationLocationCode, departureDate")
        departure_date = to_iso_date(body.departure_date, tz=settings.TZ)
        if not departure_date:
            raise InvalidRequest(f"Unreadable departureDate: {body.departure_date}")
        return_date = to_iso_date(body.return_date, tz=settings.TZ) if body.return_date else None

        raw = await request.app.state.chat.call_provider(
            body.origin_location_code.upper(), body.destination_location_code.upper(),
            departure_date, return_date, body.adults, body.max, body.max_price,
        )
    except FlighterError as e:
        log_event("search_error", level="ERROR" if e.status_code >= 500 else "WARNING",
                  code=e.code.value, error=e.message)
        return _error_response(e, flights=[])

    flights = from_amadeus(raw)
    if not flights:
        return {"message": "No flights found for this route and date",
                "flights": [], "totalFound": 0, "filteredCount": 0}

    filtered = filter_by_max_price(flights, body.max_price)
    log_event("search_results", total=len(flights), filtered=len(filtered))
    return {
        "flights": [f.model_dump(by_alias=True) for f in filtered],
        "totalFound": len(flights),
        "filteredCount": len(filtered),
    }


@app.get("/api/airports/search")
async def search_airports(request: Request, keyword: str | None = None):
    try:
        if not keyword:
            raise InvalidRequest("Keyword is required")
        _require_credentials()
        try:
            raw = await asyncio.to_thread(request.app.state.amadeus.search_locations, keyword)
        except (httpx.HTTPError, ValueError, KeyError) as e:
            raise ProviderError(f"Failed to search airports: {type(e).__name__}") from e
    except FlighterError as e:
        log_event("airport_search_error", level="ERROR" if e.status_code >= 500 else "WARNING",
                  code=e.code.value, error=e.message)
        return _error_response(e, airports=[])
    return {"airports": airports_from_locations(raw)}


@app.post("/admin/circuit/reset")
async def reset_circuit_breaker(request: Request):
    """Admin endpoint to manually close the provider circuit breaker"""
    request.app.state.chat.breaker.reset()
    return {"status": "reset", "breaker": request.app.state.chat.breaker.name}


# Apply middleware
app = ObservabilityMiddleware(app)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8001,
        reload=True,
        log_level="info"
    )
