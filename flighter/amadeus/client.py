import httpx
import time
from typing import Dict, Any, Optional
from flighter.config import settings
from flighter.obs.logger import log_event
from flighter.obs.metrics import inc_counter, record_timing

BASE = "https://api.amadeus.com" if settings.AMADEUS_ENV == "production" \
       else "https://test.api.amadeus.com"

RETRYABLE_ERRORS = (httpx.ReadTimeout, httpx.ConnectTimeout, httpx.RemoteProtocolError)
RETRY_BACKOFF_SECONDS = 1.5


class AmadeusClient:
    def __init__(self, client_id: Optional[str] = None, client_secret: Optional[str] = None):
        self.client_id = client_id if client_id is not None else settings.AMADEUS_CLIENT_ID
        self.client_secret = client_secret if client_secret is not None else settings.AMADEUS_CLIENT_SECRET
        self._token = None
        self._exp = 0
        # Persistent HTTP client with HTTP/2; a read and its retry stay under the search timeout
        self._http = httpx.Client(
            http2=True,
            timeout=httpx.Timeout(connect=3.0, read=settings.PROVIDER_READ_TIMEOUT_SECONDS,
                                  write=10.0, pool=10.0),
        )

    @property
    def configured(self) -> bool:
        return bool(self.client_id and self.client_secret)

    def close(self) -> None:
        self._http.close()

    def _get_token(self):
        if self._token and time.time() < self._exp - 60:
            return self._token
        data = {
            "grant_type": "client_credentials",
            "client_id": self.client_id,
            "client_secret": self.client_secret,
        }
        r = self._http.post(
            f"{BASE}/v1/security/oauth2/token",
            data=data,
            headers={"Accept": "application/json"},
        )
        r.raise_for_status()
        j = r.json()
        self._token = j["access_token"]
        self._exp = time.time() + j.get("expires_in", 1799)
        return self._token

    def build_search_params(self, origin: str, destination: str, departure_date: str,
                            return_date: Optional[str] = None, adults: int = 1,
                            max_results: Optional[int] = None,
                            max_price: Optional[int] = None) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "originLocationCode": origin,
            "destinationLocationCode": destination,
            "departureDate": departure_date,
            "adults": max(1, int(adults) if adults is not None else 1),
            "max": int(max_results or settings.DEFAULT_MAX_RESULTS),
            "currencyCode": "USD",
        }
        if return_date:
            params["returnDate"] = return_date
        if max_price:
            params["maxPrice"] = int(max_price)
        return params

    def _get(self, path: str, params: Dict[str, Any], operation: str) -> Dict[str, Any]:
        """GET with bearer auth and a single retry on 5xx or connection trouble."""
        token = self._get_token()
        headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
        }

        attempt = 0
        last_err = None
        while attempt < 2:
            start = time.monotonic()
            try:
                r = self._http.get(f"{BASE}{path}", params=params, headers=headers)
                record_timing("amadeus_latency_ms", (time.monotonic() - start) * 1000.0,
                              {"operation": operation})
                r.raise_for_status()
                inc_counter("amadeus_requests_total", {"operation": operation, "status": "ok"})
                return r.json()
            except httpx.HTTPStatusError as e:
                inc_counter("amadeus_requests_total",
                            {"operation": operation, "status": str(e.response.status_code)})
                log_event("amadeus_http_error", level="ERROR", operation=operation,
                          status=e.response.status_code, body=e.response.text[:300])
                # Retry once only for 5xx
                if 500 <= e.response.status_code < 600 and attempt == 0:
                    attempt += 1
                    time.sleep(RETRY_BACKOFF_SECONDS)
                    last_err = e
                    continue
                raise
            except RETRYABLE_ERRORS as e:
                inc_counter("amadeus_requests_total", {"operation": operation, "status": "network"})
                log_event("amadeus_connection_error", level="ERROR", operation=operation,
                          error=f"{type(e).__name__}: {e}")
                if attempt == 0:
                    attempt += 1
                    time.sleep(RETRY_BACKOFF_SECONDS)
                    last_err = e
                    continue
                raise
        # If we somehow exit loop without returning, raise last error
        if last_err:
            raise last_err
        raise RuntimeError(f"Amadeus {operation} failed without a specific error")

    def search_flights(self, origin: str, destination: str, departure_date: str,
                       return_date: Optional[str] = None, adults: int = 1,
                       max_results: Optional[int] = None,
                       max_price: Optional[int] = None) -> Dict[str, Any]:
        params = self.build_search_params(origin, destination, departure_date,
                                          return_date, adults, max_results, max_price)
        log_event("amadeus_search", **params)
        data = self._get("/v2/shopping/flight-offers", params, "flight_offers")
        log_event("amadeus_search_done", offers=len(data.get("data", []) or []))
        return data

    def search_locations(self, keyword: str) -> Dict[str, Any]:
        params = {"keyword": keyword, "subType": "AIRPORT,CITY"}
        return self._get("/v1/reference-data/locations", params, "locations")
