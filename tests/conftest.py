import os
import sys
import asyncio
import inspect
from datetime import date

import pytest

# Ensure project root is on sys.path so `import flighter` works in tests
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


def pytest_pyfunc_call(pyfuncitem):
    """Allow running async tests without pytest-asyncio.

    If the test function is a coroutine, run it in a fresh event loop.
    """
    testfunction = pyfuncitem.obj
    if inspect.iscoroutinefunction(testfunction):
        funcargs = pyfuncitem.funcargs
        sig = inspect.signature(testfunction)
        # Filter only the parameters that the test function expects
        allowed = {name: funcargs[name] for name in sig.parameters.keys() if name in funcargs}
        asyncio.run(testfunction(**allowed))
        return True
    return None


def make_offer(offer_id, price, duration="PT2H30M", stops=0, carrier="AA",
               origin="ORD", destination="LHR"):
    """Minimal Amadeus flight offer with ``stops + 1`` segments."""
    hops = [origin] + [f"X{i}X" for i in range(stops)] + [destination]
    segments = []
    for i in range(len(hops) - 1):
        segments.append({
            "departure": {"iataCode": hops[i], "at": f"2025-07-28T{8 + i:02d}:15:00"},
            "arrival": {"iataCode": hops[i + 1], "at": f"2025-07-28T{9 + i:02d}:45:00"},
            "carrierCode": carrier,
            "number": str(100 + i),
            "aircraft": {"code": "738"},
        })
    return {
        "id": str(offer_id),
        "price": {"total": str(price), "currency": "USD"},
        "itineraries": [{"duration": duration, "segments": segments}],
    }


class FakeAmadeus:
    """Stands in for AmadeusClient; records calls and returns a canned payload."""

    def __init__(self, payload=None, error=None, delay=0.0, configured=True):
        self.payload = payload if payload is not None else {"data": []}
        self.error = error
        self.delay = delay
        self.configured = configured
        self.calls = []

    def search_flights(self, origin, destination, departure_date, return_date=None,
                       adults=1, max_results=None, max_price=None):
        import time
        self.calls.append({
            "origin": origin,
            "destination": destination,
            "departure_date": departure_date,
            "return_date": return_date,
            "adults": adults,
            "max_results": max_results,
            "max_price": max_price,
        })
        if self.delay:
            time.sleep(self.delay)
        if self.error:
            raise self.error
        return self.payload

    def search_locations(self, keyword):
        return {"data": [{
            "iataCode": "LHR",
            "name": "HEATHROW",
            "address": {"cityName": "LONDON", "countryName": "UNITED KINGDOM"},
        }]}

    def close(self):
        pass


@pytest.fixture
def fixed_today():
    return date(2025, 7, 1)


@pytest.fixture
def offers_payload():
    return {"data": [
        make_offer(1, 350, duration="PT7H30M", stops=0),
        make_offer(2, 500, duration="PT9H10M", stops=1),
        make_offer(3, 420, duration="PT8H00M", stops=0, carrier="BA"),
    ]}
