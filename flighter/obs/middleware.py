"""ASGI middleware for lightweight observability."""

from typing import Callable, Any
import time
import uuid

from fastapi import FastAPI

from flighter.obs.context import request_id_var, session_id_var
from flighter.obs.logger import log_event
from flighter.obs.metrics import record_timing, inc_counter


SESSION_HEADER = b"x-session-id"


class ObservabilityMiddleware:
    def __init__(self, app: FastAPI):
        self.app = app

    async def __call__(self, scope: dict, receive: Callable, send: Callable[[dict], Any]):
        if scope.get("type") != "http":
            return await self.app(scope, receive, send)

        req_id = str(uuid.uuid4())
        request_id_var.set(req_id)
        headers = dict(scope.get("headers") or [])
        session = headers.get(SESSION_HEADER)
        session_id_var.set(session.decode("latin-1") if session else None)

        method = scope.get("method", "")
        route = scope.get("path", "")
        start = time.monotonic()
        status_code = 500

        async def send_wrapper(message: dict):
            nonlocal status_code
            if message.get("type") == "http.response.start":
                status_code = int(message.get("status", 200))
                message.setdefault("headers", [])
                message["headers"] = list(message["headers"]) + [(b"x-request-id", req_id.encode())]
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            elapsed_ms = (time.monotonic() - start) * 1000.0
            record_timing("request_latency_ms", elapsed_ms, {"route": route})
            inc_counter("requests_total", {"route": route, "status": str(status_code)})
            log_event(
                "request",
                method=method,
                route=route,
                status=status_code,
                ms_total=round(elapsed_ms, 2),
            )
