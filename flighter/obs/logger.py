"""Structured JSON logging to stdout.

Low overhead, minimal dependencies, safe for production stdout collectors.
"""

from typing import Any, Dict
from datetime import datetime, timezone
import json

from flighter.obs.context import request_id_var, session_id_var


MAX_TEXT_CHARS = 80


def _truncate_text(value: Any) -> Any:
    s = str(value) if value is not None else ""
    if len(s) <= MAX_TEXT_CHARS:
        return s
    return s[:MAX_TEXT_CHARS] + "…"


def log_event(event: str, **fields: Any) -> None:
    now = datetime.now(timezone.utc).isoformat()
    payload: Dict[str, Any] = {
        "ts": now,
        "level": fields.pop("level", "INFO"),
        "event": event,
        "request_id": request_id_var.get(),
    }
    payload.setdefault("session_id", session_id_var.get())

    # Free-text user input is clipped, everything else passes through
    for k, v in fields.items():
        if k in ("text", "utterance", "message"):
            payload[k] = _truncate_text(v)
        else:
            payload[k] = v

    try:
        print(json.dumps(payload, separators=(",", ":"), default=str))
    except Exception:
        # As a last resort, avoid crashing the app due to logging
        pass
