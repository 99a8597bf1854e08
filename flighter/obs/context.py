"""Request context helpers using ContextVars.

Holds request-scoped identifiers (request_id and the chat session id sent by
the browser) so log lines can be correlated without threading them through
every call.
"""

from contextvars import ContextVar
from typing import Optional


# Public ContextVars (names are stable API)
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
session_id_var: ContextVar[Optional[str]] = ContextVar("session_id", default=None)
