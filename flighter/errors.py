"""
Errors raised by the chat and search layers.

The parsing core never raises; these exist for the code around it, which
turns empty parse results and provider trouble into messages for the user.

Usage:
    from flighter.errors import UnknownCity

    raise UnknownCity("Sorry, I do not recognize ...")
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Error codes returned to the browser alongside the message."""

    # Parsing
    ROUTE_NOT_UNDERSTOOD = "ROUTE_NOT_UNDERSTOOD"
    UNKNOWN_CITY = "UNKNOWN_CITY"

    # Search
    NO_FLIGHTS = "NO_FLIGHTS"
    SEARCH_TIMEOUT = "SEARCH_TIMEOUT"
    PROVIDER_ERROR = "PROVIDER_ERROR"
    NOT_CONFIGURED = "NOT_CONFIGURED"
    INVALID_REQUEST = "INVALID_REQUEST"


class FlighterError(Exception):
    """Base exception carrying a user-facing message and an error code.

    ``status_code`` is what the JSON endpoints answer with; the chat endpoint
    always answers 200 and shows the message as a bot reply.
    """

    code = ErrorCode.PROVIDER_ERROR
    status_code = 500

    def __init__(self, message: str, code: ErrorCode | None = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def to_dict(self) -> dict:
        return {"message": self.message, "code": self.code.value}


class RouteNotUnderstood(FlighterError):
    code = ErrorCode.ROUTE_NOT_UNDERSTOOD


class UnknownCity(FlighterError):
    code = ErrorCode.UNKNOWN_CITY


class NoFlightsFound(FlighterError):
    code = ErrorCode.NO_FLIGHTS


class SearchTimeout(FlighterError):
    code = ErrorCode.SEARCH_TIMEOUT
    status_code = 408


class ProviderError(FlighterError):
    code = ErrorCode.PROVIDER_ERROR
    status_code = 500


class NotConfigured(FlighterError):
    code = ErrorCode.NOT_CONFIGURED
    status_code = 500


class InvalidRequest(FlighterError):
    code = ErrorCode.INVALID_REQUEST
    status_code = 400
