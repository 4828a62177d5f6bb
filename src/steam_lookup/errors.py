"""
Exception hierarchy for Steam lookups.

Every failure surfaced by a resolver is one of these types, so callers
can tell "nothing matched" apart from "the network failed" apart from
"the client is misconfigured".
"""

from datetime import datetime, timezone


class SteamLookupError(Exception):
    """Base exception for lookup errors."""

    def __init__(
        self,
        message: str,
        *,
        source: str | None = None,
        endpoint: str | None = None,
        status_code: int | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.source = source
        self.endpoint = endpoint
        self.status_code = status_code
        self.original_error = original_error
        self.timestamp = datetime.now(timezone.utc)


class GameNotFoundError(SteamLookupError):
    """Raised when no game could be found for a query."""

    pass


class UserNotFoundError(SteamLookupError):
    """Raised when no user could be found for a query."""

    pass


class TransportError(SteamLookupError):
    """Raised when a request fails or its body cannot be parsed."""

    pass


class ResponseValidationError(TransportError):
    """Raised when a response does not match its expected contract."""

    pass


class ConfigurationError(SteamLookupError):
    """Raised when a required setting (the Web API key) is missing."""

    pass
