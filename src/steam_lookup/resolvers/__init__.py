"""
Resolvers for Steam games and users.

Both resolvers share a common base that owns the HTTP client and turns
transport failures into typed errors.
"""

from steam_lookup.errors import (
    ConfigurationError,
    GameNotFoundError,
    ResponseValidationError,
    SteamLookupError,
    TransportError,
    UserNotFoundError,
)
from steam_lookup.resolvers.base import BaseResolver
from steam_lookup.resolvers.game import GameResolver
from steam_lookup.resolvers.user import UserResolver

__all__ = [
    # Base class and errors
    "BaseResolver",
    "ConfigurationError",
    "GameNotFoundError",
    "ResponseValidationError",
    "SteamLookupError",
    "TransportError",
    "UserNotFoundError",
    # Resolvers
    "GameResolver",
    "UserResolver",
]
