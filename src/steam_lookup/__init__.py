"""
Steam Lookup.

Resolves game titles, app ids and profile identifiers into typed
records using the Steam Store, the Steam Web API and public lookup
pages.
"""

from steam_lookup.config import Settings, SteamAPIConfig, get_settings
from steam_lookup.contracts import Game, User
from steam_lookup.errors import (
    ConfigurationError,
    GameNotFoundError,
    ResponseValidationError,
    SteamLookupError,
    TransportError,
    UserNotFoundError,
)
from steam_lookup.logger import get_logger, setup_logging
from steam_lookup.resolvers import GameResolver, UserResolver

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "Game",
    "GameNotFoundError",
    "GameResolver",
    "ResponseValidationError",
    "Settings",
    "SteamAPIConfig",
    "SteamLookupError",
    "TransportError",
    "User",
    "UserNotFoundError",
    "UserResolver",
    "get_logger",
    "get_settings",
    "setup_logging",
    "__version__",
]
