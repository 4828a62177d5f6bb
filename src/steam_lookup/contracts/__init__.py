"""
Data contracts for Steam responses and resolved records.

Pydantic models describing the payloads returned by the Steam Store
and Web APIs, plus the immutable Game and User records built from them.
"""

from steam_lookup.contracts.store import (
    Game,
    PriceOverview,
    StoreAppDetails,
    StoreAppResponse,
    to_major_units,
)
from steam_lookup.contracts.user import (
    FriendListAPIResponse,
    OwnedGamesAPIResponse,
    PlayerSummariesAPIResponse,
    PlayerSummary,
    SteamLevelAPIResponse,
    User,
    format_creation_date,
)

__all__ = [
    "FriendListAPIResponse",
    "Game",
    "OwnedGamesAPIResponse",
    "PlayerSummariesAPIResponse",
    "PlayerSummary",
    "PriceOverview",
    "SteamLevelAPIResponse",
    "StoreAppDetails",
    "StoreAppResponse",
    "User",
    "format_creation_date",
    "to_major_units",
]
