"""
Steam Community user resolver.

Resolves a vanity name, numeric id or profile URL to a steamID64 via
the steamid.io lookup page, then builds a User from the Steam Web API.
Requires a Steam API key.
"""

import asyncio
import time
from urllib.parse import quote

from bs4 import BeautifulSoup, Tag

from steam_lookup.contracts import (
    FriendListAPIResponse,
    OwnedGamesAPIResponse,
    PlayerSummariesAPIResponse,
    PlayerSummary,
    SteamLevelAPIResponse,
    User,
    format_creation_date,
)
from steam_lookup.errors import UserNotFoundError
from steam_lookup.resolvers.base import BaseResolver

INVALID_PROFILE_MESSAGE = "Invalid profile URL or Steam ID given"

# The lookup page renders a <dl> of dt.key/dd.value pairs in a fixed order:
# steamID, steamID3, steamID64, customURL, ... The steamID64 is read by
# position; the labels are only consulted when the table is too short.
STEAMID64_FIELD_INDEX = 2
STEAMID64_LABEL = "steamID64"
CUSTOM_URL_LABEL = "customURL"


class UserResolver(BaseResolver[User]):
    """
    Resolver for Steam Community users.

    Example:
        >>> config = SteamAPIConfig()
        >>> config.set_api_key("...")
        >>> async with UserResolver(config=config) as resolver:
        ...     user = await resolver.resolve("gabelogannewell")
        ...     print(user.name, user.level)
    """

    @property
    def source_name(self) -> str:
        """Return source identifier."""
        return "steam_web_api"

    async def resolve(self, query: str) -> User:
        """
        Resolve a query into a User.

        Args:
            query: Vanity name, steamID64 or full profile URL

        Returns:
            User: The resolved user

        Raises:
            ConfigurationError: If no API key is configured
            UserNotFoundError: If the lookup page doesn't recognise the query
            TransportError: If a request fails
        """
        api_key = self.config.require_api_key()
        start_time = time.perf_counter()
        self._logger.info("Resolving user", query=query)

        steam_id64, custom_url = await self.lookup(query)
        summary = await self._get_player_summary(steam_id64, api_key)

        if summary.is_public:
            # Let every detail request finish before surfacing the first failure
            details = await asyncio.gather(
                self._get_level(steam_id64, api_key),
                self._get_friend_count(steam_id64, api_key),
                self._get_owned_game_count(steam_id64, api_key),
                return_exceptions=True,
            )
            for outcome in details:
                if isinstance(outcome, BaseException):
                    raise outcome
            level, friend_count, owned_game_count = details
        else:
            self._logger.debug(
                "Profile is private, skipping details",
                steam_id64=steam_id64,
                visibility=summary.communityvisibilitystate,
            )
            level, friend_count, owned_game_count = 0, 0, None

        user = User(
            steam_id64=steam_id64,
            custom_url=custom_url,
            is_private=not summary.is_public,
            profile_url=summary.profileurl,
            avatar_url=summary.avatarfull,
            name=summary.personaname,
            real_name=summary.realname,
            location=summary.loccountrycode,
            creation_date=(
                format_creation_date(summary.timecreated)
                if summary.timecreated is not None
                else None
            ),
            level=level,
            friend_count=friend_count,
            owned_game_count=owned_game_count,
        )

        self._logger.info(
            "User resolved",
            steam_id64=steam_id64,
            is_private=user.is_private,
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )
        return user

    async def lookup(self, query: str) -> tuple[str, str | None]:
        """
        Resolve a query to its steamID64 and custom URL.

        Returns:
            tuple[str, str | None]: (steamID64, custom URL or None)

        Raises:
            UserNotFoundError: If the lookup page lists no result fields
        """
        # A full profile URL must stay a single path segment under /lookup,
        # so its ':' and '/' are percent-encoded as well
        url = f"{self.config.lookup_url}/{quote(query, safe='')}"
        doc = await self._get_html("POST", url, data={"input": query})

        values = doc.select("dd.value")
        if not values:
            self._logger.warning("Lookup found no profile", query=query)
            raise UserNotFoundError(INVALID_PROFILE_MESSAGE, source="steamid_lookup", endpoint=url)

        if len(values) > STEAMID64_FIELD_INDEX:
            steam_id64 = values[STEAMID64_FIELD_INDEX].get_text(strip=True)
        else:
            field = self._labelled_value(doc, STEAMID64_LABEL)
            steam_id64 = field.get_text(strip=True) if field is not None else ""

        if not steam_id64:
            self._logger.warning("Lookup returned no steamID64", query=query)
            raise UserNotFoundError(INVALID_PROFILE_MESSAGE, source="steamid_lookup", endpoint=url)

        return steam_id64, self._custom_url(doc)

    @staticmethod
    def _labelled_value(doc: BeautifulSoup, label: str) -> Tag | None:
        for key in doc.select("dt.key"):
            if key.get_text(strip=True) == label:
                value = key.find_next_sibling("dd")
                if isinstance(value, Tag):
                    return value
        return None

    def _custom_url(self, doc: BeautifulSoup) -> str | None:
        # Unset custom URLs render as plain text ("not set") rather than a link
        field = self._labelled_value(doc, CUSTOM_URL_LABEL)
        if field is None:
            return None
        link = field.find("a", href=True)
        if not isinstance(link, Tag):
            return None
        return str(link["href"])

    def _api_url(self, path: str) -> str:
        return f"{self.config.base_url}/{path}"

    async def _get_player_summary(self, steam_id64: str, api_key: str) -> PlayerSummary:
        url = self._api_url("ISteamUser/GetPlayerSummaries/v0002/")
        raw_data = await self._get_json(url, params={"key": api_key, "steamids": steam_id64})
        summaries = self._validate(PlayerSummariesAPIResponse, raw_data, endpoint=url)

        if not summaries.response.players:
            self._logger.warning("No player summary", steam_id64=steam_id64)
            raise UserNotFoundError(INVALID_PROFILE_MESSAGE, source=self.source_name, endpoint=url)

        return summaries.response.players[0]

    async def _get_level(self, steam_id64: str, api_key: str) -> int:
        url = self._api_url("IPlayerService/GetSteamLevel/v1/")
        raw_data = await self._get_json(url, params={"key": api_key, "steamid": steam_id64})
        return self._validate(SteamLevelAPIResponse, raw_data, endpoint=url).response.player_level

    async def _get_friend_count(self, steam_id64: str, api_key: str) -> int:
        url = self._api_url("ISteamUser/GetFriendList/v0001/")
        raw_data = await self._get_json(
            url,
            params={"key": api_key, "steamid": steam_id64, "relationship": "friend"},
        )
        friends = self._validate(FriendListAPIResponse, raw_data, endpoint=url)
        return len(friends.friendslist.friends)

    async def _get_owned_game_count(self, steam_id64: str, api_key: str) -> int | None:
        url = self._api_url("IPlayerService/GetOwnedGames/v0001/")
        raw_data = await self._get_json(url, params={"key": api_key, "steamid": steam_id64})
        return self._validate(OwnedGamesAPIResponse, raw_data, endpoint=url).response.game_count
