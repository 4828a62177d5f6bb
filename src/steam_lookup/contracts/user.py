"""
Data contracts for Steam Web API user endpoints and the User record.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

# Fixed English names so formatting does not depend on the process locale
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

# Only this visibility code counts as public; every other code is private
PUBLIC_VISIBILITY_STATE = 2


def format_creation_date(timestamp: int) -> str:
    """Format Unix seconds as "Month D, YYYY" (UTC)."""
    moment = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    return f"{MONTH_NAMES[moment.month - 1]} {moment.day}, {moment.year}"


class PlayerSummary(BaseModel):
    """
    A single player from GetPlayerSummaries.

    Endpoint: ISteamUser/GetPlayerSummaries/v0002/
    """

    steamid: str
    communityvisibilitystate: int = Field(..., description="Profile visibility code")
    profileurl: str
    avatarfull: str
    personaname: str | None = None
    realname: str | None = None
    loccountrycode: str | None = None
    timecreated: int | None = None

    @property
    def is_public(self) -> bool:
        return self.communityvisibilitystate == PUBLIC_VISIBILITY_STATE


class PlayerSummaries(BaseModel):
    players: list[PlayerSummary] = Field(default_factory=list)


class PlayerSummariesAPIResponse(BaseModel):
    """Wrapper for player summaries API response."""

    response: PlayerSummaries


class SteamLevel(BaseModel):
    player_level: int = Field(default=0, ge=0)


class SteamLevelAPIResponse(BaseModel):
    """
    Response from GetSteamLevel.

    Endpoint: IPlayerService/GetSteamLevel/v1/
    """

    response: SteamLevel


class Friend(BaseModel):
    steamid: str


class FriendList(BaseModel):
    friends: list[Friend] = Field(default_factory=list)


class FriendListAPIResponse(BaseModel):
    """
    Response from GetFriendList.

    Endpoint: ISteamUser/GetFriendList/v0001/
    """

    friendslist: FriendList


class OwnedGames(BaseModel):
    # Absent when the game details of the profile are hidden
    game_count: int | None = Field(default=None, ge=0)


class OwnedGamesAPIResponse(BaseModel):
    """
    Response from GetOwnedGames.

    Endpoint: IPlayerService/GetOwnedGames/v0001/
    """

    response: OwnedGames


class User(BaseModel):
    """A resolved Steam Community user."""

    model_config = ConfigDict(frozen=True)

    steam_id64: str
    custom_url: str | None = None
    is_private: bool
    profile_url: str
    avatar_url: str
    name: str | None = None
    real_name: str | None = None
    location: str | None = None
    creation_date: str | None = None
    level: int = Field(default=0, ge=0)
    friend_count: int = Field(default=0, ge=0)
    owned_game_count: int | None = Field(default=None, ge=0)
