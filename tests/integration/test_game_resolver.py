"""Integration tests for the game resolver with mocked HTTP responses."""

import json
from pathlib import Path
from typing import Any

import httpx
import pytest
import respx
from steam_lookup.config import SteamAPIConfig
from steam_lookup.resolvers import (
    GameNotFoundError,
    GameResolver,
    ResponseValidationError,
    TransportError,
)

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"

SEARCH_URL = "https://store.steampowered.com/search/"
APPDETAILS_URL = "https://store.steampowered.com/api/appdetails"


def load_fixture(name: str) -> Any:
    """Load a JSON fixture file."""
    with (FIXTURES_DIR / name).open(encoding="utf-8") as f:
        return json.load(f)


def load_html(name: str) -> str:
    """Load an HTML fixture file."""
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


@pytest.fixture
def portal_response() -> dict[str, Any]:
    """Appdetails response for a discounted game."""
    return load_fixture("store_response_620.json")


@pytest.fixture
def tf2_response() -> dict[str, Any]:
    """Appdetails response for a free game."""
    return load_fixture("store_response_440.json")


class TestGameResolverSearch:
    """Resolution through the Store search page."""

    @respx.mock
    @pytest.mark.asyncio
    async def test_resolve_by_title(
        self,
        steam_config: SteamAPIConfig,
        portal_response: dict[str, Any],
    ) -> None:
        """Test that the first app row of the search is fetched."""
        search = respx.get(SEARCH_URL).mock(
            return_value=httpx.Response(200, text=load_html("search_results.html"))
        )
        details = respx.get(APPDETAILS_URL).mock(
            return_value=httpx.Response(200, json=portal_response)
        )

        async with GameResolver(config=steam_config) as resolver:
            game = await resolver.resolve("portal")

        assert search.calls.last.request.url.params["term"] == "portal"
        # The bundle row ahead of it is skipped
        assert details.calls.last.request.url.params["appids"] == "620"
        assert game.app_id == "620"
        assert game.name == "Portal 2"
        assert game.developer == "Valve"
        assert game.publisher == "Valve"
        assert game.header_image_url.endswith("/620/header.jpg")

    @respx.mock
    @pytest.mark.asyncio
    async def test_search_sends_user_agent(
        self,
        steam_config: SteamAPIConfig,
        portal_response: dict[str, Any],
    ) -> None:
        """Test that the configured user agent is sent."""
        search = respx.get(SEARCH_URL).mock(
            return_value=httpx.Response(200, text=load_html("search_results.html"))
        )
        respx.get(APPDETAILS_URL).mock(return_value=httpx.Response(200, json=portal_response))

        async with GameResolver(config=steam_config) as resolver:
            await resolver.resolve("portal")

        assert search.calls.last.request.headers["User-Agent"] == "Mozilla/5.0"

    @respx.mock
    @pytest.mark.asyncio
    async def test_no_search_results(self, steam_config: SteamAPIConfig) -> None:
        """Test that an empty search raises GameNotFoundError."""
        respx.get(SEARCH_URL).mock(
            return_value=httpx.Response(200, text=load_html("search_empty.html"))
        )

        async with GameResolver(config=steam_config) as resolver:
            with pytest.raises(GameNotFoundError, match="No search results found for query"):
                await resolver.resolve("qwertyuiop no such game")

    @respx.mock
    @pytest.mark.asyncio
    async def test_bundle_only_results(self, steam_config: SteamAPIConfig) -> None:
        """Test that rows without an app id don't count as results."""
        html = (
            '<a class="search_result_row" data-ds-bundleid="234" '
            'href="https://store.steampowered.com/bundle/234/">Bundle</a>'
        )
        respx.get(SEARCH_URL).mock(return_value=httpx.Response(200, text=html))

        async with GameResolver(config=steam_config) as resolver:
            with pytest.raises(GameNotFoundError, match="No search results found for query"):
                await resolver.resolve("bundle")

    @respx.mock
    @pytest.mark.asyncio
    async def test_package_row_uses_first_app(
        self,
        steam_config: SteamAPIConfig,
        portal_response: dict[str, Any],
    ) -> None:
        """Test that multi-app rows resolve to their first app."""
        html = '<a class="search_result_row" data-ds-appid="620,400">Portal Pack</a>'
        respx.get(SEARCH_URL).mock(return_value=httpx.Response(200, text=html))
        details = respx.get(APPDETAILS_URL).mock(
            return_value=httpx.Response(200, json=portal_response)
        )

        async with GameResolver(config=steam_config) as resolver:
            game = await resolver.resolve("portal pack")

        assert details.calls.last.request.url.params["appids"] == "620"
        assert game.app_id == "620"

    @respx.mock
    @pytest.mark.asyncio
    async def test_empty_app_id_row_is_skipped(
        self,
        steam_config: SteamAPIConfig,
        portal_response: dict[str, Any],
    ) -> None:
        """Test that a row with a blank app id falls through to the next row."""
        html = (
            '<a class="search_result_row" data-ds-appid="">Coming Soon</a>'
            '<a class="search_result_row" data-ds-appid="620">Portal 2</a>'
        )
        respx.get(SEARCH_URL).mock(return_value=httpx.Response(200, text=html))
        details = respx.get(APPDETAILS_URL).mock(
            return_value=httpx.Response(200, json=portal_response)
        )

        async with GameResolver(config=steam_config) as resolver:
            game = await resolver.resolve("portal 2")

        assert details.calls.last.request.url.params["appids"] == "620"
        assert game.app_id == "620"


class TestGameResolverClient:
    """HTTP client settings."""

    @pytest.mark.asyncio
    async def test_timeout_from_config(self) -> None:
        """Test that the configured timeout reaches the HTTP client."""
        async with GameResolver(config=SteamAPIConfig(timeout_seconds=5)) as resolver:
            assert resolver.client.timeout.read == 5
            assert resolver.client.timeout.connect == 5

    @pytest.mark.asyncio
    async def test_default_timeout(self) -> None:
        """Test the default 30 second timeout."""
        async with GameResolver(config=SteamAPIConfig()) as resolver:
            assert resolver.client.timeout.read == 30


class TestGameResolverAppId:
    """Resolution with the "appid:" marker."""

    @respx.mock
    @pytest.mark.asyncio
    async def test_marker_skips_search(
        self,
        steam_config: SteamAPIConfig,
        tf2_response: dict[str, Any],
    ) -> None:
        """Test that "appid:" queries go straight to appdetails."""
        search = respx.get(SEARCH_URL).mock(return_value=httpx.Response(200, text=""))
        details = respx.get(APPDETAILS_URL).mock(
            return_value=httpx.Response(200, json=tf2_response)
        )

        async with GameResolver(config=steam_config) as resolver:
            game = await resolver.resolve("appid:440")

        assert search.called is False
        params = details.calls.last.request.url.params
        assert params["appids"] == "440"
        assert params["cc"] == "US"
        assert params["l"] == "english"
        assert game.app_id == "440"

    @respx.mock
    @pytest.mark.asyncio
    async def test_free_game(
        self,
        steam_config: SteamAPIConfig,
        tf2_response: dict[str, Any],
    ) -> None:
        """Test that a game without price data is free."""
        respx.get(APPDETAILS_URL).mock(return_value=httpx.Response(200, json=tf2_response))

        async with GameResolver(config=steam_config) as resolver:
            game = await resolver.resolve("appid:440")

        assert game.name == "Team Fortress 2"
        assert game.retail_price == 0.0
        assert game.discounted_price == 0.0
        assert game.discount_percent == 0
        assert game.currency_code is None

    @respx.mock
    @pytest.mark.asyncio
    async def test_price_normalization(
        self,
        steam_config: SteamAPIConfig,
        portal_response: dict[str, Any],
    ) -> None:
        """Test cents to major units conversion."""
        respx.get(APPDETAILS_URL).mock(return_value=httpx.Response(200, json=portal_response))

        async with GameResolver(config=steam_config) as resolver:
            game = await resolver.resolve("appid:620")

        assert game.retail_price == 19.99
        assert game.discounted_price == 9.99
        assert game.discount_percent == 50
        assert game.currency_code == "USD"
        assert game.is_discounted is True

    @respx.mock
    @pytest.mark.asyncio
    async def test_description_is_plain_text(
        self,
        steam_config: SteamAPIConfig,
        portal_response: dict[str, Any],
    ) -> None:
        """Test that tags are stripped and entities decoded."""
        respx.get(APPDETAILS_URL).mock(return_value=httpx.Response(200, json=portal_response))

        async with GameResolver(config=steam_config) as resolver:
            game = await resolver.resolve("appid:620")

        assert game.short_description == (
            'The "Perpetual Testing Initiative" has been expanded to allow you '
            "to design co-op puzzles for you and your friends!"
        )

    @respx.mock
    @pytest.mark.asyncio
    async def test_invalid_appid(self, steam_config: SteamAPIConfig) -> None:
        """Test that success=false raises GameNotFoundError."""
        respx.get(APPDETAILS_URL).mock(
            return_value=httpx.Response(200, json={"999999999": {"success": False}})
        )

        async with GameResolver(config=steam_config) as resolver:
            with pytest.raises(GameNotFoundError, match="Invalid appid given"):
                await resolver.resolve("appid:999999999")

    @respx.mock
    @pytest.mark.asyncio
    async def test_null_response(self, steam_config: SteamAPIConfig) -> None:
        """Test that a null body for a malformed id is not found."""
        respx.get(APPDETAILS_URL).mock(return_value=httpx.Response(200, text="null"))

        async with GameResolver(config=steam_config) as resolver:
            with pytest.raises(GameNotFoundError, match="Invalid appid given"):
                await resolver.resolve("appid:abc")

    @respx.mock
    @pytest.mark.asyncio
    async def test_empty_publisher_list(
        self,
        steam_config: SteamAPIConfig,
        tf2_response: dict[str, Any],
    ) -> None:
        """Test that an empty developer or publisher list becomes None."""
        tf2_response["440"]["data"]["publishers"] = []
        tf2_response["440"]["data"]["developers"] = None
        respx.get(APPDETAILS_URL).mock(return_value=httpx.Response(200, json=tf2_response))

        async with GameResolver(config=steam_config) as resolver:
            game = await resolver.resolve("appid:440")

        assert game.developer is None
        assert game.publisher is None

    @respx.mock
    @pytest.mark.asyncio
    async def test_resolve_is_repeatable(
        self,
        steam_config: SteamAPIConfig,
        portal_response: dict[str, Any],
    ) -> None:
        """Test that resolving twice yields identical records."""
        respx.get(APPDETAILS_URL).mock(return_value=httpx.Response(200, json=portal_response))

        async with GameResolver(config=steam_config) as resolver:
            first = await resolver.resolve("appid:620")
            second = await resolver.resolve("appid:620")

        assert first == second


class TestGameResolverFailures:
    """Transport and payload failures."""

    @respx.mock
    @pytest.mark.asyncio
    async def test_network_error(self, steam_config: SteamAPIConfig) -> None:
        """Test that a connection failure raises TransportError."""
        respx.get(APPDETAILS_URL).mock(side_effect=httpx.ConnectError("connection refused"))

        async with GameResolver(config=steam_config) as resolver:
            with pytest.raises(TransportError) as exc_info:
                await resolver.resolve("appid:620")

        assert isinstance(exc_info.value.original_error, httpx.ConnectError)
        assert exc_info.value.source == "steam_store"

    @respx.mock
    @pytest.mark.asyncio
    async def test_search_timeout(self, steam_config: SteamAPIConfig) -> None:
        """Test that a timeout raises TransportError."""
        respx.get(SEARCH_URL).mock(side_effect=httpx.ReadTimeout("timed out"))

        async with GameResolver(config=steam_config) as resolver:
            with pytest.raises(TransportError, match="timed out"):
                await resolver.resolve("portal")

    @respx.mock
    @pytest.mark.asyncio
    async def test_server_error(self, steam_config: SteamAPIConfig) -> None:
        """Test that an error status raises TransportError."""
        respx.get(APPDETAILS_URL).mock(return_value=httpx.Response(500))

        async with GameResolver(config=steam_config) as resolver:
            with pytest.raises(TransportError) as exc_info:
                await resolver.resolve("appid:620")

        assert exc_info.value.status_code == 500

    @respx.mock
    @pytest.mark.asyncio
    async def test_invalid_json(self, steam_config: SteamAPIConfig) -> None:
        """Test that a non-JSON body raises TransportError."""
        respx.get(APPDETAILS_URL).mock(
            return_value=httpx.Response(200, text="<html>maintenance</html>")
        )

        async with GameResolver(config=steam_config) as resolver:
            with pytest.raises(TransportError, match="not valid JSON"):
                await resolver.resolve("appid:620")

    @respx.mock
    @pytest.mark.asyncio
    async def test_malformed_payload(self, steam_config: SteamAPIConfig) -> None:
        """Test that missing required fields raise ResponseValidationError."""
        respx.get(APPDETAILS_URL).mock(
            return_value=httpx.Response(200, json={"620": {"success": True, "data": {}}})
        )

        async with GameResolver(config=steam_config) as resolver:
            with pytest.raises(ResponseValidationError):
                await resolver.resolve("appid:620")
