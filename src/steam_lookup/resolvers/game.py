"""
Steam Store game resolver.

Turns a game title (or an "appid:<id>" query) into a Game record using
the Store search page and the Store appdetails API.
"""

import time
from typing import Any

from bs4 import BeautifulSoup
from pydantic import ValidationError as PydanticValidationError

from steam_lookup.contracts import Game, StoreAppDetails, StoreAppResponse, to_major_units
from steam_lookup.errors import GameNotFoundError, ResponseValidationError
from steam_lookup.resolvers.base import BaseResolver

APPID_MARKER = "appid:"

NO_RESULTS_MESSAGE = "No search results found for query"
INVALID_APPID_MESSAGE = "Invalid appid given"


def html_to_text(fragment: str) -> str:
    """Strip tags, decode entities and collapse whitespace."""
    return " ".join(BeautifulSoup(fragment, "html.parser").get_text().split())


class GameResolver(BaseResolver[Game]):
    """
    Resolver for Steam Store games.

    Example:
        >>> async with GameResolver() as resolver:
        ...     game = await resolver.resolve("portal 2")
        ...     print(game.name, game.retail_price)
    """

    @property
    def source_name(self) -> str:
        """Return source identifier."""
        return "steam_store"

    def _build_url(self) -> str:
        """Build API URL for app details."""
        return f"{self.config.store_url}/appdetails"

    async def resolve(self, query: str) -> Game:
        """
        Resolve a query into a Game.

        Args:
            query: Game title, or "appid:<id>" to skip the search

        Returns:
            Game: The resolved game

        Raises:
            GameNotFoundError: If the search finds nothing or the app id is invalid
            TransportError: If a request fails
        """
        start_time = time.perf_counter()
        self._logger.info("Resolving game", query=query)

        if query.startswith(APPID_MARKER):
            app_id = query[len(APPID_MARKER) :].strip()
        else:
            app_id = await self.search(query)

        game = await self.fetch(app_id)

        self._logger.info(
            "Game resolved",
            app_id=game.app_id,
            game_name=game.name,
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )
        return game

    async def search(self, query: str) -> str:
        """
        Find the app id of the first app in the Store search results.

        Raises:
            GameNotFoundError: If the search returned no app rows
        """
        url = self.config.search_url
        doc = await self._get_html("GET", url, params={"term": query})

        app_id = self._first_app_id(doc)
        if app_id is None:
            self._logger.warning("No search results", query=query)
            raise GameNotFoundError(NO_RESULTS_MESSAGE, source=self.source_name, endpoint=url)

        self._logger.debug("Search matched app", query=query, app_id=app_id)
        return app_id

    @staticmethod
    def _first_app_id(doc: BeautifulSoup) -> str | None:
        # Bundle rows carry data-ds-bundleid instead of data-ds-appid
        for row in doc.select("a.search_result_row[data-ds-appid]"):
            # Package rows list every app they contain: "400,620"
            app_id = str(row["data-ds-appid"]).split(",")[0].strip()
            if app_id:
                return app_id
        return None

    async def fetch(self, app_id: str) -> Game:
        """
        Fetch appdetails for an app id and build the Game.

        Raises:
            GameNotFoundError: If the Store reports success=false for the id
        """
        url = self._build_url()
        endpoint = f"{url}?appids={app_id}"

        raw_data = await self._get_json(
            url,
            params={
                "appids": app_id,
                "cc": self.config.country_code,
                "l": self.config.language,
            },
        )

        # Steam returns {app_id: {success: bool, data: {...}}}, or null for garbage ids
        app_data: Any = raw_data.get(app_id) if isinstance(raw_data, dict) else None
        if app_data is None:
            self._logger.warning("App missing from response", app_id=app_id)
            raise GameNotFoundError(INVALID_APPID_MESSAGE, source=self.source_name, endpoint=endpoint)

        wrapper = self._validate(StoreAppResponse, app_data, endpoint=endpoint)
        if not wrapper.success or wrapper.data is None:
            self._logger.warning("API returned success=false", app_id=app_id)
            raise GameNotFoundError(INVALID_APPID_MESSAGE, source=self.source_name, endpoint=endpoint)

        return self._build_game(app_id, wrapper.data, endpoint=endpoint)

    def _build_game(self, app_id: str, details: StoreAppDetails, *, endpoint: str) -> Game:
        """Normalize validated appdetails into a Game."""
        price = details.price_overview

        try:
            return Game(
                app_id=app_id,
                name=details.name,
                short_description=html_to_text(details.short_description),
                header_image_url=details.header_image,
                developer=details.developers[0] if details.developers else None,
                publisher=details.publishers[0] if details.publishers else None,
                retail_price=to_major_units(price.initial) if price else 0.0,
                discounted_price=to_major_units(price.final) if price else 0.0,
                discount_percent=price.discount_percent if price else 0,
                currency_code=price.currency if price else None,
            )
        except PydanticValidationError as e:
            raise ResponseValidationError(
                f"Inconsistent app data: {e}",
                source=self.source_name,
                endpoint=endpoint,
                original_error=e,
            ) from e
