"""
Base resolver with HTTP client management and error handling.

Provides the fetch boundary shared by all resolvers: every request has
a bounded timeout, and any transport or decoding failure is raised as a
TransportError at the point it happens instead of flowing on as missing
data.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

import httpx
from bs4 import BeautifulSoup
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from steam_lookup.config import SteamAPIConfig, get_settings
from steam_lookup.errors import ResponseValidationError, TransportError
from steam_lookup.logger import get_logger

# Type variable for resolved records
T = TypeVar("T", bound=BaseModel)
M = TypeVar("M", bound=BaseModel)


class BaseResolver(ABC, Generic[T]):
    """
    Abstract base class for all resolvers.

    Provides common functionality including:
    - HTTP client management
    - Per-request timeout
    - Typed transport failures
    - JSON and HTML fetch helpers
    - Structured logging

    Subclasses must implement:
    - source_name: Identifier for the data source
    - resolve(): Query resolution logic
    """

    def __init__(
        self,
        *,
        config: SteamAPIConfig | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ) -> None:
        """
        Initialize the resolver.

        Args:
            config: Steam settings (process-wide settings if None)
            client: HTTP client to use; the resolver does not close a client it was given
            timeout: HTTP request timeout in seconds
        """
        self._config = config or get_settings().steam
        self._timeout = timeout or self._config.timeout_seconds
        self._logger = get_logger(
            self.__class__.__name__,
            component="resolver",
            source=self.source_name,
        )
        self._client = client
        self._owns_client = client is None

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Return identifier for this data source."""
        ...

    @property
    def config(self) -> SteamAPIConfig:
        return self._config

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                follow_redirects=True,
                headers={"User-Agent": self._config.user_agent},
            )
            self._owns_client = True
        return self._client

    async def close(self) -> None:
        """Close HTTP client and release resources."""
        if self._owns_client and self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "BaseResolver[T]":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

    async def _make_request(
        self,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """
        Make a single HTTP request.

        Args:
            method: HTTP method (GET, POST, etc.)
            url: Request URL
            **kwargs: Additional arguments passed to httpx

        Returns:
            httpx.Response: Successful response

        Raises:
            TransportError: On network failure, timeout or an error status
        """
        self._logger.debug("Making request", method=method, url=url)

        try:
            response = await self.client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            self._logger.error("Request timed out", url=url, timeout=self._timeout)
            raise TransportError(
                f"Request timed out after {self._timeout}s",
                source=self.source_name,
                endpoint=url,
                original_error=e,
            ) from e
        except httpx.HTTPError as e:
            self._logger.error("Request failed", url=url, error=str(e))
            raise TransportError(
                f"Request failed: {e}",
                source=self.source_name,
                endpoint=url,
                original_error=e,
            ) from e

        if response.status_code >= 400:
            self._logger.error("HTTP error response", url=url, status_code=response.status_code)
            raise TransportError(
                f"HTTP error: {response.status_code}",
                source=self.source_name,
                endpoint=url,
                status_code=response.status_code,
            )

        return response

    async def _get_json(self, url: str, **kwargs: Any) -> Any:
        """
        GET a URL and decode the body as JSON.

        Raises:
            TransportError: If the request fails or the body is not JSON
        """
        response = await self._make_request(
            "GET",
            url,
            headers={"Accept": "application/json"},
            **kwargs,
        )
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                "Response body is not valid JSON",
                source=self.source_name,
                endpoint=url,
                status_code=response.status_code,
                original_error=e,
            ) from e

    async def _get_html(self, method: str, url: str, **kwargs: Any) -> BeautifulSoup:
        """
        Fetch a page and parse it into a queryable document.

        Args:
            method: "GET" or "POST"
            url: Page URL
            **kwargs: Additional arguments passed to httpx (params, data)

        Returns:
            BeautifulSoup: Parsed document
        """
        response = await self._make_request(
            method,
            url,
            headers={"Accept": "text/html"},
            **kwargs,
        )
        return BeautifulSoup(response.text, "html.parser")

    def _validate(self, model: type[M], raw_data: Any, *, endpoint: str) -> M:
        """
        Validate a decoded payload against a contract.

        Raises:
            ResponseValidationError: If the payload doesn't match the contract
        """
        try:
            return model.model_validate(raw_data)
        except PydanticValidationError as e:
            self._logger.error(
                "Response validation failed",
                endpoint=endpoint,
                model=model.__name__,
                errors=e.error_count(),
            )
            raise ResponseValidationError(
                f"Response validation failed: {e}",
                source=self.source_name,
                endpoint=endpoint,
                original_error=e,
            ) from e

    @abstractmethod
    async def resolve(self, query: str) -> T:
        """
        Resolve a query into a record.

        Must be implemented by subclasses.

        Returns:
            T: The fully populated record
        """
        ...
