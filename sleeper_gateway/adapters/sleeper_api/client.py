"""Sleeper API client with response caching and error classification."""

from typing import Any, Optional
from urllib.parse import quote

import httpx
import structlog

from sleeper_gateway.adapters.cache.response_cache import ResponseCache
from sleeper_gateway.core.errors import GatewayError

logger = structlog.get_logger()

DEFAULT_BASE_URL = "https://api.sleeper.app/v1"

_MISS = object()


class SleeperAPIError(GatewayError):
    """Base exception for Sleeper API errors."""

    code = "sleeper_api_error"


class UpstreamError(SleeperAPIError):
    """Sleeper answered with a non-success status."""

    code = "upstream_error"

    def __init__(self, status: int, message: str):
        super().__init__(f"Sleeper API error {status}: {message}")
        self.status = status
        self.body = message


class TransportError(SleeperAPIError):
    """Sleeper could not be reached (DNS, timeout, connection reset)."""

    code = "transport_error"

    def __init__(self, cause: Exception):
        super().__init__(f"Request to Sleeper API failed: {cause!r}")
        self.cause = cause


class SleeperAPIClient:
    """Read-only Sleeper API client.

    Every cached read goes through ``fetch``, which consults the shared
    ResponseCache before touching the network. Failures are never retried.
    """

    def __init__(
        self,
        cache: ResponseCache,
        base_url: Optional[str] = None,
        request_timeout: float = 10.0,
        max_connections: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the Sleeper API client.

        Args:
            cache: Shared response cache, keyed by URL
            base_url: Base URL for the API (defaults to production Sleeper API)
            request_timeout: Request timeout in seconds
            max_connections: Cap on simultaneous upstream connections (None for httpx default)
            transport: Optional httpx transport, used by tests
        """
        self.cache = cache
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self.request_timeout = request_timeout

        limits = httpx.Limits(max_connections=max_connections) if max_connections else httpx.Limits()
        self.client = httpx.AsyncClient(timeout=request_timeout, limits=limits, transport=transport)

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.client.aclose()

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    async def _make_request(self, url: str) -> Any:
        """GET a URL and return the decoded JSON body.

        Raises:
            UpstreamError: For non-2xx responses or an undecodable body
            TransportError: For network-level failures
        """
        headers = {"Accept": "application/json"}

        try:
            response = await self.client.get(url, headers=headers)
        except httpx.RequestError as e:
            logger.error("HTTP request failed", url=url, error=str(e))
            raise TransportError(e) from e

        if not 200 <= response.status_code < 300:
            logger.error(
                "Sleeper API error",
                url=url,
                status_code=response.status_code,
                response=response.text,
            )
            raise UpstreamError(response.status_code, response.text)

        try:
            return response.json()
        except ValueError as e:
            logger.error("Sleeper API returned invalid JSON", url=url, error=str(e))
            raise UpstreamError(response.status_code, "Response body is not valid JSON") from e

    async def fetch(self, url: str) -> Any:
        """Cache-aside GET of a URL."""
        cached = self.cache.get(url, _MISS)
        if cached is not _MISS:
            logger.debug("Cache hit", url=url)
            return cached

        logger.debug("Cache miss", url=url)
        data = await self._make_request(url)
        self.cache.set(url, data)
        return data

    async def get_nfl_state(self) -> Any:
        """Get the current NFL state (week, season, season type...)."""
        return await self.fetch(self._url("state/nfl"))

    async def get_league_users(self, league_id: str) -> Any:
        """Get all users in a league."""
        logger.info("Fetching league users", league_id=league_id)
        return await self.fetch(self._url(f"league/{quote(league_id, safe='')}/users"))

    async def get_league_rosters(self, league_id: str) -> Any:
        """Get all rosters in a league."""
        logger.info("Fetching league rosters", league_id=league_id)
        return await self.fetch(self._url(f"league/{quote(league_id, safe='')}/rosters"))

    async def get_league_matchups(self, league_id: str, week: int) -> Any:
        """Get one week's matchup entries for a league."""
        logger.info("Fetching league matchups", league_id=league_id, week=week)
        return await self.fetch(self._url(f"league/{quote(league_id, safe='')}/matchups/{week}"))

    async def get_all_players(self) -> bytes:
        """Download the bulk NFL player dataset.

        Bypasses the response cache and returns the raw body so it can be
        persisted verbatim.
        """
        url = self._url("players/nfl")
        logger.info("Downloading bulk player dataset", url=url)

        try:
            response = await self.client.get(url)
        except httpx.RequestError as e:
            logger.error("HTTP request failed", url=url, error=str(e))
            raise TransportError(e) from e

        if not 200 <= response.status_code < 300:
            raise UpstreamError(response.status_code, response.text)

        return response.content
