"""Main service class for the Sleeper gateway."""

import asyncio
import logging
from typing import Optional

from aiohttp import web

from sleeper_gateway.config import Config
from sleeper_gateway.adapters.cache.response_cache import ResponseCache
from sleeper_gateway.adapters.http.server import create_app
from sleeper_gateway.adapters.players.directory import PlayerDirectory
from sleeper_gateway.adapters.sleeper_api.client import SleeperAPIClient
from sleeper_gateway.application.queries import QueryService


logger = logging.getLogger(__name__)


class GatewayService:
    """Owns the process-wide state and the HTTP server.

    The response cache, the Sleeper client and the player directory are built
    here once and handed to the query service by reference.
    """

    def __init__(self, config: Config, client: Optional[SleeperAPIClient] = None):
        """Initialize the gateway service.

        Args:
            config: Service configuration
            client: Optional Sleeper client for dependency injection.
                    If not provided, one is created from config.
        """
        self.config = config
        self._stopped = asyncio.Event()

        self.cache: Optional[ResponseCache] = None
        self.client: Optional[SleeperAPIClient] = None
        self.directory: Optional[PlayerDirectory] = None
        self.queries: Optional[QueryService] = None

        self._provided_client = client
        self._runner: Optional[web.AppRunner] = None

    async def _initialize_infrastructure(self):
        """Build the cache, client and player directory."""
        if self._provided_client is not None:
            self.client = self._provided_client
            self.cache = self.client.cache
        else:
            self.cache = ResponseCache(
                max_entries=self.config.cache_max_entries,
                ttl_seconds=self.config.cache_ttl_seconds,
            )
            self.client = SleeperAPIClient(
                cache=self.cache,
                base_url=self.config.sleeper_api_url,
                request_timeout=self.config.sleeper_api_timeout_seconds,
                max_connections=self.config.upstream_max_connections,
            )

        self.directory = await PlayerDirectory.load(
            self.config.player_snapshot_path,
            fetch_snapshot=self.client.get_all_players,
        )
        self.queries = QueryService(self.client, self.directory)

    async def start(self):
        """Initialize infrastructure and start serving HTTP."""
        logger.info("Starting Sleeper gateway")
        await self._initialize_infrastructure()

        self._runner = web.AppRunner(create_app(self.queries))
        await self._runner.setup()
        site = web.TCPSite(self._runner, self.config.host, self.config.port)
        await site.start()

        logger.info(f"Sleeper gateway listening on http://{self.config.host}:{self.config.port}")

    async def wait_closed(self):
        """Block until stop() is called."""
        await self._stopped.wait()

    async def stop(self):
        """Stop serving and release the HTTP client."""
        if self._stopped.is_set():
            return
        self._stopped.set()

        logger.info("Stopping Sleeper gateway")
        if self._runner is not None:
            await self._runner.cleanup()
            self._runner = None
        if self.client is not None and self._provided_client is None:
            await self.client.close()
