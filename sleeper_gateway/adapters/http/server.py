"""aiohttp application exposing the query operations as named tools."""

from typing import Any, Dict

from aiohttp import web
import structlog

from sleeper_gateway.adapters.sleeper_api.client import TransportError, UpstreamError
from sleeper_gateway.application.queries import QueryService
from sleeper_gateway.core.errors import GatewayError, NotFoundError, ValidationError

logger = structlog.get_logger()


def error_response(http_status: int, code: str, message: str, **extra: Any) -> web.Response:
    error: Dict[str, Any] = {"code": code, "message": message}
    error.update(extra)
    return web.json_response({"error": error}, status=http_status)


def gateway_error_response(error: GatewayError) -> web.Response:
    """Map a typed gateway error onto an HTTP error response."""
    if isinstance(error, ValidationError):
        return error_response(400, error.code, error.message)
    if isinstance(error, NotFoundError):
        return error_response(404, error.code, error.message)
    if isinstance(error, UpstreamError):
        return error_response(502, error.code, error.message, status=error.status)
    if isinstance(error, TransportError):
        return error_response(504, error.code, error.message)
    return error_response(500, error.code, error.message)


class ToolServer:
    """HTTP routes for health, tool discovery and tool calls."""

    def __init__(self, queries: QueryService):
        self.queries = queries
        self.app = web.Application()
        self.setup_routes()

    def setup_routes(self):
        """Set up all routes."""
        self.app.router.add_get("/health", self.health)
        self.app.router.add_get("/tools", self.list_tools)
        self.app.router.add_post("/tools/{name}", self.call_tool)

    async def health(self, request: web.Request) -> web.Response:
        return web.json_response({"status": "ok", "players_loaded": len(self.queries.directory)})

    async def list_tools(self, request: web.Request) -> web.Response:
        return web.json_response({"tools": [tool.to_dict() for tool in self.queries.tools]})

    async def call_tool(self, request: web.Request) -> web.Response:
        """Run a tool with the JSON object in the request body as arguments."""
        name = request.match_info["name"]
        if not self.queries.has_tool(name):
            return error_response(404, "unknown_tool", f"Unknown tool: {name}")

        if request.can_read_body:
            try:
                arguments = await request.json()
            except ValueError:
                return error_response(400, ValidationError.code, "Request body must be valid JSON")
        else:
            arguments = {}

        if not isinstance(arguments, dict):
            return error_response(400, ValidationError.code, "Tool arguments must be a JSON object")

        try:
            result = await self.queries.call(name, arguments)
        except GatewayError as e:
            logger.warning("Tool call failed", tool=name, code=e.code, error=e.message)
            return gateway_error_response(e)

        return web.json_response({"result": result})


def create_app(queries: QueryService) -> web.Application:
    """Create the aiohttp application for a query service."""
    return ToolServer(queries).app
