"""Main FastMCP server setup for the Zoho Projects integration."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse

from zoho_projects_mcp.utils.environment import get_available_services
from zoho_projects_mcp.utils.io import is_read_only_mode
from zoho_projects_mcp.utils.tools import get_enabled_tools
from zoho_projects_mcp.zoho import ZohoFetcher
from zoho_projects_mcp.zoho.config import ZohoConfig

from .context import MainAppContext
from .zoho import register_zoho_tools

logger = logging.getLogger("zoho-projects-mcp.server.main")


async def health_check(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok"})


@asynccontextmanager
async def main_lifespan(app: FastMCP[MainAppContext]) -> AsyncIterator[dict]:
    """Publish the server's fetcher to tool calls.

    Depending on the fastmcp release this runs once per server or once per
    client session, so it never builds credential state of its own when the
    server already owns a fetcher.
    """
    logger.info("Main Zoho Projects MCP server lifespan starting...")
    fetcher = getattr(app, "zoho_fetcher", None)
    owned = fetcher is None
    if owned:
        fetcher = ZohoFetcher(ZohoConfig.from_env())

    try:
        yield {"app_lifespan_context": MainAppContext(zoho_fetcher=fetcher)}
    except Exception as e:
        logger.error(f"Error during lifespan: {e}", exc_info=True)
        raise
    finally:
        if owned:
            try:
                fetcher.close()
            except Exception as e:
                logger.error(f"Error during cleanup: {e}", exc_info=True)
        logger.info("Main Zoho Projects MCP server lifespan shutdown complete.")


class ZohoProjectsMCP(FastMCP[MainAppContext]):
    """Custom FastMCP server class owning the process-wide Zoho fetcher."""

    def __init__(self, *args, zoho_fetcher: ZohoFetcher, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.zoho_fetcher = zoho_fetcher

    def close(self) -> None:
        self.zoho_fetcher.close()


def create_main_server(
    config: ZohoConfig | None = None,
    *,
    read_only: bool | None = None,
    enabled_tools: list[str] | None = None,
) -> ZohoProjectsMCP:
    """Build the server, its shared fetcher and the allowed tool set.

    ``config`` defaults to ``ZohoConfig.from_env()``. Filters left as None are
    read from ``READ_ONLY_MODE`` and ``ENABLED_TOOLS``.
    """
    services = get_available_services()
    if not services.get("zoho_projects"):
        logger.warning(
            "Zoho authentication is not configured. Tool calls will fail until "
            "ZOHO_ACCESS_TOKEN or the refresh credentials are set."
        )
    if config is None:
        config = ZohoConfig.from_env()
    if read_only is None:
        read_only = is_read_only_mode()
    if enabled_tools is None:
        enabled_tools = get_enabled_tools()
    logger.info(f"Read-only mode: {'ENABLED' if read_only else 'DISABLED'}")
    logger.info(f"Enabled tools filter: {enabled_tools or 'All tools enabled'}")

    # Built even without credentials so every call reports the missing token.
    server = ZohoProjectsMCP(
        name="Zoho Projects MCP",
        lifespan=main_lifespan,
        zoho_fetcher=ZohoFetcher(config),
    )
    registered = register_zoho_tools(
        server, read_only=read_only, enabled_tools=enabled_tools
    )
    logger.debug(f"Server exposes {len(registered)} tools")

    @server.custom_route("/healthz", methods=["GET"], include_in_schema=False)
    async def _health_check_route(request: Request) -> JSONResponse:
        return await health_check(request)

    return server
