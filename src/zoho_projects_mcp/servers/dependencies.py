"""Dependency provider for the ZohoFetcher used by tool functions."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastmcp import Context

from zoho_projects_mcp.servers.context import MainAppContext

if TYPE_CHECKING:
    from zoho_projects_mcp.zoho import ZohoFetcher

logger = logging.getLogger("zoho-projects-mcp.servers.dependencies")


def _app_context(ctx: Context) -> MainAppContext | None:
    lifespan_ctx_dict = ctx.request_context.lifespan_context
    app_ctx = (
        lifespan_ctx_dict.get("app_lifespan_context")
        if isinstance(lifespan_ctx_dict, dict)
        else None
    )
    return app_ctx if isinstance(app_ctx, MainAppContext) else None


def get_zoho_fetcher(ctx: Context) -> ZohoFetcher:
    """Return the process-wide ZohoFetcher from the lifespan context.

    Raises:
        ValueError: If the server lifespan did not set up a fetcher.
    """
    app_ctx = _app_context(ctx)
    if app_ctx is None or app_ctx.zoho_fetcher is None:
        logger.error("Zoho fetcher requested but no application context is available.")
        raise ValueError(
            "Zoho client is not available. Ensure the server was started with a Zoho configuration."
        )
    return app_ctx.zoho_fetcher
