"""MCP server layer: lifespan context, dependency lookup and tool definitions."""

from .main import ZohoProjectsMCP, create_main_server

__all__ = ["ZohoProjectsMCP", "create_main_server"]
