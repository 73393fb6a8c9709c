"""Tool filtering helpers."""

import logging
import os

logger = logging.getLogger("zoho-projects-mcp.utils.tools")


def get_enabled_tools() -> list[str] | None:
    """Read the ``ENABLED_TOOLS`` allow-list.

    Returns:
        Tool names from the comma-separated variable, or None when every
        tool is enabled.
    """
    raw = os.getenv("ENABLED_TOOLS")
    if not raw or not raw.strip():
        logger.debug("ENABLED_TOOLS not set; all tools enabled")
        return None
    tools = [name.strip() for name in raw.split(",") if name.strip()]
    logger.debug("Enabled tools: %s", tools)
    return tools or None


def should_include_tool(tool_name: str, enabled_tools: list[str] | None) -> bool:
    if enabled_tools is None:
        return True
    return tool_name in enabled_tools
