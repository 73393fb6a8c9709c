"""Shared helpers: environment inspection, logging setup and tool filtering."""

from .environment import get_auth_mode, get_available_services
from .io import is_read_only_mode
from .logging import mask_sensitive, setup_logging
from .tools import get_enabled_tools, should_include_tool

__all__ = [
    "get_auth_mode",
    "get_available_services",
    "get_enabled_tools",
    "is_read_only_mode",
    "mask_sensitive",
    "setup_logging",
    "should_include_tool",
]
