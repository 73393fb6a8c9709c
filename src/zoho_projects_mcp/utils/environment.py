"""Utility functions related to environment checking."""

import logging
import os
from typing import Final, Literal, Tuple

logger = logging.getLogger("zoho-projects-mcp.utils.environment")

_TRUTHY: Final[Tuple[str, ...]] = ("true", "1", "yes", "y", "on")

AuthMode = Literal["refresh", "static", "unconfigured"]


def _truthy(value: str | None) -> bool:
    return (value or "").strip().lower() in _TRUTHY


def _refresh_vars_present() -> bool:
    """Return True only if the full refresh triple is set."""
    return all(
        os.getenv(key)
        for key in ("ZOHO_REFRESH_TOKEN", "ZOHO_CLIENT_ID", "ZOHO_CLIENT_SECRET")
    )


def _partial_refresh_vars() -> list[str]:
    """Return the refresh variables that are set while others are missing."""
    keys = ("ZOHO_REFRESH_TOKEN", "ZOHO_CLIENT_ID", "ZOHO_CLIENT_SECRET")
    present = [key for key in keys if os.getenv(key)]
    return present if 0 < len(present) < len(keys) else []


def get_auth_mode() -> AuthMode:
    """Determine how the server will authenticate against Zoho.

    Precedence (highest → lowest):
      1. Full refresh triple → tokens are refreshed on expiry and on 401
      2. ``ZOHO_ACCESS_TOKEN`` alone → static token, no refresh
      3. Nothing usable → every tool call fails with a missing-credential error
    """
    if _refresh_vars_present():
        return "refresh"
    if os.getenv("ZOHO_ACCESS_TOKEN"):
        return "static"
    return "unconfigured"


def get_available_services() -> dict[str, bool | None]:
    """Determine whether Zoho Projects is usable based on environment variables."""
    mode = get_auth_mode()
    partial = _partial_refresh_vars()
    if partial:
        logger.warning(
            "Incomplete Zoho refresh configuration (only %s set); token refresh disabled.",
            ", ".join(partial),
        )

    if mode == "refresh":
        logger.info("Using Zoho OAuth refresh-token authentication")
    elif mode == "static":
        logger.info(
            "Using static Zoho access token; requests will fail once it expires"
        )
    else:
        logger.info(
            "Zoho Projects is not configured or required environment variables are missing."
        )

    if not os.getenv("ZOHO_PORTAL_ID"):
        logger.warning("ZOHO_PORTAL_ID is not set; portal-scoped tools will fail.")

    return {"zoho_projects": mode != "unconfigured"}
