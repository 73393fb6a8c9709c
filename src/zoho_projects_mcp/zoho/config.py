"""Configuration module for the Zoho Projects API client."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from zoho_projects_mcp.auth.credentials import Clock, CredentialStore, default_clock
from zoho_projects_mcp.auth.refresher import DEFAULT_ACCOUNTS_DOMAIN

logger = logging.getLogger("zoho-projects-mcp.zoho.config")

DEFAULT_API_DOMAIN = "https://projectsapi.zoho.com"
DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass
class ZohoConfig:
    """Zoho Projects API configuration.

    Holds the portal, the regional API and accounts domains, and the OAuth
    material used to build a :class:`CredentialStore`.
    """

    portal_id: str = ""
    access_token: str = ""
    api_domain: str = DEFAULT_API_DOMAIN
    accounts_domain: str = DEFAULT_ACCOUNTS_DOMAIN
    refresh_token: str | None = None
    client_id: str | None = None
    client_secret: str | None = None
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    @property
    def base_url(self) -> str:
        """Root of the v3 REST API, e.g. ``https://projectsapi.zoho.eu/api/v3``."""
        return f"{self.api_domain.rstrip('/')}/api/v3"

    @property
    def portal_path(self) -> str:
        return f"/portal/{self.portal_id}"

    @property
    def has_refresh_credentials(self) -> bool:
        return bool(self.refresh_token and self.client_id and self.client_secret)

    def is_auth_configured(self) -> bool:
        """Check if enough credentials are present to make a first call."""
        return bool(self.access_token) or self.has_refresh_credentials

    def build_credential_store(self, *, clock: Clock = default_clock) -> CredentialStore:
        return CredentialStore(
            self.access_token,
            refresh_token=self.refresh_token,
            client_id=self.client_id,
            client_secret=self.client_secret,
            clock=clock,
        )

    @classmethod
    def from_env(cls) -> ZohoConfig:
        """Create configuration from ``ZOHO_*`` environment variables."""
        raw_timeout = os.getenv("ZOHO_HTTP_TIMEOUT")
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT_SECONDS
        except ValueError:
            logger.warning(
                "Invalid ZOHO_HTTP_TIMEOUT %r; using %ss", raw_timeout, DEFAULT_TIMEOUT_SECONDS
            )
            timeout = DEFAULT_TIMEOUT_SECONDS

        return cls(
            portal_id=os.getenv("ZOHO_PORTAL_ID", ""),
            access_token=os.getenv("ZOHO_ACCESS_TOKEN", ""),
            api_domain=os.getenv("ZOHO_API_DOMAIN") or DEFAULT_API_DOMAIN,
            accounts_domain=os.getenv("ZOHO_ACCOUNTS_DOMAIN") or DEFAULT_ACCOUNTS_DOMAIN,
            refresh_token=os.getenv("ZOHO_REFRESH_TOKEN") or None,
            client_id=os.getenv("ZOHO_CLIENT_ID") or None,
            client_secret=os.getenv("ZOHO_CLIENT_SECRET") or None,
            timeout=timeout,
        )
