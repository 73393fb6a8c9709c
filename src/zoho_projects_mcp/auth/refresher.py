"""Refresh-token exchange against the Zoho Accounts identity provider.

The refresher performs ``POST {accounts_domain}/oauth/v2/token`` with the
``refresh_token`` grant and installs the returned token in the
:class:`~zoho_projects_mcp.auth.credentials.CredentialStore`.

Refreshes are single-flight: concurrent callers queue on one lock and a
caller that finds the token already replaced by the lock holder returns
without a second HTTP exchange.
"""

from __future__ import annotations

import logging
import threading
from typing import Final

import requests

from zoho_projects_mcp.auth.credentials import CredentialStore
from zoho_projects_mcp.auth.errors import RefreshFailedError
from zoho_projects_mcp.utils.logging import mask_sensitive

_LOG = logging.getLogger("zoho-projects-mcp.auth.refresher")

# Subtracted from ``expires_in`` so a request never starts right as the
# provider-side token expires.
EXPIRY_MARGIN_SECONDS: Final[int] = 300

DEFAULT_ACCOUNTS_DOMAIN: Final[str] = "https://accounts.zoho.com"


class TokenRefresher:
    """Exchange the stored refresh token for a new access token."""

    def __init__(
        self,
        store: CredentialStore,
        *,
        accounts_domain: str = DEFAULT_ACCOUNTS_DOMAIN,
        session: requests.Session | None = None,
        timeout: float = 30.0,
        margin_seconds: int = EXPIRY_MARGIN_SECONDS,
    ) -> None:
        self.store = store
        self.token_url = f"{accounts_domain.rstrip('/')}/oauth/v2/token"
        self.session = session or requests.Session()
        self.timeout = timeout
        self.margin_seconds = margin_seconds
        self._lock = threading.Lock()

    def refresh(self, *, superseded_token: str | None = None) -> bool:
        """Refresh the access token.

        Parameters
        ----------
        superseded_token:
            The token the caller found stale or saw rejected. If another
            caller already replaced it with a fresh one while we waited for
            the lock, that result is reused.

        Returns
        -------
        bool
            *True* once the store holds a new token, *False* when refresh
            material is not configured.

        Raises
        ------
        RefreshFailedError
            If the token endpoint is unreachable, answers with a non-2xx
            status or returns an unusable body. The store is not modified.
        """
        creds = self.store.refresh_credentials
        if creds is None:
            _LOG.warning(
                "Cannot refresh token: missing refresh token, client ID, or client secret"
            )
            return False

        with self._lock:
            current = self.store.snapshot()
            if (
                superseded_token is not None
                and current.access_token != superseded_token
                and not current.is_stale(self.store.clock())
            ):
                _LOG.debug("Token already refreshed by a concurrent caller")
                return True

            payload = {
                "refresh_token": creds.refresh_token,
                "client_id": creds.client_id,
                "client_secret": creds.client_secret,
                "grant_type": "refresh_token",
            }
            try:
                resp = self.session.post(self.token_url, data=payload, timeout=self.timeout)
            except requests.RequestException as exc:
                _LOG.error("Token endpoint unreachable: %s", exc)
                raise RefreshFailedError(str(exc)) from exc

            if not resp.ok:
                _LOG.error("Token endpoint returned %s", resp.status_code)
                raise RefreshFailedError(
                    f"{resp.status_code} - {resp.text}", status_code=resp.status_code
                )

            try:
                data = resp.json()
            except ValueError as exc:
                raise RefreshFailedError(
                    "token response is not JSON", status_code=resp.status_code
                ) from exc
            try:
                access_token = data["access_token"]
                expires_in = int(data["expires_in"])
            except (KeyError, TypeError, ValueError) as exc:
                # Zoho reports some failures as 200 with {"error": "..."}.
                detail = data.get("error") if isinstance(data, dict) else None
                raise RefreshFailedError(
                    f"unexpected token response ({detail or type(exc).__name__})",
                    status_code=resp.status_code,
                ) from exc
            if not access_token:
                raise RefreshFailedError(
                    "token response missing access_token", status_code=resp.status_code
                )

            expires_at = self.store.clock() + (expires_in - self.margin_seconds)
            self.store.replace(access_token, expires_at)

        _LOG.info(
            "Access token refreshed successfully (token=%s, expires in %ss)",
            mask_sensitive(access_token),
            expires_in,
        )
        return True
