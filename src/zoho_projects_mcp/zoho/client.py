"""Authenticated HTTP client for the Zoho Projects v3 API.

Every outbound call goes through :meth:`ZohoClient._send`, which enforces the
credential rules uniformly:

1. a stale token is refreshed proactively (a failure here is only logged);
2. no request ever leaves with an empty bearer token;
3. a 401 triggers at most one refresh and one retry;
4. any other non-2xx status becomes :class:`RemoteApiError`.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Final
from urllib.parse import urlsplit

import requests

from zoho_projects_mcp.auth.credentials import CredentialStore
from zoho_projects_mcp.auth.errors import (
    MissingCredentialError,
    RefreshFailedError,
    RemoteApiError,
    TransportError,
)
from zoho_projects_mcp.auth.refresher import TokenRefresher
from zoho_projects_mcp.utils.logging import mask_sensitive

from .config import ZohoConfig

logger = logging.getLogger("zoho-projects-mcp.zoho.client")

AUTH_SCHEME: Final[str] = "Zoho-oauthtoken"
_BODY_METHODS: Final[frozenset[str]] = frozenset({"POST", "PUT", "PATCH"})
# Regional Zoho domains that may receive the bearer token on absolute URLs.
ZOHO_DOMAINS: Final[tuple[str, ...]] = (
    "zoho.com",
    "zoho.eu",
    "zoho.in",
    "zoho.com.au",
    "zoho.com.cn",
    "zoho.jp",
    "zoho.sa",
    "zoho.uk",
    "zohocloud.ca",
)


def is_zoho_url(url: str) -> bool:
    """True for https URLs whose host is a Zoho domain or one of its subdomains."""
    parts = urlsplit(url)
    host = parts.hostname or ""
    return parts.scheme == "https" and any(
        host == domain or host.endswith(f".{domain}") for domain in ZOHO_DOMAINS
    )


class _Attempt(enum.Enum):
    INITIAL = "initial"
    RETRYING = "retrying"


@dataclass(frozen=True, slots=True)
class BinaryPayload:
    """Raw bytes downloaded from Zoho with the server-reported content type."""

    content: bytes
    content_type: str


class ZohoClient:
    """Owns the credential store, the refresher and the HTTP session."""

    def __init__(
        self,
        config: ZohoConfig,
        *,
        store: CredentialStore | None = None,
        session: requests.Session | None = None,
        refresher: TokenRefresher | None = None,
    ) -> None:
        self.config = config
        self.store = store or config.build_credential_store()
        self.session = session or requests.Session()
        self.refresher = refresher or TokenRefresher(
            self.store,
            accounts_domain=config.accounts_domain,
            session=self.session,
            timeout=config.timeout,
        )

    def close(self) -> None:
        self.session.close()

    # ------------------------------------------------------------------ #
    # Public API                                                         #
    # ------------------------------------------------------------------ #
    def request(
        self,
        path: str,
        method: str = "GET",
        json_body: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Call ``{base_url}{path}`` and return the decoded JSON body.

        Args:
            path: Path below ``/api/v3`` starting with ``/``, query string allowed.
            method: HTTP verb.
            json_body: Sent only for POST, PUT and PATCH.
            params: Extra query parameters; ``None`` values are dropped.

        Returns:
            The parsed JSON document, or ``{}`` for an empty body.

        Raises:
            MissingCredentialError: No access token could be obtained.
            RemoteApiError: Zoho answered with a non-success status.
            TransportError: The request never got a response.
        """
        method = method.upper()
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        body = json_body if method in _BODY_METHODS else None
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        response = self._send(
            method,
            f"{self.config.base_url}{path}",
            headers=headers,
            json_body=body,
            params=params or None,
        )
        if response.status_code == 204 or not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise RemoteApiError(
                response.status_code, f"invalid JSON in response: {response.text[:200]}"
            ) from exc

    def fetch_binary(self, url: str) -> BinaryPayload:
        """Download ``url`` (absolute) with the same credential discipline.

        Raises:
            ValueError: If ``url`` is not an https URL on a Zoho domain.
        """
        if not is_zoho_url(url):
            host = urlsplit(url).hostname or url
            raise ValueError(f"Refusing to send Zoho credentials to non-Zoho URL host: {host}")
        response = self._send("GET", url, headers={})
        content_type = response.headers.get("Content-Type", "")
        return BinaryPayload(content=response.content, content_type=content_type)

    # ------------------------------------------------------------------ #
    # Internal helpers                                                   #
    # ------------------------------------------------------------------ #
    def _ensure_fresh_token(self) -> str:
        snapshot = self.store.snapshot()
        if snapshot.is_stale(self.store.clock()):
            try:
                self.refresher.refresh(superseded_token=snapshot.access_token)
            except RefreshFailedError as exc:
                # The following request surfaces the real failure.
                logger.warning("Proactive token refresh failed: %s", exc)
        token = self.store.access_token
        if not token:
            raise MissingCredentialError()
        return token

    def _send(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        json_body: Any = None,
        params: dict[str, Any] | None = None,
    ) -> requests.Response:
        attempt = _Attempt.INITIAL
        token = self._ensure_fresh_token()
        while True:
            request_headers = {**headers, "Authorization": f"{AUTH_SCHEME} {token}"}
            logger.debug(
                "%s %s (attempt=%s, token=%s)",
                method,
                url,
                attempt.value,
                mask_sensitive(token),
            )
            try:
                response = self.session.request(
                    method,
                    url,
                    headers=request_headers,
                    json=json_body,
                    params=params,
                    timeout=self.config.timeout,
                )
            except requests.RequestException as exc:
                raise TransportError(f"Request to Zoho failed: {exc}") from exc

            if (
                response.status_code == 401
                and attempt is _Attempt.INITIAL
                and self.store.can_refresh
            ):
                logger.info("Received 401 from Zoho, attempting token refresh...")
                try:
                    self.refresher.refresh(superseded_token=token)
                except RefreshFailedError as exc:
                    logger.error("Token refresh after 401 failed: %s", exc)
                else:
                    attempt = _Attempt.RETRYING
                    token = self.store.access_token
                    continue

            if not response.ok:
                raise RemoteApiError(response.status_code, response.text)
            return response
