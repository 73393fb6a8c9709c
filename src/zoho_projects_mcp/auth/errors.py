"""Exception types raised by the credential and dispatch layer.

Every failure crossing the :class:`~zoho_projects_mcp.zoho.client.ZohoClient`
boundary is a :class:`ZohoAuthError` subclass so the tool layer only ever
catches one type. Each carries a machine-readable ``kind`` and renders a
JSON-serialisable payload **without secrets**.
"""

from __future__ import annotations

from typing import ClassVar


class ZohoAuthError(RuntimeError):
    """Base class for errors surfaced by the dispatcher."""

    kind: ClassVar[str] = "zoho_error"

    def to_payload(self) -> dict[str, object]:
        return {"error": self.kind, "message": str(self)}


class MissingCredentialError(ZohoAuthError):
    """No usable access token at dispatch time and none could be obtained."""

    kind = "missing_credential"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or "Zoho access token not configured. Set ZOHO_ACCESS_TOKEN or the "
            "ZOHO_REFRESH_TOKEN / ZOHO_CLIENT_ID / ZOHO_CLIENT_SECRET triple."
        )


class RefreshFailedError(ZohoAuthError):
    """The token endpoint rejected the refresh or could not be reached."""

    kind = "refresh_failed"

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(f"Failed to refresh access token: {message}")
        self.status_code = status_code


class RemoteApiError(ZohoAuthError):
    """A Zoho resource endpoint answered with a non-success status."""

    kind = "remote_api_error"

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Zoho API error: {status_code} - {body}")
        self.status_code = status_code
        self.body = body

    def to_payload(self) -> dict[str, object]:
        payload = super().to_payload()
        payload["status_code"] = self.status_code
        return payload


class TransportError(ZohoAuthError):
    """Network-level failure while talking to Zoho or its identity provider."""

    kind = "transport_error"
