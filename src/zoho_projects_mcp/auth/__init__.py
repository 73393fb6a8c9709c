"""Credential lifecycle package.

Sub-modules
-----------
credentials
    Bearer token snapshot, refresh material and the staleness check.
refresher
    Refresh-token exchange against Zoho Accounts.
errors
    The uniform error channel crossing the dispatcher boundary.

All public objects are re-exported here for convenience.
"""

from __future__ import annotations

from .credentials import (  # noqa: F401
    Clock,
    CredentialStore,
    RefreshCredentials,
    TokenSnapshot,
    default_clock,
)
from .errors import (  # noqa: F401
    MissingCredentialError,
    RefreshFailedError,
    RemoteApiError,
    TransportError,
    ZohoAuthError,
)
from .refresher import EXPIRY_MARGIN_SECONDS, TokenRefresher  # noqa: F401

__all__ = [
    # credentials
    "Clock",
    "CredentialStore",
    "RefreshCredentials",
    "TokenSnapshot",
    "default_clock",
    # refresher
    "EXPIRY_MARGIN_SECONDS",
    "TokenRefresher",
    # errors
    "MissingCredentialError",
    "RefreshFailedError",
    "RemoteApiError",
    "TransportError",
    "ZohoAuthError",
]
