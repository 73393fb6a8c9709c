"""In-memory credential store for the Zoho OAuth bearer token.

The store holds one :class:`TokenSnapshot` (access token + expiry) and the
static refresh material. All time-based decisions go through an injected
:class:`Clock` so tests never depend on ``time.time()``.

Example
-------
>>> store = CredentialStore(access_token="", clock=lambda: 1000.0)
>>> store.is_stale()
True
>>> store.replace("tok", 5000.0)
>>> store.is_stale()
False
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Final, Protocol, runtime_checkable

# Lifetime assumed for a token handed in through configuration; Zoho issues
# one-hour tokens and the real expiry of a static token is unknown.
DEFAULT_STATIC_TOKEN_TTL: Final[int] = 3600


@runtime_checkable
class Clock(Protocol):
    """Callable returning *seconds* since the UNIX epoch."""

    def __call__(self) -> float: ...


def default_clock() -> float:
    return time.time()


@dataclass(frozen=True, slots=True)
class TokenSnapshot:
    """Immutable access token / expiry pair."""

    access_token: str
    expires_at: float

    def is_stale(self, now: float) -> bool:
        if not self.access_token:
            return True
        return now >= self.expires_at


@dataclass(frozen=True, slots=True)
class RefreshCredentials:
    """Material needed to exchange a refresh token for a new access token."""

    refresh_token: str
    client_id: str
    client_secret: str


class CredentialStore:
    """Holds the current bearer token and the optional refresh triple.

    ``replace`` swaps the whole :class:`TokenSnapshot` reference, so a reader
    sees either the old pair or the new pair, never a mix of the two.
    """

    def __init__(
        self,
        access_token: str = "",
        *,
        refresh_token: str | None = None,
        client_id: str | None = None,
        client_secret: str | None = None,
        expires_at: float | None = None,
        clock: Clock = default_clock,
    ) -> None:
        self.clock = clock
        if not access_token:
            # Forces a refresh attempt before the first real call.
            expires_at = 0.0
        elif expires_at is None:
            expires_at = clock() + DEFAULT_STATIC_TOKEN_TTL
        self._snapshot = TokenSnapshot(access_token, float(expires_at))

        if refresh_token and client_id and client_secret:
            self.refresh_credentials: RefreshCredentials | None = RefreshCredentials(
                refresh_token=refresh_token,
                client_id=client_id,
                client_secret=client_secret,
            )
        else:
            self.refresh_credentials = None

    @property
    def access_token(self) -> str:
        return self._snapshot.access_token

    @property
    def expires_at(self) -> float:
        return self._snapshot.expires_at

    @property
    def can_refresh(self) -> bool:
        return self.refresh_credentials is not None

    def snapshot(self) -> TokenSnapshot:
        return self._snapshot

    def is_stale(self, now: float | None = None) -> bool:
        """Return *True* when the stored token must not be used as-is."""
        return self._snapshot.is_stale(self.clock() if now is None else now)

    def replace(self, access_token: str, expires_at: float) -> None:
        """Atomically install a new access token and its expiry."""
        self._snapshot = TokenSnapshot(access_token, float(expires_at))
