"""Unit tests for TokenRefresher.

Coverage:
* Successful exchange installs the token with the 300 s safety margin
* Non-2xx / malformed responses raise RefreshFailedError and leave the store alone
* Missing refresh material returns False without any HTTP call
* Single-flight refresh: concurrent callers trigger one exchange
"""

from __future__ import annotations

import threading
import time
from types import SimpleNamespace
from typing import Any, Callable
from unittest.mock import MagicMock

import pytest
import requests

from zoho_projects_mcp.auth.credentials import CredentialStore
from zoho_projects_mcp.auth.errors import RefreshFailedError
from zoho_projects_mcp.auth.refresher import TokenRefresher


# --------------------------------------------------------------------------- #
# Helpers                                                                     #
# --------------------------------------------------------------------------- #
def fake_clock_factory(now: float) -> Callable[[], float]:
    """Return a deterministic clock returning *now*."""
    return lambda now=now: now


def _response(status_code: int = 200, payload: Any = None, text: str = "") -> Any:
    def _json() -> Any:
        if payload is None:
            raise ValueError("no JSON")
        return payload

    return SimpleNamespace(
        status_code=status_code,
        ok=200 <= status_code < 300,
        text=text,
        json=_json,
    )


def _store(access_token: str = "old-tk", now: float = 1_000) -> CredentialStore:
    return CredentialStore(
        access_token,
        refresh_token="rt",
        client_id="cid",
        client_secret="secret",
        expires_at=now - 1,
        clock=fake_clock_factory(now),
    )


# --------------------------------------------------------------------------- #
# Happy path                                                                  #
# --------------------------------------------------------------------------- #
def test_refresh_installs_token_with_margin() -> None:
    store = _store(now=1_000)
    session = MagicMock()
    session.post.return_value = _response(
        payload={"access_token": "new-tk", "expires_in": 3600}
    )
    refresher = TokenRefresher(
        store, accounts_domain="https://accounts.zoho.eu/", session=session
    )

    assert refresher.refresh() is True

    assert store.access_token == "new-tk"
    assert store.expires_at == 1_000 + 3_300
    session.post.assert_called_once()
    args, kwargs = session.post.call_args
    assert args[0] == "https://accounts.zoho.eu/oauth/v2/token"
    assert kwargs["data"] == {
        "refresh_token": "rt",
        "client_id": "cid",
        "client_secret": "secret",
        "grant_type": "refresh_token",
    }


# --------------------------------------------------------------------------- #
# Failures                                                                    #
# --------------------------------------------------------------------------- #
def test_non_2xx_raises_and_keeps_store() -> None:
    store = _store()
    session = MagicMock()
    session.post.return_value = _response(400, text='{"error":"invalid_code"}')
    refresher = TokenRefresher(store, session=session)

    with pytest.raises(RefreshFailedError) as excinfo:
        refresher.refresh()

    assert excinfo.value.status_code == 400
    assert "invalid_code" in str(excinfo.value)
    assert store.access_token == "old-tk"
    assert store.expires_at == 999


@pytest.mark.parametrize(
    "payload",
    [None, {"error": "invalid_code"}, {"access_token": "", "expires_in": 3600}],
)
def test_unusable_body_raises(payload: Any) -> None:
    store = _store()
    session = MagicMock()
    session.post.return_value = _response(200, payload=payload)

    with pytest.raises(RefreshFailedError):
        TokenRefresher(store, session=session).refresh()
    assert store.access_token == "old-tk"


def test_network_error_raises_refresh_failed() -> None:
    store = _store()
    session = MagicMock()
    session.post.side_effect = requests.ConnectionError("boom")

    with pytest.raises(RefreshFailedError, match="boom"):
        TokenRefresher(store, session=session).refresh()


def test_missing_credentials_returns_false(caplog: pytest.LogCaptureFixture) -> None:
    store = CredentialStore("tk", refresh_token="rt")
    session = MagicMock()

    assert TokenRefresher(store, session=session).refresh() is False
    session.post.assert_not_called()
    assert "Cannot refresh token" in caplog.text


def test_skips_exchange_when_token_already_replaced() -> None:
    store = _store(now=1_000)
    store.replace("fresh-tk", 5_000)
    session = MagicMock()

    assert TokenRefresher(store, session=session).refresh(superseded_token="old-tk")
    session.post.assert_not_called()
    assert store.access_token == "fresh-tk"


# --------------------------------------------------------------------------- #
# Single-flight: concurrent refresh only once                                 #
# --------------------------------------------------------------------------- #
def test_single_flight_refresh() -> None:
    store = _store(now=5_000)
    calls: list[int] = [0]

    def _slow_post(*args: Any, **kwargs: Any) -> Any:
        calls[0] += 1
        # Simulate slow network call
        time.sleep(0.2)
        return _response(
            payload={"access_token": f"refreshed-{calls[0]}", "expires_in": 3600}
        )

    session = MagicMock()
    session.post.side_effect = _slow_post
    refresher = TokenRefresher(store, session=session)

    results: list[bool] = []

    def _worker() -> None:
        results.append(refresher.refresh(superseded_token="old-tk"))

    threads = [threading.Thread(target=_worker) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert calls[0] == 1
    assert results == [True, True]
    assert store.access_token == "refreshed-1"
