"""Unit tests for server construction, the lifespan context and /healthz."""

from __future__ import annotations

import json
from types import SimpleNamespace
from typing import Any
from unittest.mock import patch

import httpx
import pytest
from fastmcp import Client, FastMCP

from zoho_projects_mcp.servers.context import MainAppContext
from zoho_projects_mcp.servers.main import create_main_server, main_lifespan
from zoho_projects_mcp.zoho import ZohoConfig, ZohoFetcher

ZOHO_ENV = (
    "ZOHO_ACCESS_TOKEN",
    "ZOHO_PORTAL_ID",
    "ZOHO_REFRESH_TOKEN",
    "ZOHO_CLIENT_ID",
    "ZOHO_CLIENT_SECRET",
    "READ_ONLY_MODE",
    "ENABLED_TOOLS",
)


def _response(status_code: int, payload: Any) -> Any:
    text = json.dumps(payload)
    return SimpleNamespace(
        status_code=status_code,
        ok=200 <= status_code < 300,
        content=text.encode(),
        text=text,
        headers={"Content-Type": "application/json"},
        json=lambda: json.loads(text),
    )


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ZOHO_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.mark.anyio
async def test_lifespan_publishes_the_server_fetcher() -> None:
    server = create_main_server(ZohoConfig(portal_id="p1", access_token="tk"))

    async with main_lifespan(server) as first:
        first_ctx = first["app_lifespan_context"]
    async with main_lifespan(server) as second:
        second_ctx = second["app_lifespan_context"]

    assert isinstance(first_ctx, MainAppContext)
    assert first_ctx.zoho_fetcher is server.zoho_fetcher
    assert second_ctx.zoho_fetcher is server.zoho_fetcher
    assert server.zoho_fetcher.config.portal_id == "p1"


@pytest.mark.anyio
async def test_lifespan_on_plain_server_builds_fetcher(monkeypatch) -> None:
    monkeypatch.setenv("ZOHO_ACCESS_TOKEN", "tk")

    async with main_lifespan(FastMCP(name="bare")) as state:
        fetcher = state["app_lifespan_context"].zoho_fetcher
        assert isinstance(fetcher, ZohoFetcher)
        assert fetcher.store.access_token == "tk"


def test_create_main_server_reads_config_from_env(monkeypatch) -> None:
    monkeypatch.setenv("ZOHO_ACCESS_TOKEN", "tk")
    monkeypatch.setenv("ZOHO_PORTAL_ID", "p9")

    server = create_main_server()

    assert server.zoho_fetcher.config.portal_id == "p9"
    assert server.zoho_fetcher.store.access_token == "tk"


@pytest.mark.anyio
async def test_sessions_share_one_token_refresh(monkeypatch) -> None:
    """Several client sessions against one server trigger a single token POST."""
    monkeypatch.setenv("ZOHO_PORTAL_ID", "p1")
    monkeypatch.setenv("ZOHO_ACCESS_TOKEN", "")
    monkeypatch.setenv("ZOHO_REFRESH_TOKEN", "rt")
    monkeypatch.setenv("ZOHO_CLIENT_ID", "cid")
    monkeypatch.setenv("ZOHO_CLIENT_SECRET", "secret")

    with patch(
        "requests.Session.post",
        return_value=_response(200, {"access_token": "fresh", "expires_in": 3600}),
    ) as mock_post, patch(
        "requests.Session.request",
        return_value=_response(200, {"portals": []}),
    ) as mock_request:
        server = create_main_server()
        for _ in range(3):
            async with Client(server) as client:
                await client.call_tool("list_portals", {})

    assert mock_post.call_count == 1
    assert mock_request.call_count == 3
    assert {
        c.kwargs["headers"]["Authorization"] for c in mock_request.call_args_list
    } == {"Zoho-oauthtoken fresh"}


@pytest.mark.anyio
async def test_healthz_route() -> None:
    app = create_main_server(read_only=True).http_app(transport="sse")
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
