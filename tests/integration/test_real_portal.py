"""Integration tests against a real Zoho Projects portal.

Run with ``pytest --integration`` and ``ZOHO_PORTAL_ID`` plus either
``ZOHO_ACCESS_TOKEN`` or the refresh triple exported. Read-only calls only.
"""

import os

import pytest

from zoho_projects_mcp.zoho import ZohoConfig, ZohoFetcher


@pytest.fixture(scope="module")
def fetcher():
    config = ZohoConfig.from_env()
    if not config.portal_id or not config.is_auth_configured():
        pytest.skip("Zoho credentials not configured in the environment")
    instance = ZohoFetcher(config)
    yield instance
    instance.close()


@pytest.mark.integration
def test_list_portals(fetcher: ZohoFetcher) -> None:
    data = fetcher.list_portals()
    assert isinstance(data, (dict, list))


@pytest.mark.integration
def test_list_projects_first_page(fetcher: ZohoFetcher) -> None:
    data = fetcher.list_projects(per_page=5)
    assert isinstance(data, dict)


@pytest.mark.integration
@pytest.mark.skipif(
    not os.getenv("ZOHO_TEST_PROJECT_ID"), reason="ZOHO_TEST_PROJECT_ID not set"
)
def test_list_tasklists_minimal(fetcher: ZohoFetcher) -> None:
    data = fetcher.list_tasklists(os.environ["ZOHO_TEST_PROJECT_ID"])
    assert all(set(t) == {"id", "name"} for t in data["tasklists"])
