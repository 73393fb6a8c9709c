"""Portal-level operations: portals, users and the activity feed."""

from __future__ import annotations

import logging
from typing import Any

from .base import ZohoMixinBase, _seg

logger = logging.getLogger("zoho-projects-mcp.zoho.portals")


class PortalsMixin(ZohoMixinBase):
    def list_portals(self) -> Any:
        return self.request("/portals")

    def get_portal(self, portal_id: str) -> Any:
        return self.request(f"/portal/{_seg(portal_id)}")

    def list_users(self, project_id: str | None = None) -> Any:
        """List users of the portal, or of one project when ``project_id`` is set."""
        return self.request(f"{self._scope(project_id)}/users")

    def list_feeds(self, count: int = 20, viewkey: str = "all") -> Any:
        return self.request(
            f"{self._portal()}/feeds", params={"count": count, "viewkey": viewkey}
        )
