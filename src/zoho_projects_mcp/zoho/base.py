"""Shared path helpers for the Zoho fetcher mixins."""

from __future__ import annotations

from urllib.parse import quote

from .client import ZohoClient


def _seg(value: str | int) -> str:
    """Quote a single path segment (ids never contain ``/``)."""
    return quote(str(value), safe="")


class ZohoMixinBase(ZohoClient):
    """Base for every mixin; resolves portal- and project-scoped paths."""

    def _portal(self) -> str:
        if not self.config.portal_id:
            raise ValueError("ZOHO_PORTAL_ID is not configured")
        return f"/portal/{_seg(self.config.portal_id)}"

    def _project(self, project_id: str) -> str:
        return f"{self._portal()}/projects/{_seg(project_id)}"

    def _scope(self, project_id: str | None) -> str:
        """Project path when ``project_id`` is given, portal path otherwise."""
        return self._project(project_id) if project_id else self._portal()
