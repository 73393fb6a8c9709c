"""Module for Zoho issue (bug) operations."""

from __future__ import annotations

import logging
from typing import Any

from .base import ZohoMixinBase, _seg
from .utils import drop_none, page_params

logger = logging.getLogger("zoho-projects-mcp.zoho.issues")


class IssuesMixin(ZohoMixinBase):
    def _issue(self, project_id: str, issue_id: str) -> str:
        return f"{self._project(project_id)}/issues/{_seg(issue_id)}"

    def list_issues(
        self, project_id: str | None = None, page: int = 1, per_page: int = 10
    ) -> Any:
        return self.request(
            f"{self._scope(project_id)}/issues", params=page_params(page, per_page)
        )

    def get_issue(self, project_id: str, issue_id: str) -> Any:
        return self.request(self._issue(project_id, issue_id))

    def create_issue(self, project_id: str, title: str, **fields: Any) -> Any:
        body = drop_none({"title": title, **fields})
        return self.request(f"{self._project(project_id)}/issues", "POST", body)

    def update_issue(self, project_id: str, issue_id: str, **fields: Any) -> Any:
        body = drop_none(fields)
        if not body:
            raise ValueError("update_issue needs at least one field to change")
        return self.request(self._issue(project_id, issue_id), "PATCH", body)
