"""Module for Zoho search operations."""

from __future__ import annotations

import logging
from typing import Any, Literal

from .base import ZohoMixinBase
from .utils import page_params

logger = logging.getLogger("zoho-projects-mcp.zoho.search")

SearchModule = Literal["all", "projects", "tasks", "issues", "milestones", "forums", "events"]


class SearchMixin(ZohoMixinBase):
    def search(
        self,
        search_term: str,
        project_id: str | None = None,
        module: SearchModule = "all",
        page: int = 1,
        per_page: int = 10,
    ) -> Any:
        """Search a project, or the whole portal (active items only)."""
        params: dict[str, Any] = {"search_term": search_term, "module": module}
        if not project_id:
            params["status"] = "active"
        params.update(page_params(page, per_page))
        return self.request(f"{self._scope(project_id)}/search", params=params)
