"""Module for Zoho project operations."""

from __future__ import annotations

import logging
from typing import Any

from .base import ZohoMixinBase
from .utils import drop_none, page_params

logger = logging.getLogger("zoho-projects-mcp.zoho.projects")


class ProjectsMixin(ZohoMixinBase):
    """Mixin for project CRUD. Deletion moves the project to the trash."""

    def list_projects(self, page: int = 1, per_page: int = 10) -> Any:
        return self.request(f"{self._portal()}/projects", params=page_params(page, per_page))

    def get_project(self, project_id: str) -> Any:
        return self.request(self._project(project_id))

    def create_project(
        self,
        name: str,
        description: str | None = None,
        start_date: str | None = None,
        end_date: str | None = None,
        is_public: bool = False,
    ) -> Any:
        body = drop_none(
            {
                "name": name,
                "description": description,
                "start_date": start_date,
                "end_date": end_date,
                "is_public": is_public,
            }
        )
        return self.request(f"{self._portal()}/projects", "POST", body)

    def update_project(self, project_id: str, **fields: Any) -> Any:
        body = drop_none(fields)
        if not body:
            raise ValueError("update_project needs at least one field to change")
        return self.request(self._project(project_id), "PATCH", body)

    def trash_project(self, project_id: str) -> Any:
        logger.info("Moving project %s to trash", project_id)
        return self.request(f"{self._project(project_id)}/trash", "POST")
