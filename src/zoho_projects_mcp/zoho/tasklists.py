"""Module for Zoho tasklist operations."""

from __future__ import annotations

import logging
from typing import Any

from .base import ZohoMixinBase, _seg
from .utils import drop_none, filter_by_name, minimal_tasklists

logger = logging.getLogger("zoho-projects-mcp.zoho.tasklists")


class TasklistsMixin(ZohoMixinBase):
    def _tasklist(self, project_id: str, tasklist_id: str) -> str:
        return f"{self._project(project_id)}/tasklists/{_seg(tasklist_id)}"

    def list_tasklists(
        self, project_id: str, name_contains: str | None = None, minimal: bool = True
    ) -> dict[str, Any]:
        """List tasklists of a project.

        Large projects return hundreds of tasklists, so the result can be
        narrowed by a case-insensitive name match and projected down to
        ``{id, name}`` pairs (the default).
        """
        data = self.request(f"{self._project(project_id)}/tasklists")
        tasklists = filter_by_name(data.get("tasklists") or [], name_contains)
        if minimal:
            return {"tasklists": minimal_tasklists(tasklists)}
        return {**data, "tasklists": tasklists}

    def create_tasklist(self, project_id: str, name: str, **fields: Any) -> Any:
        body = drop_none({"name": name, **fields})
        return self.request(f"{self._project(project_id)}/tasklists", "POST", body)

    def update_tasklist(self, project_id: str, tasklist_id: str, **fields: Any) -> Any:
        body = drop_none(fields)
        if not body:
            raise ValueError("update_tasklist needs at least one field to change")
        return self.request(self._tasklist(project_id, tasklist_id), "PATCH", body)

    def delete_tasklist(self, project_id: str, tasklist_id: str) -> Any:
        return self.request(self._tasklist(project_id, tasklist_id), "DELETE")
