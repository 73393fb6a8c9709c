"""Module for Zoho task operations."""

from __future__ import annotations

import logging
from typing import Any

from .base import ZohoMixinBase, _seg
from .utils import drop_none, page_params

logger = logging.getLogger("zoho-projects-mcp.zoho.tasks")


class TasksMixin(ZohoMixinBase):
    """Mixin for task operations at portal, project and tasklist scope."""

    def _task(self, project_id: str, task_id: str) -> str:
        return f"{self._project(project_id)}/tasks/{_seg(task_id)}"

    def list_tasks(
        self,
        project_id: str | None = None,
        page: int = 1,
        per_page: int = 10,
        sort_by: str | None = None,
    ) -> Any:
        """List tasks of one project, or across the portal without ``project_id``.

        Args:
            sort_by: ``ASC(field)`` or ``DESC(field)`` over ``last_modified_time``
                or ``created_time``.
        """
        return self.request(
            f"{self._scope(project_id)}/tasks", params=page_params(page, per_page, sort_by)
        )

    def list_tasks_in_tasklist(
        self,
        project_id: str,
        tasklist_id: str,
        page: int = 1,
        per_page: int = 100,
        sort_by: str | None = None,
    ) -> Any:
        return self.request(
            f"{self._project(project_id)}/tasklists/{_seg(tasklist_id)}/tasks",
            params=page_params(page, per_page, sort_by),
        )

    def get_task(self, project_id: str, task_id: str) -> Any:
        return self.request(self._task(project_id, task_id))

    def create_task(
        self,
        project_id: str,
        name: str,
        tasklist_id: str | None = None,
        **fields: Any,
    ) -> Any:
        body = drop_none({"name": name, **fields})
        if tasklist_id:
            # The API takes a tasklist object, not a bare id.
            body["tasklist"] = {"id": tasklist_id}
        return self.request(f"{self._project(project_id)}/tasks", "POST", body)

    def update_task(self, project_id: str, task_id: str, **fields: Any) -> Any:
        body = drop_none(fields)
        if not body:
            raise ValueError("update_task needs at least one field to change")
        return self.request(self._task(project_id, task_id), "PATCH", body)

    def delete_task(self, project_id: str, task_id: str) -> Any:
        return self.request(self._task(project_id, task_id), "DELETE")
