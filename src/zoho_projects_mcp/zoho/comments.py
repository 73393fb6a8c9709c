"""Module for Zoho task comment operations."""

from __future__ import annotations

import logging
from typing import Any

from .base import ZohoMixinBase, _seg
from .utils import comments_since, minimal_comment

logger = logging.getLogger("zoho-projects-mcp.zoho.comments")


class CommentsMixin(ZohoMixinBase):
    def _comments(self, project_id: str, task_id: str) -> str:
        return f"{self._project(project_id)}/tasks/{_seg(task_id)}/comments"

    def list_task_comments(
        self,
        project_id: str,
        task_id: str,
        minimal: bool = True,
        since: str | None = None,
    ) -> Any:
        """List comments on a task.

        Args:
            minimal: Project each comment down to id, time, author, text and
                attachment stubs.
            since: ISO-8601 instant; only comments created or updated after
                it are kept.
        """
        data = self.request(self._comments(project_id, task_id))
        comments = data.get("comments") or []
        if since:
            comments = comments_since(comments, since)
        if minimal:
            return {"comments": [minimal_comment(c) for c in comments]}
        if since:
            return {**data, "comments": comments}
        return data

    def create_task_comment(self, project_id: str, task_id: str, content: str) -> Any:
        return self.request(
            self._comments(project_id, task_id), "POST", {"comment": content}
        )

    def update_task_comment(
        self, project_id: str, task_id: str, comment_id: str, content: str
    ) -> Any:
        return self.request(
            f"{self._comments(project_id, task_id)}/{_seg(comment_id)}",
            "PATCH",
            {"comment": content},
        )

    def delete_task_comment(self, project_id: str, task_id: str, comment_id: str) -> Any:
        return self.request(
            f"{self._comments(project_id, task_id)}/{_seg(comment_id)}", "DELETE"
        )
