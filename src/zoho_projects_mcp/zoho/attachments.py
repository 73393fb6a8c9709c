"""Module for Zoho attachment listing, deletion and download."""

from __future__ import annotations

import json
import logging
from typing import Any

from zoho_projects_mcp.auth.errors import RemoteApiError

from .base import ZohoMixinBase, _seg
from .client import BinaryPayload
from .utils import attachment_download_url, rewrite_inline_image_url

logger = logging.getLogger("zoho-projects-mcp.zoho.attachments")


class AttachmentsMixin(ZohoMixinBase):
    def _task_attachments(self, project_id: str, task_id: str) -> str:
        return f"{self._project(project_id)}/tasks/{_seg(task_id)}/attachments"

    def list_task_attachments(self, project_id: str, task_id: str) -> Any:
        return self.request(self._task_attachments(project_id, task_id))

    def delete_task_attachment(
        self, project_id: str, task_id: str, attachment_id: str
    ) -> Any:
        return self.request(
            f"{self._task_attachments(project_id, task_id)}/{_seg(attachment_id)}",
            "DELETE",
        )

    def download_inline_image(self, image_url: str) -> BinaryPayload:
        """Download an image embedded in a comment's HTML."""
        api_url = rewrite_inline_image_url(image_url)
        logger.debug("Downloading inline image via %s", api_url.split("?", 1)[0])
        return self.fetch_binary(api_url)

    def get_attachment(self, project_id: str, attachment_id: str) -> dict[str, Any]:
        """Return the metadata record of a project attachment."""
        data = self.request(
            f"{self._project(project_id)}/attachments/{_seg(attachment_id)}"
        )
        records = data.get("attachment") if isinstance(data, dict) else None
        if isinstance(records, list) and records:
            return records[0]
        return data

    def download_comment_attachment(
        self, project_id: str, attachment_id: str
    ) -> tuple[dict[str, Any], BinaryPayload]:
        """Resolve an attachment's download URL and fetch its bytes.

        Returns:
            The attachment metadata and the downloaded payload.

        Raises:
            RemoteApiError: If the metadata carries no usable download URL.
        """
        attachment = self.get_attachment(project_id, attachment_id)
        url = attachment_download_url(attachment)
        if not url:
            raise RemoteApiError(
                404,
                f"No download URL found for attachment. Details: {json.dumps(attachment)}",
            )
        return attachment, self.fetch_binary(url)
