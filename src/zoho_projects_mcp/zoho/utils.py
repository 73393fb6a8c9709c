"""Pure data transforms applied to Zoho responses and arguments."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Iterable

logger = logging.getLogger("zoho-projects-mcp.zoho.utils")

_INLINE_VIEW_SEGMENT = "/viewInlineAttachment/"
_INLINE_API_SEGMENT = "/viewInlineAttachmentForApi/"


def drop_none(data: dict[str, Any]) -> dict[str, Any]:
    """Return ``data`` without keys whose value is ``None``."""
    return {k: v for k, v in data.items() if v is not None}


def page_params(
    page: int = 1, per_page: int = 10, sort_by: str | None = None
) -> dict[str, Any]:
    """Query parameters for Zoho's page/per_page pagination."""
    return drop_none({"page": page, "per_page": per_page, "sort_by": sort_by})


def parse_zoho_time(value: str | None) -> datetime | None:
    """Parse an ISO-8601 timestamp as returned by Zoho (``Z`` suffix allowed).

    Naive values are taken as UTC. Returns None for empty or unparsable input.
    """
    if not value:
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        logger.debug("Unparsable timestamp %r", value)
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def filter_by_name(items: Iterable[dict[str, Any]], needle: str | None) -> list[dict[str, Any]]:
    """Keep items whose ``name`` contains ``needle`` (case-insensitive)."""
    if not needle:
        return list(items)
    lowered = needle.lower()
    return [i for i in items if i.get("name") and lowered in str(i["name"]).lower()]


def minimal_tasklists(tasklists: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    return [{"id": t.get("id"), "name": t.get("name")} for t in tasklists]


def comments_since(comments: Iterable[dict[str, Any]], since: str) -> list[dict[str, Any]]:
    """Keep comments created or updated strictly after ``since``.

    Raises:
        ValueError: If ``since`` is not an ISO-8601 timestamp.
    """
    threshold = parse_zoho_time(since)
    if threshold is None:
        raise ValueError(f"Invalid 'since' timestamp: {since!r}")

    kept = []
    for comment in comments:
        created = parse_zoho_time(comment.get("created_time"))
        updated = parse_zoho_time(comment.get("updated_time"))
        if (created and created > threshold) or (updated and updated > threshold):
            kept.append(comment)
    return kept


def minimal_comment(comment: dict[str, Any]) -> dict[str, Any]:
    author = comment.get("created_by") or {}
    return {
        "id": comment.get("id"),
        "created_time": comment.get("created_time"),
        "author": author.get("name") or author.get("full_name") or "Unknown",
        "comment": comment.get("comment"),
        "attachments": [
            {"id": a.get("attachment_id"), "name": a.get("name"), "type": a.get("type")}
            for a in comment.get("attachments") or []
        ],
    }


def rewrite_inline_image_url(url: str) -> str:
    """Point an inline-image URL at the OAuth-accepting endpoint.

    The browser ``viewInlineAttachment`` path needs session cookies; the
    ``viewInlineAttachmentForApi`` variant accepts the bearer token.
    """
    if _INLINE_VIEW_SEGMENT in url:
        return url.replace(_INLINE_VIEW_SEGMENT, _INLINE_API_SEGMENT, 1)
    return url


def normalize_image_mime(content_type: str | None) -> str:
    """Map a Content-Type header to one of the MIME types MCP clients render."""
    ctype = (content_type or "").lower()
    if "jpeg" in ctype or "jpg" in ctype:
        return "image/jpeg"
    if "gif" in ctype:
        return "image/gif"
    if "webp" in ctype:
        return "image/webp"
    return "image/png"


def attachment_download_url(attachment: dict[str, Any]) -> str | None:
    """Pick the URL an attachment's bytes can be fetched from."""
    url = (
        attachment.get("permanent_url")
        or attachment.get("preview_url")
        or attachment.get("download_url")
    )
    if url:
        return url
    file_id = attachment.get("third_party_file_id")
    if file_id and attachment.get("app_domain") == "workdrive":
        return f"https://workdrive.zoho.com/api/v1/download/{file_id}"
    return None
