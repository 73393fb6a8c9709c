"""Unit tests for the response shaping helpers in zoho.utils."""

from datetime import datetime, timezone

import pytest

from zoho_projects_mcp.zoho.utils import (
    attachment_download_url,
    comments_since,
    minimal_comment,
    normalize_image_mime,
    parse_zoho_time,
    rewrite_inline_image_url,
)


def test_parse_zoho_time_variants() -> None:
    expected = datetime(2026, 3, 1, 10, 0, tzinfo=timezone.utc)
    assert parse_zoho_time("2026-03-01T10:00:00Z") == expected
    assert parse_zoho_time("2026-03-01T10:00:00") == expected
    assert parse_zoho_time("2026-03-01T12:00:00+02:00") == expected
    assert parse_zoho_time("not a date") is None
    assert parse_zoho_time(None) is None


def test_comments_since_uses_created_or_updated() -> None:
    comments = [
        {"id": 1, "created_time": "2026-01-01T00:00:00Z"},
        {"id": 2, "created_time": "2026-01-01T00:00:00Z", "updated_time": "2026-02-02T00:00:00Z"},
        {"id": 3, "created_time": "2026-02-01T00:00:00Z"},
        {"id": 4},
    ]
    kept = comments_since(comments, "2026-02-01T00:00:00Z")
    # Strictly after the threshold.
    assert [c["id"] for c in kept] == [2]


def test_comments_since_invalid_threshold() -> None:
    with pytest.raises(ValueError):
        comments_since([], "last week")


def test_minimal_comment_author_fallback() -> None:
    assert minimal_comment({"id": "c"})["author"] == "Unknown"
    assert minimal_comment({"created_by": {"full_name": "Kim"}})["author"] == "Kim"
    assert minimal_comment({"id": "c"})["attachments"] == []


def test_rewrite_inline_image_url() -> None:
    url = "https://projects.zoho.com/viewInlineAttachment/x"
    assert rewrite_inline_image_url(url) == "https://projects.zoho.com/viewInlineAttachmentForApi/x"
    other = "https://projects.zoho.com/other/x"
    assert rewrite_inline_image_url(other) == other


@pytest.mark.parametrize(
    ("content_type", "expected"),
    [
        ("image/jpeg", "image/jpeg"),
        ("image/JPG; charset=binary", "image/jpeg"),
        ("image/gif", "image/gif"),
        ("image/webp", "image/webp"),
        ("image/png", "image/png"),
        ("", "image/png"),
    ],
)
def test_normalize_image_mime(content_type: str, expected: str) -> None:
    assert normalize_image_mime(content_type) == expected


def test_attachment_download_url_precedence() -> None:
    assert (
        attachment_download_url({"preview_url": "p", "download_url": "d", "permanent_url": "u"})
        == "u"
    )
    assert attachment_download_url({"preview_url": "p", "download_url": "d"}) == "p"
    assert attachment_download_url({"download_url": "d"}) == "d"
    assert (
        attachment_download_url({"third_party_file_id": "f1", "app_domain": "workdrive"})
        == "https://workdrive.zoho.com/api/v1/download/f1"
    )
    assert attachment_download_url({"third_party_file_id": "f1", "app_domain": "other"}) is None
