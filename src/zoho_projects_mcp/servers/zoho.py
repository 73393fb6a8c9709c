"""Zoho Projects FastMCP tool definitions.

Each tool resolves the shared :class:`~zoho_projects_mcp.zoho.ZohoFetcher`,
runs the blocking HTTP work in a worker thread and shapes the result into MCP
content. Tools are registered by :func:`register_zoho_tools`; the ``write``
tag marks every tool that changes data.
"""

import base64
import json
import logging
from functools import partial
from typing import Annotated, Any, Callable, Literal

from anyio import to_thread
from fastmcp import Context, FastMCP
from fastmcp.exceptions import ToolError
from mcp.types import ImageContent, TextContent
from pydantic import Field

from zoho_projects_mcp.auth.errors import ZohoAuthError
from zoho_projects_mcp.servers.dependencies import get_zoho_fetcher
from zoho_projects_mcp.utils.tools import should_include_tool
from zoho_projects_mcp.zoho.client import BinaryPayload
from zoho_projects_mcp.zoho.search import SearchModule
from zoho_projects_mcp.zoho.utils import normalize_image_mime

logger = logging.getLogger("zoho-projects-mcp.servers.zoho")

READ_TAGS = {"zoho", "read"}
WRITE_TAGS = {"zoho", "write"}

ProjectId = Annotated[str, Field(description="Project ID")]
TaskId = Annotated[str, Field(description="Task ID")]
TasklistId = Annotated[str, Field(description="Task list ID")]
Page = Annotated[int, Field(description="Page number", ge=1)]
PerPage = Annotated[int, Field(description="Items per page", ge=1)]
StartDate = Annotated[str | None, Field(description="Start date (YYYY-MM-DD)")]
EndDate = Annotated[str | None, Field(description="End date (YYYY-MM-DD)")]
SortBy = Annotated[
    str | None,
    Field(
        description=(
            "Sort criteria in format ASC(field) or DESC(field). Fields: "
            "last_modified_time, created_time. Example: DESC(last_modified_time)"
        )
    ),
]
OptionalProjectId = Annotated[
    str | None, Field(description="Project ID (optional for portal-level)")
]


def _dump(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def _image_content(payload: BinaryPayload) -> ImageContent:
    return ImageContent(
        type="image",
        data=base64.b64encode(payload.content).decode("ascii"),
        mimeType=normalize_image_mime(payload.content_type),
    )


async def _call(
    ctx: Context, tool_name: str, /, method: str | None = None, **kwargs: Any
) -> Any:
    """Run the fetcher method backing ``tool_name`` off the event loop.

    ``method`` names the fetcher method when it differs from the tool name.
    Dispatcher and argument errors are re-raised as ToolError naming the tool.
    """
    try:
        fetcher = get_zoho_fetcher(ctx)
        operation = getattr(fetcher, method or tool_name)
        return await to_thread.run_sync(partial(operation, **kwargs))
    except (ZohoAuthError, ValueError) as exc:
        logger.warning("Tool %s failed: %s", tool_name, exc)
        raise ToolError(f"Error executing {tool_name}: {exc}") from exc


# --------------------------------------------------------------------------- #
# Portals, users, feeds                                                       #
# --------------------------------------------------------------------------- #
async def list_portals(ctx: Context) -> str:
    """Retrieve all Zoho Projects portals."""
    data = await _call(ctx, "list_portals")
    return _dump(data)


async def get_portal(
    ctx: Context, portal_id: Annotated[str, Field(description="Portal ID")]
) -> str:
    """Get details of a specific portal."""
    data = await _call(ctx, "get_portal", portal_id=portal_id)
    return _dump(data)


async def list_users(ctx: Context, project_id: OptionalProjectId = None) -> str:
    """List users in a portal or project."""
    data = await _call(ctx, "list_users", project_id=project_id)
    return _dump(data)


async def list_feeds(
    ctx: Context,
    count: Annotated[int, Field(description="Number of feed items to return", ge=1)] = 20,
    viewkey: Annotated[str, Field(description="View key filter")] = "all",
) -> str:
    """List activity feed/stream for the portal (shows recent activity across all projects)."""
    data = await _call(ctx, "list_feeds", count=count, viewkey=viewkey)
    return _dump(data)


# --------------------------------------------------------------------------- #
# Projects                                                                    #
# --------------------------------------------------------------------------- #
async def list_projects(ctx: Context, page: Page = 1, per_page: PerPage = 10) -> str:
    """List all projects in a portal."""
    data = await _call(ctx, "list_projects", page=page, per_page=per_page)
    return _dump(data)


async def get_project(ctx: Context, project_id: ProjectId) -> str:
    """Get details of a specific project."""
    data = await _call(ctx, "get_project", project_id=project_id)
    return _dump(data)


async def create_project(
    ctx: Context,
    name: Annotated[str, Field(description="Project name")],
    description: Annotated[str | None, Field(description="Project description")] = None,
    start_date: StartDate = None,
    end_date: EndDate = None,
    is_public: Annotated[bool, Field(description="Is project public")] = False,
) -> str:
    """Create a new project."""
    data = await _call(
        ctx,
        "create_project",
        name=name,
        description=description,
        start_date=start_date,
        end_date=end_date,
        is_public=is_public,
    )
    return f"Project created successfully:\n{_dump(data)}"


async def update_project(
    ctx: Context,
    project_id: ProjectId,
    name: Annotated[str | None, Field(description="Project name")] = None,
    description: Annotated[str | None, Field(description="Project description")] = None,
    start_date: StartDate = None,
    end_date: EndDate = None,
    status: Annotated[
        Literal["active", "template", "archived"] | None,
        Field(description="Project status"),
    ] = None,
) -> str:
    """Update an existing project."""
    data = await _call(
        ctx,
        "update_project",
        project_id=project_id,
        name=name,
        description=description,
        start_date=start_date,
        end_date=end_date,
        status=status,
    )
    return f"Project updated successfully:\n{_dump(data)}"


async def delete_project(ctx: Context, project_id: ProjectId) -> str:
    """Delete a project (moves to trash)."""
    data = await _call(ctx, "delete_project", method="trash_project", project_id=project_id)
    return f"Project moved to trash successfully:\n{_dump(data)}"


# --------------------------------------------------------------------------- #
# Tasks                                                                       #
# --------------------------------------------------------------------------- #
TaskPriority = Annotated[
    Literal["none", "low", "medium", "high"] | None, Field(description="Task priority")
]


async def list_tasks(
    ctx: Context,
    project_id: OptionalProjectId = None,
    page: Page = 1,
    per_page: PerPage = 10,
    sort_by: SortBy = None,
) -> str:
    """List tasks from a project or portal."""
    data = await _call(
        ctx,
        "list_tasks",
        project_id=project_id,
        page=page,
        per_page=per_page,
        sort_by=sort_by,
    )
    return _dump(data)


async def get_task(ctx: Context, project_id: ProjectId, task_id: TaskId) -> str:
    """Get details of a specific task."""
    data = await _call(ctx, "get_task", project_id=project_id, task_id=task_id)
    return _dump(data)


async def create_task(
    ctx: Context,
    project_id: ProjectId,
    name: Annotated[str, Field(description="Task name")],
    tasklist_id: Annotated[
        str | None,
        Field(description="Task list ID (required if project has no default task list)"),
    ] = None,
    description: Annotated[str | None, Field(description="Task description")] = None,
    priority: TaskPriority = None,
    start_date: StartDate = None,
    end_date: EndDate = None,
    assignee_zpuid: Annotated[str | None, Field(description="Assignee user ZPUID")] = None,
) -> str:
    """Create a new task in a project."""
    data = await _call(
        ctx,
        "create_task",
        project_id=project_id,
        name=name,
        tasklist_id=tasklist_id,
        description=description,
        priority=priority,
        start_date=start_date,
        end_date=end_date,
        assignee_zpuid=assignee_zpuid,
    )
    return f"Task created successfully:\n{_dump(data)}"


async def update_task(
    ctx: Context,
    project_id: ProjectId,
    task_id: TaskId,
    name: Annotated[str | None, Field(description="Task name")] = None,
    description: Annotated[str | None, Field(description="Task description")] = None,
    priority: TaskPriority = None,
    start_date: StartDate = None,
    end_date: EndDate = None,
) -> str:
    """Update a task."""
    data = await _call(
        ctx,
        "update_task",
        project_id=project_id,
        task_id=task_id,
        name=name,
        description=description,
        priority=priority,
        start_date=start_date,
        end_date=end_date,
    )
    return f"Task updated successfully:\n{_dump(data)}"


async def delete_task(ctx: Context, project_id: ProjectId, task_id: TaskId) -> str:
    """Delete a task."""
    data = await _call(
        ctx,
        "delete_task",
        project_id=project_id,
        task_id=task_id,
    )
    return f"Task deleted successfully:\n{_dump(data)}"


async def list_tasks_in_tasklist(
    ctx: Context,
    project_id: ProjectId,
    tasklist_id: TasklistId,
    page: Page = 1,
    per_page: PerPage = 100,
    sort_by: SortBy = None,
) -> str:
    """List all tasks in a specific tasklist."""
    data = await _call(
        ctx,
        "list_tasks_in_tasklist",
        project_id=project_id,
        tasklist_id=tasklist_id,
        page=page,
        per_page=per_page,
        sort_by=sort_by,
    )
    return _dump(data)


# --------------------------------------------------------------------------- #
# Issues                                                                      #
# --------------------------------------------------------------------------- #
IssueId = Annotated[str, Field(description="Issue ID")]
Severity = Annotated[
    Literal["minor", "major", "critical"] | None, Field(description="Issue severity")
]


async def list_issues(
    ctx: Context,
    project_id: OptionalProjectId = None,
    page: Page = 1,
    per_page: PerPage = 10,
) -> str:
    """List issues from a project or portal."""
    data = await _call(
        ctx,
        "list_issues",
        project_id=project_id,
        page=page,
        per_page=per_page,
    )
    return _dump(data)


async def get_issue(ctx: Context, project_id: ProjectId, issue_id: IssueId) -> str:
    """Get details of a specific issue."""
    data = await _call(
        ctx,
        "get_issue",
        project_id=project_id,
        issue_id=issue_id,
    )
    return _dump(data)


async def create_issue(
    ctx: Context,
    project_id: ProjectId,
    title: Annotated[str, Field(description="Issue title")],
    description: Annotated[str | None, Field(description="Issue description")] = None,
    severity: Severity = None,
    due_date: Annotated[str | None, Field(description="Due date (YYYY-MM-DD)")] = None,
) -> str:
    """Create a new issue."""
    data = await _call(
        ctx,
        "create_issue",
        project_id=project_id,
        title=title,
        description=description,
        severity=severity,
        due_date=due_date,
    )
    return f"Issue created successfully:\n{_dump(data)}"


async def update_issue(
    ctx: Context,
    project_id: ProjectId,
    issue_id: IssueId,
    title: Annotated[str | None, Field(description="Issue title")] = None,
    description: Annotated[str | None, Field(description="Issue description")] = None,
    severity: Severity = None,
) -> str:
    """Update an issue."""
    data = await _call(
        ctx,
        "update_issue",
        project_id=project_id,
        issue_id=issue_id,
        title=title,
        description=description,
        severity=severity,
    )
    return f"Issue updated successfully:\n{_dump(data)}"


# --------------------------------------------------------------------------- #
# Phases                                                                      #
# --------------------------------------------------------------------------- #
async def list_phases(
    ctx: Context, project_id: ProjectId, page: Page = 1, per_page: PerPage = 10
) -> str:
    """List phases/milestones from a project."""
    data = await _call(
        ctx,
        "list_phases",
        project_id=project_id,
        page=page,
        per_page=per_page,
    )
    return _dump(data)


async def create_phase(
    ctx: Context,
    project_id: ProjectId,
    name: Annotated[str, Field(description="Phase name")],
    start_date: StartDate = None,
    end_date: EndDate = None,
    owner_zpuid: Annotated[str | None, Field(description="Owner user ZPUID")] = None,
) -> str:
    """Create a new phase/milestone."""
    data = await _call(
        ctx,
        "create_phase",
        project_id=project_id,
        name=name,
        start_date=start_date,
        end_date=end_date,
        owner_zpuid=owner_zpuid,
    )
    return f"Phase created successfully:\n{_dump(data)}"


# --------------------------------------------------------------------------- #
# Search                                                                      #
# --------------------------------------------------------------------------- #
async def search(
    ctx: Context,
    search_term: Annotated[str, Field(description="Search term/query")],
    project_id: Annotated[
        str | None, Field(description="Project ID (optional for portal-level search)")
    ] = None,
    module: Annotated[SearchModule, Field(description="Module to search in")] = "all",
    page: Page = 1,
    per_page: PerPage = 10,
) -> str:
    """Search across portal or project."""
    data = await _call(
        ctx,
        "search",
        search_term=search_term,
        project_id=project_id,
        module=module,
        page=page,
        per_page=per_page,
    )
    return _dump(data)


# --------------------------------------------------------------------------- #
# Tasklists                                                                   #
# --------------------------------------------------------------------------- #
async def list_tasklists(
    ctx: Context,
    project_id: ProjectId,
    name_contains: Annotated[
        str | None,
        Field(
            description=(
                "Filter tasklists where name contains this string (case-insensitive). "
                "RECOMMENDED to avoid huge responses."
            )
        ),
    ] = None,
    minimal: Annotated[
        bool, Field(description="Return minimal response (id, name only). Default: true")
    ] = True,
) -> str:
    """List all task lists in a project. Use name_contains to filter by name and avoid huge responses."""
    data = await _call(
        ctx,
        "list_tasklists",
        project_id=project_id,
        name_contains=name_contains,
        minimal=minimal,
    )
    return _dump(data)


async def create_tasklist(
    ctx: Context,
    project_id: ProjectId,
    name: Annotated[str, Field(description="Task list name")],
    flag: Annotated[
        Literal["internal", "external"] | None, Field(description="Task list visibility")
    ] = None,
    milestone_id: Annotated[str | None, Field(description="Associated milestone ID")] = None,
) -> str:
    """Create a new task list in a project."""
    data = await _call(
        ctx,
        "create_tasklist",
        project_id=project_id,
        name=name,
        flag=flag,
        milestone_id=milestone_id,
    )
    return f"Task list created successfully:\n{_dump(data)}"


async def update_tasklist(
    ctx: Context,
    project_id: ProjectId,
    tasklist_id: TasklistId,
    name: Annotated[str | None, Field(description="Task list name")] = None,
    status: Annotated[
        Literal["active", "completed"] | None, Field(description="Task list status")
    ] = None,
) -> str:
    """Update a task list."""
    data = await _call(
        ctx,
        "update_tasklist",
        project_id=project_id,
        tasklist_id=tasklist_id,
        name=name,
        status=status,
    )
    return f"Task list updated successfully:\n{_dump(data)}"


async def delete_tasklist(ctx: Context, project_id: ProjectId, tasklist_id: TasklistId) -> str:
    """Delete a task list."""
    data = await _call(
        ctx,
        "delete_tasklist",
        project_id=project_id,
        tasklist_id=tasklist_id,
    )
    return f"Task list deleted successfully:\n{_dump(data)}"


# --------------------------------------------------------------------------- #
# Comments                                                                    #
# --------------------------------------------------------------------------- #
CommentId = Annotated[str, Field(description="Comment ID")]


async def list_task_comments(
    ctx: Context,
    project_id: ProjectId,
    task_id: TaskId,
    minimal: Annotated[
        bool,
        Field(
            description=(
                "Return minimal response (id, created_time, author, comment, "
                "attachments[{id,name,type}]). Set to false for full response. Default: true"
            )
        ),
    ] = True,
    since: Annotated[
        str | None,
        Field(
            description=(
                "Only return comments created or modified after this ISO date "
                "(e.g., 2026-01-14T00:00:00Z). Useful for incremental checks."
            )
        ),
    ] = None,
) -> str:
    """List all comments on a task."""
    data = await _call(
        ctx,
        "list_task_comments",
        project_id=project_id,
        task_id=task_id,
        minimal=minimal,
        since=since,
    )
    return _dump(data)


async def create_task_comment(
    ctx: Context,
    project_id: ProjectId,
    task_id: TaskId,
    content: Annotated[str, Field(description="Comment content (can include HTML)")],
) -> str:
    """Add a comment to a task."""
    data = await _call(
        ctx,
        "create_task_comment",
        project_id=project_id,
        task_id=task_id,
        content=content,
    )
    return f"Comment added successfully:\n{_dump(data)}"


async def update_task_comment(
    ctx: Context,
    project_id: ProjectId,
    task_id: TaskId,
    comment_id: CommentId,
    content: Annotated[str, Field(description="Updated comment content")],
) -> str:
    """Update a comment on a task."""
    data = await _call(
        ctx,
        "update_task_comment",
        project_id=project_id,
        task_id=task_id,
        comment_id=comment_id,
        content=content,
    )
    return f"Comment updated successfully:\n{_dump(data)}"


async def delete_task_comment(
    ctx: Context, project_id: ProjectId, task_id: TaskId, comment_id: CommentId
) -> str:
    """Delete a comment from a task."""
    data = await _call(
        ctx,
        "delete_task_comment",
        project_id=project_id,
        task_id=task_id,
        comment_id=comment_id,
    )
    return f"Comment deleted successfully:\n{_dump(data)}"


# --------------------------------------------------------------------------- #
# Attachments                                                                 #
# --------------------------------------------------------------------------- #
AttachmentId = Annotated[str, Field(description="Attachment ID")]


async def list_task_attachments(ctx: Context, project_id: ProjectId, task_id: TaskId) -> str:
    """List all attachments on a task."""
    data = await _call(
        ctx,
        "list_task_attachments",
        project_id=project_id,
        task_id=task_id,
    )
    return _dump(data)


async def delete_task_attachment(
    ctx: Context, project_id: ProjectId, task_id: TaskId, attachment_id: AttachmentId
) -> str:
    """Delete an attachment from a task."""
    data = await _call(
        ctx,
        "delete_task_attachment",
        project_id=project_id,
        task_id=task_id,
        attachment_id=attachment_id,
    )
    return f"Attachment deleted successfully:\n{_dump(data)}"


async def download_inline_image(
    ctx: Context,
    image_url: Annotated[
        str,
        Field(
            description=(
                "The full inline image URL (e.g., "
                "https://projects.zoho.com/viewInlineAttachment/image?file=projects-...)"
            )
        ),
    ],
):
    """Download an inline image from a comment. The image URL can be found in the 'comment' field of task comments as an <img> tag with src containing 'viewInlineAttachment'. Returns the image as base64-encoded data."""
    payload = await _call(
        ctx,
        "download_inline_image",
        image_url=image_url,
    )
    return _image_content(payload)


async def download_comment_attachment(
    ctx: Context,
    project_id: ProjectId,
    attachment_id: Annotated[
        str, Field(description="Attachment ID from the comment's attachments array")
    ],
):
    """Download an attachment from a task comment. Use the attachment_id from the 'attachments' array in task comments. Returns the file as base64-encoded data."""
    attachment, payload = await _call(
        ctx,
        "download_comment_attachment",
        project_id=project_id,
        attachment_id=attachment_id,
    )
    content_type = payload.content_type or attachment.get("type") or "application/octet-stream"
    if "image/" in content_type:
        return _image_content(BinaryPayload(payload.content, content_type))
    return TextContent(
        type="text",
        text=_dump(
            {
                "filename": attachment.get("name"),
                "type": content_type,
                "size": attachment.get("size"),
                "data_base64": base64.b64encode(payload.content).decode("ascii"),
            }
        ),
    )


# --------------------------------------------------------------------------- #
# Registration                                                                #
# --------------------------------------------------------------------------- #
ZOHO_TOOLS: list[tuple[Callable[..., Any], set[str]]] = [
    (list_portals, READ_TAGS),
    (get_portal, READ_TAGS),
    (list_projects, READ_TAGS),
    (get_project, READ_TAGS),
    (create_project, WRITE_TAGS),
    (update_project, WRITE_TAGS),
    (delete_project, WRITE_TAGS),
    (list_tasks, READ_TAGS),
    (get_task, READ_TAGS),
    (create_task, WRITE_TAGS),
    (update_task, WRITE_TAGS),
    (delete_task, WRITE_TAGS),
    (list_issues, READ_TAGS),
    (get_issue, READ_TAGS),
    (create_issue, WRITE_TAGS),
    (update_issue, WRITE_TAGS),
    (list_phases, READ_TAGS),
    (create_phase, WRITE_TAGS),
    (search, READ_TAGS),
    (list_users, READ_TAGS),
    (list_tasklists, READ_TAGS),
    (create_tasklist, WRITE_TAGS),
    (update_tasklist, WRITE_TAGS),
    (delete_tasklist, WRITE_TAGS),
    (list_task_comments, READ_TAGS),
    (create_task_comment, WRITE_TAGS),
    (update_task_comment, WRITE_TAGS),
    (delete_task_comment, WRITE_TAGS),
    (list_task_attachments, READ_TAGS),
    (delete_task_attachment, WRITE_TAGS),
    (download_inline_image, READ_TAGS),
    (download_comment_attachment, READ_TAGS),
    (list_feeds, READ_TAGS),
    (list_tasks_in_tasklist, READ_TAGS),
]


def register_zoho_tools(
    server: FastMCP,
    *,
    read_only: bool = False,
    enabled_tools: list[str] | None = None,
) -> list[str]:
    """Register the Zoho tools on ``server`` and return the registered names.

    Tools tagged ``write`` are skipped in read-only mode; tools missing from
    ``enabled_tools`` (when given) are skipped as well.
    """
    registered = []
    for fn, tags in ZOHO_TOOLS:
        name = fn.__name__
        if not should_include_tool(name, enabled_tools):
            logger.debug("Excluding tool '%s' (not enabled)", name)
            continue
        if read_only and "write" in tags:
            logger.debug("Excluding tool '%s' due to read-only mode and 'write' tag", name)
            continue
        server.tool(name=name, tags=set(tags))(fn)
        registered.append(name)
    logger.debug("Registered %d Zoho tools: %s", len(registered), registered)
    return registered
