"""Zoho Projects API module.

Composes the per-resource mixins into a single :class:`ZohoFetcher` sharing
one :class:`ZohoClient` (credential store, refresher, HTTP session).
"""

from .attachments import AttachmentsMixin
from .client import BinaryPayload, ZohoClient
from .comments import CommentsMixin
from .config import ZohoConfig
from .issues import IssuesMixin
from .phases import PhasesMixin
from .portals import PortalsMixin
from .projects import ProjectsMixin
from .search import SearchMixin
from .tasklists import TasklistsMixin
from .tasks import TasksMixin


class ZohoFetcher(
    PortalsMixin,
    ProjectsMixin,
    TasksMixin,
    IssuesMixin,
    PhasesMixin,
    SearchMixin,
    TasklistsMixin,
    CommentsMixin,
    AttachmentsMixin,
):
    """The main Zoho Projects client class providing access to all operations."""

    pass


__all__ = ["BinaryPayload", "ZohoClient", "ZohoConfig", "ZohoFetcher"]
