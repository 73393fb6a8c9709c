from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from zoho_projects_mcp.zoho import ZohoFetcher


@dataclass(frozen=True)
class MainAppContext:
    """
    Context published by the server lifespan. Holds the single fetcher whose
    credential store lives for the whole process.
    """

    zoho_fetcher: ZohoFetcher | None = None
