"""Module for Zoho phase (milestone) operations."""

from __future__ import annotations

from typing import Any

from .base import ZohoMixinBase
from .utils import drop_none, page_params


class PhasesMixin(ZohoMixinBase):
    def list_phases(self, project_id: str, page: int = 1, per_page: int = 10) -> Any:
        return self.request(
            f"{self._project(project_id)}/phases", params=page_params(page, per_page)
        )

    def create_phase(self, project_id: str, name: str, **fields: Any) -> Any:
        body = drop_none({"name": name, **fields})
        return self.request(f"{self._project(project_id)}/phases", "POST", body)
