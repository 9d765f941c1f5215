"""
Collaborator-derived data: certification lookup results.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class CertificationSummary(BaseModel):
    """First company returned by a certification lookup.

    An empty summary (no categories, zero credentials) is what callers see
    when the lookup fails or the company is unknown.
    """

    model_config = ConfigDict(frozen=True)

    categories: list[str] = Field(default_factory=list)
    credential_count: int = 0
    raw: Optional[dict[str, Any]] = None

    @property
    def is_empty(self) -> bool:
        return not self.categories and self.credential_count == 0
