"""Query descriptor and result page types."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

JsonMap = dict[str, Any]
"""A bound request body; keys are interpreted by the query collaborator."""

Row = dict[str, Any]


class QueryPage(BaseModel):
    """One page of rows returned by a query service."""

    rows: list[Row] = Field(default_factory=list)
    total_count: int = Field(..., description="Rows matching the query across all pages")
    size: int = Field(..., description="Rows in this page")
