"""Success and error envelopes written back to the client."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class GenericResponseModel(BaseModel):
    """Standard envelope for a served query."""

    model_config = ConfigDict(populate_by_name=True)

    size: int = Field(..., description="Number of records in this response")
    total_count: int = Field(..., alias="totalCount", description="Records matching the query")
    data: list[dict[str, Any]] = Field(default_factory=list)


class HttpErrorModel(BaseModel):
    """Structured error body returned when a query fails."""

    model_config = ConfigDict(populate_by_name=True)

    code: int = Field(..., description="HTTP status code")
    key: str = Field(..., alias="error")
    message: str
    tesoql_err_code: int = Field(..., alias="tesoQlErrCode")

    def __str__(self) -> str:
        return f"{self.key}: {self.message}"


def new_response_model(
    total_count: int, size: int, data: list[dict[str, Any]]
) -> GenericResponseModel:
    return GenericResponseModel(size=size, total_count=total_count, data=data)
