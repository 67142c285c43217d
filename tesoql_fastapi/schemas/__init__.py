"""Pydantic request/response schemas."""

from tesoql_fastapi.schemas.common import GenericResponseModel, HttpErrorModel, new_response_model
from tesoql_fastapi.schemas.query import JsonMap, QueryPage, Row

__all__ = [
    "GenericResponseModel",
    "HttpErrorModel",
    "new_response_model",
    "JsonMap",
    "QueryPage",
    "Row",
]
