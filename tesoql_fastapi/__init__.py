"""Expose a TesoQL-style query config as a FastAPI endpoint."""

from tesoql_fastapi.adapter import TesoQLFastAPI
from tesoql_fastapi.engine import QueryConfig, QueryError
from tesoql_fastapi.responses import derive_status, http_error

__all__ = ["TesoQLFastAPI", "QueryConfig", "QueryError", "derive_status", "http_error"]
