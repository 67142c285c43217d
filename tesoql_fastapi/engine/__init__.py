"""Query collaborator: protocols, structured errors and the SQL backend."""

from tesoql_fastapi.engine.config import QueryConfig
from tesoql_fastapi.engine.errors import QueryError
from tesoql_fastapi.engine.protocols import QueryConfigProtocol, QueryServiceProtocol
from tesoql_fastapi.engine.sql_service import SqlQueryService

__all__ = [
    "QueryConfig",
    "QueryError",
    "QueryConfigProtocol",
    "QueryServiceProtocol",
    "SqlQueryService",
]
