"""SQL-backed query configuration."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine

from tesoql_fastapi.engine.sql_service import SqlQueryService
from tesoql_fastapi.engine.validation import validate_descriptor
from tesoql_fastapi.schemas.query import JsonMap


@dataclass(frozen=True)
class QueryConfig:
    """Describes which table and fields a descriptor may touch.

    Built once at startup and shared read-only by every request.

    Attributes:
        engine: Async SQLAlchemy engine the queries run on.
        table: Table name.
        fields: JSON field name -> column name.  Rows come back keyed by
            the JSON names.
        default_limit: Page size when the descriptor has no ``limit``.
        max_limit: Largest ``limit`` a descriptor may ask for.
        filterable: JSON names allowed in ``filter``; ``None`` means all.
        sortable: JSON names allowed in ``sort``; ``None`` means all.
    """

    engine: AsyncEngine
    table: str
    fields: dict[str, str]
    default_limit: int = 20
    max_limit: int = 100
    filterable: frozenset[str] | None = None
    sortable: frozenset[str] | None = None

    def can_filter(self, name: str) -> bool:
        return name in self.fields and (self.filterable is None or name in self.filterable)

    def can_sort(self, name: str) -> bool:
        return name in self.fields and (self.sortable is None or name in self.sortable)

    def validate(self, descriptor: JsonMap) -> None:
        validate_descriptor(descriptor, self)

    def new_engine(self) -> SqlQueryService:
        return SqlQueryService(self)
