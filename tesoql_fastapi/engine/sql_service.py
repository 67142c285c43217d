"""Executes validated descriptors against a SQL table."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import ColumnElement, column, func, select, table
from sqlalchemy.exc import SQLAlchemyError

from tesoql_fastapi.engine.errors import QUERY_EXEC_ERR, QUERY_EXEC_ERR_CODE, QueryError
from tesoql_fastapi.engine.validation import normalize_sort, split_filter_key
from tesoql_fastapi.schemas.query import JsonMap, QueryPage

if TYPE_CHECKING:
    from tesoql_fastapi.engine.config import QueryConfig

logger = logging.getLogger("tesoql.sql")


class SqlQueryService:
    """Query service over a single table.

    Expects descriptors that already passed ``QueryConfig.validate``.
    """

    def __init__(self, config: QueryConfig) -> None:
        self._config = config
        columns = dict.fromkeys(config.fields.values())
        self._table = table(config.table, *(column(name) for name in columns))

    def _column(self, name: str) -> ColumnElement[Any]:
        return self._table.c[self._config.fields[name]]

    def _condition(self, key: str, value: Any) -> ColumnElement[bool]:
        name, op = split_filter_key(key)
        col = self._column(name)
        if op == "eq":
            return col.is_(None) if value is None else col == value
        if op == "ne":
            return col.is_not(None) if value is None else col != value
        if op == "gt":
            return col > value
        if op == "gte":
            return col >= value
        if op == "lt":
            return col < value
        if op == "lte":
            return col <= value
        if op == "in":
            return col.in_(value)
        if op == "like":
            return col.like(value)
        # isnull
        return col.is_(None) if value else col.is_not(None)

    async def get(self, descriptor: JsonMap) -> QueryPage:
        """Return one page of rows plus the total count for *descriptor*."""
        names = descriptor.get("fields") or list(self._config.fields)
        conditions = [self._condition(k, v) for k, v in descriptor.get("filter", {}).items()]

        stmt = select(*(self._column(n).label(n) for n in names)).select_from(self._table)
        count_stmt = select(func.count()).select_from(self._table)
        if conditions:
            stmt = stmt.where(*conditions)
            count_stmt = count_stmt.where(*conditions)

        for entry in normalize_sort(descriptor.get("sort", [])):
            if entry.startswith("-"):
                stmt = stmt.order_by(self._column(entry[1:]).desc())
            else:
                stmt = stmt.order_by(self._column(entry).asc())

        stmt = stmt.limit(descriptor.get("limit", self._config.default_limit))
        stmt = stmt.offset(descriptor.get("offset", 0))

        try:
            async with self._config.engine.connect() as conn:
                total_count = (await conn.execute(count_stmt)).scalar_one()
                result = await conn.execute(stmt)
                rows = [dict(r._mapping) for r in result]
        except SQLAlchemyError as exc:
            logger.exception("query failed table=%s", self._config.table)
            raise QueryError(
                QUERY_EXEC_ERR_CODE,
                QUERY_EXEC_ERR,
                "Error encountered while executing the query!",
            ) from exc

        return QueryPage(rows=rows, total_count=total_count, size=len(rows))
