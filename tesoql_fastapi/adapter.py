"""FastAPI integration: one POST endpoint in front of a query config."""

from __future__ import annotations

import inspect
import json
import logging
import math
import time

from fastapi import APIRouter, FastAPI, Request, Response

from tesoql_fastapi.engine.errors import (
    BINDING_ERR,
    BINDING_ERR_CODE,
    BINDING_ERR_MSG,
    QueryError,
)
from tesoql_fastapi.engine.protocols import QueryConfigProtocol
from tesoql_fastapi.responses import ErrorFunc, derive_status, http_error, json_ok
from tesoql_fastapi.schemas.common import new_response_model
from tesoql_fastapi.schemas.query import JsonMap

logger = logging.getLogger("tesoql.adapter")


def _reject_constant(name: str) -> float:
    raise ValueError(f"{name} is not valid JSON")


def _parse_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"number {text} is out of range")
    return value


async def bind_descriptor(request: Request) -> JsonMap:
    """Read the request body as a JSON object.

    An empty body binds to ``{}``.  Raises ``ValueError`` for a non-JSON
    content type, for anything strict JSON rejects (``NaN``, ``Infinity``,
    out-of-range numbers) and for a top level that is not an object.
    """
    body = await request.body()
    if not body:
        return {}
    media_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if media_type != "application/json":
        raise ValueError(f"unsupported media type '{media_type}'")
    descriptor = json.loads(body, parse_constant=_reject_constant, parse_float=_parse_float)
    if not isinstance(descriptor, dict):
        raise ValueError("request body must be a JSON object")
    return descriptor


class TesoQLFastAPI:
    """Serves queries for a ``QueryConfigProtocol`` over HTTP.

    Usage:
        app = FastAPI()
        tesoql = TesoQLFastAPI(config)
        tesoql.route(app, "/tesoql")

    Args:
        config: Query configuration; ``config.new_engine()`` is called once here.
        error_func: Optional error policy replacing ``http_error``.
    """

    def __init__(self, config: QueryConfigProtocol, error_func: ErrorFunc | None = None) -> None:
        self.config = config
        self.engine = config.new_engine()
        self.error_func: ErrorFunc = error_func or http_error

    def route(self, router: FastAPI | APIRouter, path: str) -> None:
        """Register ``handle`` for POST requests on *path*."""
        router.add_api_route(path, self.handle, methods=["POST"], response_model=None)

    async def _error(
        self, request: Request, status_code: int, key: str, message: str, code: int
    ) -> Response:
        logger.warning("query rejected status=%d error=%s code=%d", status_code, key, code)
        result = self.error_func(request, status_code, key, message, code)
        if inspect.isawaitable(result):
            result = await result
        return result

    async def _query_error(self, request: Request, err: QueryError) -> Response:
        return await self._error(
            request, derive_status(err.code), err.error_type, err.message, err.code
        )

    async def handle(self, request: Request) -> Response:
        """Bind, validate and execute one query, answering with JSON."""
        t0 = time.perf_counter()

        try:
            descriptor = await bind_descriptor(request)
        except ValueError:
            return await self._error(request, 400, BINDING_ERR, BINDING_ERR_MSG, BINDING_ERR_CODE)

        try:
            self.config.validate(descriptor)
        except QueryError as err:
            return await self._query_error(request, err)

        try:
            page = await self.engine.get(descriptor)
        except QueryError as err:
            return await self._query_error(request, err)

        elapsed = round((time.perf_counter() - t0) * 1000, 2)
        logger.info("query served size=%d total=%d ms=%.1f", page.size, page.total_count, elapsed)
        return json_ok(new_response_model(page.total_count, page.size, page.rows))
