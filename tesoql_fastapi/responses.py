"""Error policy: how a failed query becomes an HTTP response."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Union

from fastapi import Request, Response
from fastapi.responses import JSONResponse

from tesoql_fastapi.schemas.common import GenericResponseModel, HttpErrorModel

logger = logging.getLogger("tesoql.http")

ErrorFunc = Callable[
    [Request, int, str, str, int],
    Union[Response, Awaitable[Response]],
]
"""``(request, status_code, key, message, tesoql_code) -> Response``."""


def derive_status(code: int) -> int:
    """Map an error code to its HTTP status (``code // 1000``).

    Codes whose leading digits are not a 4xx/5xx status map to 500.
    """
    status = code // 1000
    if 400 <= status <= 599:
        return status
    logger.warning("error code %d has no valid status class, using 500", code)
    return 500


def http_error(
    request: Request, status_code: int, key: str, message: str, tesoql_code: int
) -> Response:
    """Default error policy: write an ``HttpErrorModel`` with *status_code*.

    Pass a function with the same signature to ``TesoQLFastAPI`` to render
    errors differently.
    """
    err = HttpErrorModel(code=status_code, key=key, message=message, tesoql_err_code=tesoql_code)
    return JSONResponse(status_code=err.code, content=err.model_dump(by_alias=True))


def json_ok(model: GenericResponseModel) -> Response:
    return JSONResponse(status_code=200, content=model.model_dump(by_alias=True, mode="json"))
