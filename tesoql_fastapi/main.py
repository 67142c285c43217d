"""FastAPI application serving the query endpoint.

Run with:
    python -m tesoql_fastapi.main
    # → POST http://localhost:8000/tesoql
    # → GET  http://localhost:8000/health
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tesoql_fastapi.adapter import TesoQLFastAPI
from tesoql_fastapi.config import Settings, parse_field_mapping, settings as default_settings
from tesoql_fastapi.db import create_engine
from tesoql_fastapi.engine.config import QueryConfig
from tesoql_fastapi.engine.protocols import QueryConfigProtocol
from tesoql_fastapi.middleware.request_context import RequestContextMiddleware, parse_cors_origins
from tesoql_fastapi.responses import ErrorFunc

logger = logging.getLogger("tesoql.main")


def query_config_from_settings(settings: Settings) -> QueryConfig:
    return QueryConfig(
        engine=create_engine(settings),
        table=settings.query_table,
        fields=parse_field_mapping(settings.query_fields),
        default_limit=settings.query_default_limit,
        max_limit=settings.query_max_limit,
    )


def create_app(
    query_config: QueryConfigProtocol | None = None,
    settings: Settings = default_settings,
    error_func: ErrorFunc | None = None,
) -> FastAPI:
    """Build the app; without *query_config* one is derived from *settings*."""
    owns_engine = query_config is None
    if query_config is None:
        query_config = query_config_from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Query server starting (env=%s, path=%s)", settings.app_env, settings.route_path)
        yield
        if owns_engine:
            await query_config.engine.dispose()
        logger.info("Query server shutting down")

    app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_cors_origins(settings.allowed_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware, log_requests=settings.enable_request_logging)

    @app.get("/health")
    async def health():
        return {"status": "ok", "version": settings.app_version}

    tesoql = TesoQLFastAPI(query_config, error_func)
    tesoql.route(app, settings.route_path)
    app.state.tesoql = tesoql
    return app


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=default_settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    uvicorn.run(
        create_app(),
        host=default_settings.fastapi_host,
        port=default_settings.fastapi_port,
    )
