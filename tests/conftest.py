"""Shared pytest fixtures – uses async SQLite for fast in-memory tests."""

from __future__ import annotations

from datetime import date

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import Column, Date, Integer, MetaData, String, Table
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from tesoql_fastapi.config import Settings
from tesoql_fastapi.engine.config import QueryConfig
from tesoql_fastapi.main import create_app

metadata = MetaData()

people = Table(
    "people",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("full_name", String(100), nullable=False),
    Column("age", Integer, nullable=False),
    Column("city", String(50), nullable=True),
    Column("joined", Date, nullable=False),
)

PEOPLE = [
    {"id": 1, "full_name": "Ada Yilmaz", "age": 34, "city": "Izmir", "joined": date(2021, 3, 1)},
    {"id": 2, "full_name": "Baris Kaya", "age": 17, "city": "Ankara", "joined": date(2022, 7, 15)},
    {"id": 3, "full_name": "Cem Demir", "age": 45, "city": "Izmir", "joined": date(2019, 1, 20)},
    {"id": 4, "full_name": "Deniz Sahin", "age": 29, "city": None, "joined": date(2023, 5, 9)},
    {"id": 5, "full_name": "Elif Ozturk", "age": 18, "city": "Istanbul", "joined": date(2020, 11, 30)},
]

FIELDS = {"id": "id", "name": "full_name", "age": "age", "city": "city", "joined": "joined"}


@pytest_asyncio.fixture
async def engine():
    """Create an async SQLite engine seeded with the ``people`` table."""
    eng = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool, echo=False)
    async with eng.begin() as conn:
        await conn.run_sync(metadata.create_all)
        await conn.execute(people.insert(), PEOPLE)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def query_config(engine):
    return QueryConfig(engine=engine, table="people", fields=FIELDS, default_limit=3, max_limit=50)


@pytest_asyncio.fixture
async def client(query_config):
    """HTTP client bound to an app serving ``query_config`` at /tesoql."""
    app = create_app(query_config, settings=Settings(route_path="/tesoql", enable_request_logging=False))
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
