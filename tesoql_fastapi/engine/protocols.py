"""Structural interfaces for the query collaborator.

The adapter only talks to these two protocols.  ``QueryConfig`` in
``tesoql_fastapi.engine.config`` is the bundled SQL implementation.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from tesoql_fastapi.schemas.query import JsonMap, QueryPage


@runtime_checkable
class QueryServiceProtocol(Protocol):
    async def get(self, descriptor: JsonMap) -> QueryPage:
        """Execute a validated descriptor.  Raises ``QueryError`` on failure."""
        ...


@runtime_checkable
class QueryConfigProtocol(Protocol):
    def validate(self, descriptor: JsonMap) -> None:
        """Check *descriptor* against this config.  Raises ``QueryError``."""
        ...

    def new_engine(self) -> QueryServiceProtocol:
        """Build the service that executes descriptors for this config."""
        ...
