"""Descriptor validation for the SQL backend.

A descriptor may carry these keys, all optional::

    {
        "fields": ["name", "age"],
        "filter": {"age__gt": 18, "city": "Izmir"},
        "sort": ["-age", "name"],
        "limit": 20,
        "offset": 0
    }

Filter keys are ``<field>`` (equality) or ``<field>__<op>``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from tesoql_fastapi.engine.errors import (
    INVALID_FIELD,
    INVALID_FIELD_CODE,
    INVALID_KEY,
    INVALID_KEY_CODE,
    INVALID_OPERATOR,
    INVALID_OPERATOR_CODE,
    INVALID_PAGINATION,
    INVALID_PAGINATION_CODE,
    INVALID_SORT,
    INVALID_SORT_CODE,
    INVALID_VALUE,
    INVALID_VALUE_CODE,
    QueryError,
)
from tesoql_fastapi.schemas.query import JsonMap

if TYPE_CHECKING:
    from tesoql_fastapi.engine.config import QueryConfig

ALLOWED_KEYS = frozenset({"fields", "filter", "sort", "limit", "offset"})

SCALAR_OPERATORS = frozenset({"eq", "ne", "gt", "gte", "lt", "lte"})
OPERATORS = SCALAR_OPERATORS | {"in", "like", "isnull"}

_SCALAR_TYPES = (str, int, float, bool)

# Signed 64-bit range; larger integers cannot be bound as SQL parameters.
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def split_filter_key(key: str) -> tuple[str, str]:
    """Split ``"age__gt"`` into ``("age", "gt")``; bare names mean ``eq``."""
    name, sep, op = key.rpartition("__")
    if not sep:
        return key, "eq"
    return name, op


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_scalar(value: Any) -> bool:
    if _is_int(value):
        return INT64_MIN <= value <= INT64_MAX
    return isinstance(value, _SCALAR_TYPES)


def _validate_fields(value: Any, config: QueryConfig) -> None:
    if not isinstance(value, list) or not value:
        raise QueryError(INVALID_FIELD_CODE, INVALID_FIELD, "fields must be a non-empty list")
    seen: set[str] = set()
    for name in value:
        if not isinstance(name, str) or name not in config.fields:
            raise QueryError(INVALID_FIELD_CODE, INVALID_FIELD, f"Unknown field '{name}'")
        if name in seen:
            raise QueryError(INVALID_FIELD_CODE, INVALID_FIELD, f"Duplicate field '{name}'")
        seen.add(name)


def _validate_filter_value(name: str, op: str, value: Any) -> None:
    if op in SCALAR_OPERATORS:
        ok = (value is None and op in ("eq", "ne")) or _is_scalar(value)
    elif op == "in":
        ok = isinstance(value, list) and bool(value) and all(_is_scalar(v) for v in value)
    elif op == "like":
        ok = isinstance(value, str)
    else:  # isnull
        ok = isinstance(value, bool)
    if not ok:
        raise QueryError(
            INVALID_VALUE_CODE,
            INVALID_VALUE,
            f"Invalid value for filter '{name}__{op}'",
        )


def _validate_filter(value: Any, config: QueryConfig) -> None:
    if not isinstance(value, dict):
        raise QueryError(INVALID_VALUE_CODE, INVALID_VALUE, "filter must be an object")
    for key, operand in value.items():
        name, op = split_filter_key(key)
        if op not in OPERATORS:
            raise QueryError(
                INVALID_OPERATOR_CODE, INVALID_OPERATOR, f"Unknown operator '{op}' in '{key}'"
            )
        if not config.can_filter(name):
            raise QueryError(
                INVALID_FIELD_CODE, INVALID_FIELD, f"Field '{name}' cannot be filtered"
            )
        _validate_filter_value(name, op, operand)


def normalize_sort(value: Any) -> list[str]:
    """Return the sort entries as a list; a single string is one entry."""
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return value
    raise QueryError(INVALID_SORT_CODE, INVALID_SORT, "sort must be a string or a list")


def _validate_sort(value: Any, config: QueryConfig) -> None:
    for entry in normalize_sort(value):
        if not isinstance(entry, str) or not entry.lstrip("-"):
            raise QueryError(INVALID_SORT_CODE, INVALID_SORT, f"Invalid sort entry '{entry}'")
        name = entry[1:] if entry.startswith("-") else entry
        if not config.can_sort(name):
            raise QueryError(INVALID_SORT_CODE, INVALID_SORT, f"Field '{name}' cannot be sorted")


def _validate_pagination(descriptor: JsonMap, config: QueryConfig) -> None:
    if "limit" in descriptor:
        limit = descriptor["limit"]
        if not _is_int(limit) or not 1 <= limit <= config.max_limit:
            raise QueryError(
                INVALID_PAGINATION_CODE,
                INVALID_PAGINATION,
                f"limit must be an integer between 1 and {config.max_limit}",
            )
    if "offset" in descriptor:
        offset = descriptor["offset"]
        if not _is_int(offset) or not 0 <= offset <= INT64_MAX:
            raise QueryError(
                INVALID_PAGINATION_CODE,
                INVALID_PAGINATION,
                f"offset must be an integer between 0 and {INT64_MAX}",
            )


def validate_descriptor(descriptor: JsonMap, config: QueryConfig) -> None:
    """Raise ``QueryError`` for the first rule *descriptor* breaks."""
    for key in descriptor:
        if key not in ALLOWED_KEYS:
            raise QueryError(INVALID_KEY_CODE, INVALID_KEY, f"Unknown key '{key}'")

    if "fields" in descriptor:
        _validate_fields(descriptor["fields"], config)
    if "filter" in descriptor:
        _validate_filter(descriptor["filter"], config)
    if "sort" in descriptor:
        _validate_sort(descriptor["sort"], config)
    _validate_pagination(descriptor, config)
