"""Structured query errors shared by validation and execution.

Error codes carry their HTTP status class in the leading digits,
e.g. ``400002`` is a 400-class error and ``500001`` a 500-class one.
"""

from __future__ import annotations

# Binding
BINDING_ERR = "BINDING_ERR"
BINDING_ERR_CODE = 400000
BINDING_ERR_MSG = "Error encountered while binding the request payload!"

# Validation
INVALID_KEY = "INVALID_KEY"
INVALID_KEY_CODE = 400001
INVALID_FIELD = "INVALID_FIELD"
INVALID_FIELD_CODE = 400002
INVALID_OPERATOR = "INVALID_OPERATOR"
INVALID_OPERATOR_CODE = 400003
INVALID_PAGINATION = "INVALID_PAGINATION"
INVALID_PAGINATION_CODE = 400004
INVALID_SORT = "INVALID_SORT"
INVALID_SORT_CODE = 400005
INVALID_VALUE = "INVALID_VALUE"
INVALID_VALUE_CODE = 400006

# Execution
QUERY_EXEC_ERR = "QUERY_EXEC_ERR"
QUERY_EXEC_ERR_CODE = 500001


class QueryError(Exception):
    """Structured error raised by a query config or query service."""

    def __init__(self, code: int, error_type: str, message: str) -> None:
        super().__init__(f"{error_type}: {message}")
        self.code = code
        self.error_type = error_type
        self.message = message

    @property
    def error_class(self) -> int:
        """Coarse class of the error code (the HTTP-status-like part)."""
        return self.code // 1000

    def __repr__(self) -> str:
        return f"QueryError(code={self.code}, error_type={self.error_type!r}, message={self.message!r})"
