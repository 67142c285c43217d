"""Envelope and default error policy tests."""

from __future__ import annotations

import json
from datetime import date

from tesoql_fastapi.engine.errors import QueryError
from tesoql_fastapi.responses import derive_status, http_error, json_ok
from tesoql_fastapi.schemas.common import HttpErrorModel, new_response_model


def test_response_model_aliases():
    model = new_response_model(total_count=12, size=2, data=[{"a": 1}, {"a": 2}])
    assert model.model_dump(by_alias=True) == {
        "size": 2,
        "totalCount": 12,
        "data": [{"a": 1}, {"a": 2}],
    }


def test_json_ok_serializes_dates():
    resp = json_ok(new_response_model(1, 1, [{"joined": date(2021, 3, 1)}]))
    assert resp.status_code == 200
    assert json.loads(resp.body) == {"size": 1, "totalCount": 1, "data": [{"joined": "2021-03-01"}]}


def test_http_error_shape():
    resp = http_error(None, 404, "NOT_FOUND", "no such table", 404001)
    assert resp.status_code == 404
    assert json.loads(resp.body) == {
        "code": 404,
        "error": "NOT_FOUND",
        "message": "no such table",
        "tesoQlErrCode": 404001,
    }


def test_http_error_model_str():
    err = HttpErrorModel(code=400, key="BINDING_ERR", message="bad body", tesoql_err_code=400000)
    assert str(err) == "BINDING_ERR: bad body"


def test_derive_status_uses_leading_digits():
    assert derive_status(400000) == 400
    assert derive_status(404123) == 404
    assert derive_status(500001) == 500
    assert derive_status(599999) == 599


def test_derive_status_clamps_invalid_codes():
    assert derive_status(0) == 500
    assert derive_status(999) == 500
    assert derive_status(200001) == 500
    assert derive_status(600000) == 500
    assert derive_status(-400000) == 500


def test_query_error_attributes():
    err = QueryError(400003, "INVALID_OPERATOR", "Unknown operator 'xx'")
    assert err.error_class == 400
    assert str(err) == "INVALID_OPERATOR: Unknown operator 'xx'"
    assert "400003" in repr(err)
