"""Settings parsing tests."""

from __future__ import annotations

from tesoql_fastapi.config import Settings, parse_field_mapping
from tesoql_fastapi.main import query_config_from_settings


def test_parse_field_mapping():
    assert parse_field_mapping("id, fullName:full_name , age") == {
        "id": "id",
        "fullName": "full_name",
        "age": "age",
    }


def test_parse_field_mapping_skips_blanks():
    assert parse_field_mapping(" , id,,") == {"id": "id"}


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("ROUTE_PATH", "/people/query")
    monkeypatch.setenv("QUERY_MAX_LIMIT", "25")
    s = Settings()
    assert s.route_path == "/people/query"
    assert s.query_max_limit == 25


def test_query_config_from_settings():
    s = Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        query_table="people",
        query_fields="id,name:full_name",
        query_default_limit=5,
        query_max_limit=10,
    )
    config = query_config_from_settings(s)
    assert config.table == "people"
    assert config.fields == {"id": "id", "name": "full_name"}
    assert config.default_limit == 5
    assert config.max_limit == 10
