"""
Tests for the query API and response error serialization.

Copyright (c) 2025 Graziano Labs Corp.
"""

import pytest
from fastapi.testclient import TestClient

from qlerror.config import QLErrorConfig
from qlerror.runtime import api
from qlerror.runtime.api import QueryService


def _explode():
    raise ValueError("database password is hunter2")


ROOT = {"hero": {"name": "R2-D2", "secret": _explode}, "version": "1.0"}


@pytest.fixture
def client(monkeypatch):
    service = QueryService(root_value=ROOT, config=QLErrorConfig())
    monkeypatch.setattr(api, "SERVICE", service)
    return TestClient(api.app)


def test_healthz(client):
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json() == {"status": "healthy", "fields": ["hero", "version"]}


def test_successful_query(client):
    r = client.post("/query", json={"query": "{ hero { name } version }"})
    assert r.status_code == 200
    assert r.json() == {"data": {"hero": {"name": "R2-D2"}, "version": "1.0"}}


def test_syntax_error_response(client):
    """Syntax errors return only message and locations"""
    r = client.post("/query", json={"query": "{ hero "})
    assert r.status_code == 400
    assert r.json() == {
        "errors": [{"message": "Syntax Error: Unexpected <EOF>.", "locations": [{"line": 1, "column": 8}]}]
    }


def test_validation_error_response(client):
    r = client.post("/query", json={"query": "{ hero { nam } }"})
    assert r.status_code == 400
    assert r.json()["errors"] == [
        {"message": 'Cannot query field "nam" on "hero".', "locations": [{"line": 1, "column": 10}]}
    ]


def test_execution_error_response(client):
    """Execution errors carry path next to partial data; internal fields never appear"""
    r = client.post("/query", json={"query": "{ hero { name secret } }"})
    assert r.status_code == 200
    body = r.json()
    assert body["data"] == {"hero": {"name": "R2-D2", "secret": None}}
    assert body["errors"] == [{
        "message": "database password is hunter2",
        "locations": [{"line": 1, "column": 15}],
        "path": ["hero", "secret"],
    }]
    for internal in ("nodes", "source", "positions", "original_error", "trace"):
        assert internal not in body["errors"][0]


def test_operation_name_alias(client):
    r = client.post("/query", json={"query": "query A { version } query B { hero { name } }", "operationName": "A"})
    assert r.json() == {"data": {"version": "1.0"}}


def test_extensions_surfaced_by_response_serializer():
    from qlerror.errors import QueryError
    service = QueryService(root_value={}, config=QLErrorConfig())
    out = service.serialize_error(QueryError("msg", path=["a"], extensions={"code": "X"}))
    assert out == {"message": "msg", "path": ["a"], "extensions": {"code": "X"}}


def test_extensions_can_be_omitted():
    from qlerror.errors import QueryError
    service = QueryService(root_value={}, config=QLErrorConfig(include_extensions=False))
    out = service.serialize_error(QueryError("msg", extensions={"code": "X"}))
    assert out == {"message": "msg"}


def test_mask_internal_errors():
    service = QueryService(root_value=ROOT, config=QLErrorConfig(mask_internal_errors=True))
    status, body = service.run("{ hero { secret } }")
    assert status == 200
    assert body["errors"][0]["message"] == "Internal error"
    assert body["errors"][0]["path"] == ["hero", "secret"]


def test_dev_mode_attaches_trace():
    service = QueryService(root_value=ROOT, config=QLErrorConfig(dev_mode=True))
    _, body = service.run("{ hero { secret } }")
    stack = body["errors"][0]["extensions"]["exception"]["stacktrace"]
    assert any("_explode" in frame for frame in stack)


def test_max_errors_limits_response():
    service = QueryService(root_value=ROOT, config=QLErrorConfig(max_errors=1))
    status, body = service.run("{ a b c }")
    assert status == 400
    assert len(body["errors"]) == 1


def test_invalid_string_value_response(client):
    r = client.post("/query", json={"query": '{ hero(id: "\\q") { name } }'})
    assert r.status_code == 400
    assert r.json() == {
        "errors": [{"message": "Syntax Error: Invalid string value.", "locations": [{"line": 1, "column": 12}]}]
    }
