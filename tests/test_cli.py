"""Tests for the qlerror command line"""
import json
from click.testing import CliRunner
from qlerror.cli.main import cli


def test_check_ok(tmp_path):
    path = tmp_path / "ok.graphql"
    path.write_text("{ hero { name } }")
    result = CliRunner().invoke(cli, ["check", str(path)])
    assert result.exit_code == 0
    assert "OK" in result.output


def test_check_prints_excerpt(tmp_path):
    path = tmp_path / "bad.graphql"
    path.write_text("{\n  hero {\n    nam\n  }\n}")
    data = tmp_path / "data.json"
    data.write_text(json.dumps({"hero": {"name": "R2"}}))
    result = CliRunner().invoke(cli, ["check", str(path), "--data", str(data)])
    assert result.exit_code == 1
    assert 'Cannot query field "nam" on "hero".' in result.output
    assert f"{path} (3:5)" in result.output


def test_errors_emits_json(tmp_path):
    path = tmp_path / "bad.graphql"
    path.write_text("{ hero ")
    result = CliRunner().invoke(cli, ["errors", str(path)])
    assert result.exit_code == 0
    assert json.loads(result.output) == [
        {"message": "Syntax Error: Unexpected <EOF>.", "locations": [{"line": 1, "column": 8}]}
    ]


def test_errors_writes_file(tmp_path):
    path = tmp_path / "ok.graphql"
    path.write_text("{ hero }")
    out = tmp_path / "errors.json"
    result = CliRunner().invoke(cli, ["errors", str(path), "-o", str(out)])
    assert result.exit_code == 0
    assert json.loads(out.read_text()) == []
