from __future__ import annotations

import pathlib

import duckdb
import pytest
from click.testing import CliRunner

from enumcheck.cli import app

runner = CliRunner()

SHAPES_SPEC = str(pathlib.Path(__file__).parent.parent / "examples" / "shapes.json")
SCENARIO_ARGS = ["--column", "kind", "-k", "k1 a b c", "-k", "k2 b d", "-k", "k3 c"]


def test_definition():
    result = runner.invoke(app, ["definition", *SCENARIO_ARGS])
    assert result.exit_code == 0
    assert result.output == "kind smallint not null check (kind > 0 and kind < 4)\n"


def test_constraints():
    result = runner.invoke(app, ["constraints", *SCENARIO_ARGS])
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert len(lines) == 12
    assert lines[0] == "constraint k1_has_a check (kind <> 1 or a is not null)"
    assert lines[-1] == "constraint k3_has_no_d check (kind <> 3 or d is null)"


def test_anonymous_constraints():
    result = runner.invoke(
        app, ["constraints", "--column", "kind", "--anonymous", "-k", "a,b", "-k", "c"]
    )
    assert result.exit_code == 0
    assert result.output.splitlines()[0] == (
        "constraint kind_1_has_a check (kind <> 1 or a is not null)"
    )


def test_kinds():
    result = runner.invoke(app, ["kinds", "--spec", SHAPES_SPEC])
    assert result.exit_code == 0
    assert "rectangle" in result.output


def test_drop():
    result = runner.invoke(app, ["drop", "--spec", SHAPES_SPEC])
    assert result.exit_code == 0
    assert result.output.splitlines()[0] == "alter table shapes drop constraint circle_has_radius;"


def test_create_table_requires_table():
    result = runner.invoke(app, ["create-table", *SCENARIO_ARGS])
    assert result.exit_code == 1
    assert "No table name" in result.output


def test_invalid_spec():
    result = runner.invoke(app, ["definition", "--column", " "])
    assert result.exit_code == 1
    assert "Error" in result.output


def test_missing_column():
    result = runner.invoke(app, ["definition", "-k", "k1 a"])
    assert result.exit_code == 1


def test_apply(tmp_path, monkeypatch):
    path = tmp_path / "shapes.db"
    monkeypatch.setenv("ENUMCHECK_DUCKDB_PATH", str(path))
    result = runner.invoke(
        app, ["apply", "--spec", SHAPES_SPEC, "--type", "sides", "integer"]
    )
    assert result.exit_code == 0

    with duckdb.connect(str(path)) as con:
        con.execute("insert into shapes (kind, sides) values (3, 4)")
        assert con.execute("select sides from shapes").fetchone() == (4,)


def test_table_keeps_named_spec_file(tmp_path):
    spec = tmp_path / "spec.json"
    spec.write_text('{"name": "kind", "fields": [["k1", "a"], ["k2", "b"]]}')
    result = runner.invoke(app, ["drop", "--spec", str(spec), "--table", "t"])
    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "alter table t drop constraint k1_has_a;",
        "alter table t drop constraint k1_has_no_b;",
        "alter table t drop constraint k2_has_b;",
        "alter table t drop constraint k2_has_no_a;",
    ]


def test_anonymous_spec_file(tmp_path):
    spec = tmp_path / "spec.json"
    spec.write_text('{"name": "kind", "fields": [["a"], ["b"]]}')
    result = runner.invoke(app, ["constraints", "--spec", str(spec), "--anonymous"])
    assert result.exit_code == 0
    assert result.output.splitlines()[0] == (
        "constraint kind_1_has_a check (kind <> 1 or a is not null)"
    )


@pytest.mark.parametrize(
    "content",
    [
        pytest.param("{oops", id="malformed"),
        pytest.param('[["k1", "a"]]', id="list"),
        pytest.param('"kind"', id="string"),
        pytest.param('{"name": "kind", "fields": [["k1", "a"]], "named": "false"}', id="named"),
    ],
)
def test_invalid_spec_file(tmp_path, content):
    spec = tmp_path / "spec.json"
    spec.write_text(content)
    result = runner.invoke(app, ["constraints", "--spec", str(spec)])
    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "Error" in result.output


def test_kinds_shows_optional_fields():
    result = runner.invoke(app, ["kinds", "--spec", SHAPES_SPEC])
    assert result.exit_code == 0
    assert "label?" in result.output
