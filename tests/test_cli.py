"""Tests for the Typer CLI."""

import json

import pytest
from typer.testing import CliRunner

from erdot.cli.app import app

EXAMPLE = "[Person]\n*id\nname\n\n[Car]\n*id\nowner\n\nPerson 1--* Car\n"

runner = CliRunner()


@pytest.fixture
def example_file(tmp_path):
    path = tmp_path / "schema.er"
    path.write_text(EXAMPLE, encoding="utf-8")
    return path


def test_convert_to_file(example_file, tmp_path):
    """convert writes DOT to the -o path."""
    out = tmp_path / "out" / "schema.dot"
    result = runner.invoke(app, ["convert", str(example_file), "-o", str(out)])
    assert result.exit_code == 0, result.output
    dot = out.read_text(encoding="utf-8")
    assert dot.startswith("graph {")
    assert "Person -- Car [" in dot


def test_convert_stdin_to_stdout():
    """'-' reads markup from stdin; DOT goes to stdout."""
    result = runner.invoke(app, ["convert", "-"], input=EXAMPLE)
    assert result.exit_code == 0, result.output
    assert "Person -- Car [" in result.output


def test_convert_option_override(example_file, tmp_path):
    """-O directive.key=value overrides the document."""
    out = tmp_path / "schema.dot"
    result = runner.invoke(
        app,
        ["convert", str(example_file), "-o", str(out), "-O", "title.direction=LR"],
    )
    assert result.exit_code == 0, result.output
    assert "rankdir=LR" in out.read_text(encoding="utf-8")


def test_convert_bad_override(example_file):
    """A malformed override is a usage error."""
    result = runner.invoke(app, ["convert", str(example_file), "-O", "direction"])
    assert result.exit_code == 2


def test_convert_parse_error(tmp_path):
    """Parse failures exit 1 and write nothing."""
    src = tmp_path / "bad.er"
    src.write_text("[A]\n[B]\nA 1--% B\n", encoding="utf-8")
    out = tmp_path / "bad.dot"
    result = runner.invoke(app, ["convert", str(src), "-o", str(out)])
    assert result.exit_code == 1
    assert "error:" in result.output
    assert "'%'" in result.output
    assert not out.exists()


def test_convert_missing_file(tmp_path):
    """A missing input file exits 1."""
    result = runner.invoke(app, ["convert", str(tmp_path / "nope.er")])
    assert result.exit_code == 1
    assert "not found" in result.output


def test_convert_unresolved_policy(tmp_path):
    """--unresolved warning turns the fatal error into a warning."""
    src = tmp_path / "dangling.er"
    src.write_text("[A]\nA 1--* B\n", encoding="utf-8")
    out = tmp_path / "dangling.dot"

    result = runner.invoke(app, ["convert", str(src), "-o", str(out)])
    assert result.exit_code == 1
    assert "undeclared entity 'B'" in result.output

    result = runner.invoke(
        app, ["convert", str(src), "-o", str(out), "--unresolved", "warning"]
    )
    assert result.exit_code == 0, result.output
    assert "warning:" in result.output
    assert "A -- B" in out.read_text(encoding="utf-8")


def test_convert_strict(tmp_path):
    """--strict fails with exit code 2 when warnings are reported."""
    src = tmp_path / "warn.er"
    src.write_text("[A] {bogus: 1}\n", encoding="utf-8")
    out = tmp_path / "warn.dot"

    result = runner.invoke(app, ["convert", str(src), "-o", str(out), "--strict"])
    assert result.exit_code == 2
    assert "bogus" in result.output
    assert not out.exists()


def test_check(example_file):
    """check prints a summary."""
    result = runner.invoke(app, ["check", str(example_file)])
    assert result.exit_code == 0, result.output
    assert "2 entities, 1 relationships, 0 warning(s)" in result.output


def test_ast(example_file, tmp_path):
    """ast dumps the parsed document as JSON."""
    out = tmp_path / "schema.json"
    result = runner.invoke(app, ["ast", str(example_file), "-o", str(out)])
    assert result.exit_code == 0, result.output
    data = json.loads(out.read_text(encoding="utf-8"))
    assert [e["name"] for e in data["entities"]] == ["Person", "Car"]
    assert data["entities"][0]["attributes"][0]["is_key"] is True
    assert data["relationships"][0]["left_cardinality"] == "1"
    assert data["relationships"][0]["right_cardinality"] == "*"


def test_convert_bad_log_level(example_file):
    """An unknown --log-level is a usage error."""
    result = runner.invoke(app, ["convert", str(example_file), "--log-level", "LOUD"])
    assert result.exit_code == 2


def test_check_with_option_override(example_file):
    """check applies -O overrides and reports their warnings under --strict."""
    result = runner.invoke(
        app, ["check", str(example_file), "-O", "title.direction=SIDEWAYS", "--strict"]
    )
    assert result.exit_code == 2
    assert "SIDEWAYS" in result.output

    result = runner.invoke(app, ["check", str(example_file), "-O", "title.direction=LR"])
    assert result.exit_code == 0, result.output
    assert "0 warning(s)" in result.output
