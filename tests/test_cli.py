import pytest
from typer.testing import CliRunner

from put import __version__
from put.cli import app


@pytest.fixture
def cli_runner():
    """Return a CLI test runner."""
    return CliRunner()


@pytest.fixture
def program_file(tmp_path):
    path = tmp_path / "prog.put"
    path.write_text(
        "var t1 = Tensor([1.0,2.0,3.0,4.0],[2,2]);\n"
        "var t2 = Tensor([5.0,6.0,7.0,8.0],[2,2]);\n"
        "var t3 = t1 + t2;\n",
        encoding="utf-8",
    )
    return path


def test_run_file(cli_runner, program_file):
    result = cli_runner.invoke(app, ["run", str(program_file)])
    assert result.exit_code == 0
    assert "Tensor(shape=[2, 2], data=[6.0, 8.0, 10.0, 12.0])" in result.output


def test_run_expr_with_env(cli_runner):
    result = cli_runner.invoke(app, ["run", "-e", "var x = 5; var y = x / 2;", "--env"])
    assert result.exit_code == 0
    assert "x = 5.0" in result.output
    assert "y = 2.5" in result.output


def test_run_reports_errors(cli_runner):
    result = cli_runner.invoke(app, ["run", "-e", "5 + t1;"])
    assert result.exit_code == 1
    assert "UndefinedVariableError" in result.output


def test_run_missing_file(cli_runner, tmp_path):
    result = cli_runner.invoke(app, ["run", str(tmp_path / "nope.put")])
    assert result.exit_code == 1


def test_run_without_source(cli_runner):
    result = cli_runner.invoke(app, ["run"])
    assert result.exit_code == 2


def test_tokens(cli_runner):
    result = cli_runner.invoke(app, ["tokens", "-e", "var x = 1;"])
    assert result.exit_code == 0
    lines = result.output.strip().splitlines()
    assert lines[0] == "1:1\tkeyword\t'var'"
    assert lines[-1].endswith("eof\t''")


def test_tokens_lex_error(cli_runner):
    result = cli_runner.invoke(app, ["tokens", "-e", "x # y"])
    assert result.exit_code == 1
    assert "LexError" in result.output


def test_ast(cli_runner):
    result = cli_runner.invoke(app, ["ast", "-e", "var x = 1 + 2;"])
    assert result.exit_code == 0
    assert "Assignment: x" in result.output
    assert "  BinaryOp: +" in result.output


def test_ast_parse_error(cli_runner):
    result = cli_runner.invoke(app, ["ast", "-e", "var x = (1;"])
    assert result.exit_code == 1
    assert "ParseError" in result.output


def test_demo_with_project(cli_runner, project_dir):
    result = cli_runner.invoke(app, ["demo"])
    assert result.exit_code == 0
    assert "Project name: tensor-demo" in result.output
    assert "Loading basket: linalg (version 0.4)" in result.output
    assert "x = 92.0" in result.output
    assert "t1 + t2 = Tensor(shape=[2, 2], data=[6.0, 8.0, 10.0, 12.0])" in result.output


def test_demo_without_project(cli_runner, tmp_path, monkeypatch):
    monkeypatch.setenv("PUT_PROJECT_PATH", str(tmp_path / "absent.zom"))
    result = cli_runner.invoke(app, ["demo"])
    assert result.exit_code == 0
    assert "project.zom not found" in result.output


def test_version(cli_runner):
    result = cli_runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


@pytest.mark.parametrize("command", [["run", "-e", "1;"], ["demo"]])
def test_unreadable_manifest_is_reported(cli_runner, broken_project, command):
    result = cli_runner.invoke(app, command)
    assert result.exit_code == 1
    assert "ProjectConfigError" in result.output


def test_ast_options(cli_runner):
    result = cli_runner.invoke(
        app, ["ast", "-e", "var x = 1 + 2;", "--options", '{"indent": 4, "max_depth": 1}']
    )
    assert result.exit_code == 0
    lines = result.output.strip().splitlines()
    assert lines == ["Assignment: x", "    ..."]


def test_ast_options_with_color(cli_runner):
    result = cli_runner.invoke(
        app, ["ast", "-e", "x;", "--options", '{"indent": 4}', "--color"], color=True
    )
    assert result.exit_code == 0
    assert "\033[" in result.output
