"""
PUT command line interface.

    put run program.put [--env]
    put run -e "var x = 1 + 2; x;"
    put tokens program.put
    put ast program.put [--color]
    put demo
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import typer

from put import __version__
from put.config import get_log_level
from put.debug_utils.pprint import load_options_from_json, pprint_program
from put.errors import PutError
from put.interpreter import Interpreter, parse
from put.project import ProjectConfig, find_project
from put.reader.lexer import tokenize
from put.types.tensor import Tensor
from put.types.value import format_value

logger = logging.getLogger(__name__)

DEMO_SOURCE = "var x = (42 + 5) * 2 - 3 / 1.5;"

app = typer.Typer(
    help="PUT - a small expression language with first-class tensors",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"put {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """PUT CLI main callback for global options."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else get_log_level(),
        format="%(levelname)s %(name)s: %(message)s",
    )


def _read_source(path: Optional[Path], expr: Optional[str]) -> str:
    if expr is not None:
        return expr
    if path is None:
        typer.echo("Provide a source file or -e/--expr", err=True)
        raise typer.Exit(code=2)
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        typer.echo(f"Error: cannot read {path}: {e.strerror or e}", err=True)
        raise typer.Exit(code=1)


def _fail(error: PutError) -> typer.Exit:
    typer.echo(f"{type(error).__name__}: {error}", err=True)
    return typer.Exit(code=1)


@app.command()
def run(
    path: Optional[Path] = typer.Argument(None, help="Program file to run"),
    expr: Optional[str] = typer.Option(None, "--expr", "-e", help="Program text to run"),
    show_env: bool = typer.Option(False, "--env", help="Print variable bindings after the run"),
) -> None:
    """Evaluate a program and print its final value."""
    source = _read_source(path, expr)
    logger.debug("running %s", path if expr is None else "<expr>")
    try:
        interp = Interpreter(project=find_project())
        result = interp.eval(source)
    except PutError as e:
        raise _fail(e) from None
    typer.echo(format_value(result))
    if show_env:
        for name, value in interp.env.items():
            typer.echo(f"{name} = {format_value(value)}")


@app.command()
def tokens(
    path: Optional[Path] = typer.Argument(None, help="Program file to tokenize"),
    expr: Optional[str] = typer.Option(None, "--expr", "-e", help="Program text to tokenize"),
) -> None:
    """Print the token stream of a program."""
    source = _read_source(path, expr)
    try:
        toks = tokenize(source)
    except PutError as e:
        raise _fail(e) from None
    for tok in toks:
        typer.echo(f"{tok.line}:{tok.column}\t{tok.kind.value}\t{tok.text!r}")


@app.command()
def ast(
    path: Optional[Path] = typer.Argument(None, help="Program file to parse"),
    expr: Optional[str] = typer.Option(None, "--expr", "-e", help="Program text to parse"),
    color: bool = typer.Option(False, "--color", help="Colorize node kinds"),
    options: Optional[str] = typer.Option(
        None, "--options", help='Printer options as JSON, e.g. {"indent": 4, "max_depth": 8}'
    ),
) -> None:
    """Print the syntax tree of a program."""
    source = _read_source(path, expr)
    try:
        program = parse(source)
    except PutError as e:
        raise _fail(e) from None
    if not program:
        typer.echo("Empty program.")
        return
    opts = load_options_from_json(options or "{}")
    if color:
        opts["color"] = True
    typer.echo(pprint_program(program, opts))


def _describe_project(config: Optional[ProjectConfig]) -> None:
    if config is None:
        typer.echo("project.zom not found, using default configuration")
        return
    typer.echo(f"Project name: {config.name}")
    typer.echo(f"Project version: {config.version}")
    for basket, version in config.dependencies.items():
        typer.echo(f"Loading basket: {basket} (version {version})")


@app.command()
def demo() -> None:
    """Run the sample program and tensor walkthrough."""
    try:
        interp = Interpreter(project=find_project())
    except PutError as e:
        raise _fail(e) from None
    _describe_project(interp.project)

    program = parse(DEMO_SOURCE)
    typer.echo(f"\nSource: {DEMO_SOURCE}")
    typer.echo("\nAST Structure:")
    typer.echo(pprint_program(program))

    interp.eval(DEMO_SOURCE)
    typer.echo(f"\nx = {format_value(interp.env.lookup('x'))}")

    typer.echo("\nDemonstrating Tensor Operations:")
    t1 = Tensor([1.0, 2.0, 3.0, 4.0], [2, 2])
    t2 = Tensor([5.0, 6.0, 7.0, 8.0], [2, 2])
    typer.echo(f"t1 = {t1}")
    typer.echo(f"t2 = {t2}")
    typer.echo(f"t1 + t2 = {t1 + t2}")
    typer.echo(f"t1 - t2 = {t1 - t2}")
    typer.echo(f"t1 * t2 (element-wise) = {t1 * t2}")
    typer.echo(f"t1 @ t2 (matrix multiplication) = {t1 @ t2}")
    typer.echo(f"t1 transposed = {t1.transpose()}")
    typer.echo(f"exp(t1) = {t1.exp()}")
    typer.echo(f"log(t1) = {t1.log()}")
    typer.echo(f"Mean of t1 = {t1.mean()}")
    typer.echo(f"Variance of t1 = {t1.variance()}")
    typer.echo(f"Standard deviation of t1 = {t1.std_dev()}")


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


if __name__ == "__main__":
    main(sys.argv[1:])
