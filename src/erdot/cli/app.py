"""Typer CLI application."""

from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence

import typer

from erdot.config.logging import get_logger, setup_logging
from erdot.config.settings import get_settings
from erdot.errors import ErdotError
from erdot.ir.document import GlobalOptions
from erdot.ir.issues import TranslationWarning
from erdot.markup.parser import parse
from erdot.options.overrides import parse_override_args
from erdot.pipeline import TranslationFailure, translate
from erdot.utils.io import read_markup, save_document_json, write_output

app = typer.Typer(help="erdot: ER diagram markup to Graphviz DOT")
logger = get_logger(__name__)

STRICT_EXIT_CODE = 2


class ReferencePolicyChoice(str, Enum):
    error = "error"
    warning = "warning"
    ignore = "ignore"


def _read(input_file: Optional[Path]) -> str:
    try:
        return read_markup(input_file)
    except (FileNotFoundError, UnicodeDecodeError) as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(1)


def _overrides(option: Optional[List[str]]) -> GlobalOptions:
    try:
        return parse_override_args(option or [])
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--option")


def _report(warnings: Sequence[TranslationWarning], strict: bool) -> None:
    for warning in warnings:
        typer.echo(f"warning: {warning}", err=True)
    if strict and warnings:
        typer.echo(
            f"error: {len(warnings)} warning(s) reported and --strict is set", err=True
        )
        raise typer.Exit(STRICT_EXIT_CODE)


@app.command()
def convert(
    input_file: Optional[Path] = typer.Argument(
        None, help="Markup file to read ('-' or omitted: stdin)"
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="DOT file to write (default: stdout)"
    ),
    option: Optional[List[str]] = typer.Option(
        None,
        "--option",
        "-O",
        help="Global option override as directive.key=value, e.g. title.direction=LR",
    ),
    unresolved: Optional[ReferencePolicyChoice] = typer.Option(
        None,
        "--unresolved",
        help="How to treat relationships naming undeclared entities",
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Fail (exit 2) when any warning is reported"
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level"),
):
    """
    Translate ER markup into DOT.

    Args:
        input_file: Path to the markup file
        output: Output path for the DOT text
    """
    try:
        setup_logging(level=log_level)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--log-level")
    settings = get_settings()
    overrides = _overrides(option)
    text = _read(input_file)

    result = translate(
        text,
        overrides=overrides,
        settings=settings,
        unresolved_references=unresolved.value if unresolved else None,
    )
    if isinstance(result, TranslationFailure):
        typer.echo(f"error: {result.error}", err=True)
        raise typer.Exit(1)

    _report(result.warnings, strict)
    write_output(result.dot, output)
    if output is not None and str(output) != "-":
        typer.echo(f"✓ DOT written to {output}", err=True)


@app.command()
def check(
    input_file: Path,
    option: Optional[List[str]] = typer.Option(
        None, "--option", "-O", help="Global option override as directive.key=value"
    ),
    unresolved: Optional[ReferencePolicyChoice] = typer.Option(None, "--unresolved"),
    strict: bool = typer.Option(False, "--strict"),
):
    """
    Parse and resolve markup without writing DOT; report warnings.

    Args:
        input_file: Path to the markup file
    """
    setup_logging()
    overrides = _overrides(option)
    text = _read(input_file)

    result = translate(
        text,
        overrides=overrides,
        settings=get_settings(),
        unresolved_references=unresolved.value if unresolved else None,
    )
    if isinstance(result, TranslationFailure):
        typer.echo(f"error: {result.error}", err=True)
        raise typer.Exit(1)

    _report(result.warnings, strict)
    doc = result.document
    typer.echo(
        f"✓ {len(doc.entities)} entities, {len(doc.relationships)} relationships, "
        f"{len(result.warnings)} warning(s)"
    )


@app.command()
def ast(
    input_file: Path,
    output: Optional[Path] = typer.Option(None, "--output", "-o"),
):
    """
    Dump the parsed document as JSON.

    Args:
        input_file: Path to the markup file
        output: Output path for the JSON (default: stdout)
    """
    setup_logging()
    text = _read(input_file)

    try:
        document = parse(text)
    except ErdotError as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(1)

    logger.debug(f"Writing document JSON to {output or 'stdout'}")
    save_document_json(document, output)


def main():
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
