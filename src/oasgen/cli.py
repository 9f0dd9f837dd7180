"""
Command line interface for oasgen.

Usage:
    oasgen schema package.module:Model
    oasgen document package.module:User package.module:Order --format yaml -o openapi.yaml
    oasgen --config oasgen.yaml document package.module:User
"""

from __future__ import annotations

import logging
from typing import Annotated, List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .config import GeneratorConfig
from .enums.output_format import OutputFormat
from .exceptions.configuration_error import ConfigurationError
from .exceptions.schema_generation_error import SchemaGenerationError
from .generator import DocumentGenerator

LOGGER = logging.getLogger(__name__)

app = typer.Typer(
    name="oasgen",
    help="Generate OpenAPI 3.1 schemas from Python types",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def configure_logging(level: str, verbose: bool) -> None:
    """Route log records through a rich handler on stderr."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
    )
    logging.getLogger("oasgen").setLevel(logging.DEBUG if verbose else level)


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable verbose output.")] = False,
    config_path: Annotated[Optional[str], typer.Option("--config", "-c", help="Path to configuration file.")] = None,
) -> None:
    """
    Generate OpenAPI 3.1 schemas from Python types.
    """
    try:
        config = GeneratorConfig.load(config_path)
    except ConfigurationError as exc:
        LOGGER.error("Configuration error: %s", exc)
        raise typer.Exit(code=1) from exc

    configure_logging(config.log_level, verbose)
    LOGGER.debug("oasgen %s, OpenAPI %s", __version__, config.openapi_version)
    ctx.obj = config


def _run(
    ctx: typer.Context,
    targets: list[str],
    output_format: Optional[OutputFormat],
    output: Optional[str],
    title: Optional[str] = None,
    version: Optional[str] = None,
) -> None:
    config: GeneratorConfig = ctx.obj or GeneratorConfig()
    generator = DocumentGenerator(openapi_version=config.openapi_version)
    try:
        rendered = generator.generate(
            targets,
            output_format=output_format or config.output_format,
            output_path=output,
            title=config.title if title is None else title,
            version=config.version if version is None else version,
        )
    except SchemaGenerationError as exc:
        LOGGER.error("Schema generation failed: %s", exc)
        raise typer.Exit(code=1) from exc

    if not output:
        typer.echo(rendered)


@app.command()
def schema(
    ctx: typer.Context,
    target: Annotated[str, typer.Argument(help="Type to describe, as 'package.module:Attr'.")],
    output_format: Annotated[
        Optional[OutputFormat], typer.Option("--format", "-f", help="Output format.")
    ] = None,
    output: Annotated[Optional[str], typer.Option("--output", "-o", help="File or directory to write to.")] = None,
) -> None:
    """
    Print a document whose components describe a single type.
    """
    _run(ctx, [target], output_format, output)


@app.command()
def document(
    ctx: typer.Context,
    targets: Annotated[List[str], typer.Argument(help="Types to describe, as 'package.module:Attr'.")],
    title: Annotated[Optional[str], typer.Option("--title", help="API title for the info section.")] = None,
    version: Annotated[Optional[str], typer.Option("--version", help="API version for the info section.")] = None,
    output_format: Annotated[
        Optional[OutputFormat], typer.Option("--format", "-f", help="Output format.")
    ] = None,
    output: Annotated[Optional[str], typer.Option("--output", "-o", help="File or directory to write to.")] = None,
) -> None:
    """
    Build one document describing every given type.
    """
    _run(ctx, targets, output_format, output, title=title, version=version)


def main() -> None:
    app()


__all__ = ["app", "main"]
