"""
Command line interface for pubsubschema-gen.

Generates Config Connector PubSubSchema manifests from ``*.pubsub.proto``
files, plus a kustomization.yaml listing them.
"""

import sys
from pathlib import Path
from typing import List, Optional

import click
import structlog
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import ConfigLoader
from .exceptions import ConfigurationError, PubSubSchemaGenError
from .generation_report import GenerationReport
from .generator import run
from .inputs import DEFAULT_GLOB, DEFAULT_PUBSUB_DIR
from .logging_config import VALID_LOG_LEVELS, configure_logging

logger = structlog.get_logger(__name__)

PROG_NAME = "pubsubschema-gen"


def exit_with_error(ctx: click.Context, message: str, show_usage: bool = False) -> None:
    """Print a one-line error, optionally followed by the usage block, and exit 1."""
    click.echo(f"error: {message}", err=True)
    if show_usage:
        click.echo("", err=True)
        click.echo(ctx.get_help(), err=True)
    ctx.exit(1)


def print_summary(report: GenerationReport, console: Optional[Console] = None) -> None:
    """Render a table of the manifests written by a run."""
    console = console or Console()
    table = Table(title="Generated PubSub Schemas", show_header=True)
    table.add_column("Schema", style="cyan")
    table.add_column("Source", style="dim")
    table.add_column("Manifest", style="green")
    for schema in report.schemas:
        table.add_row(
            escape(schema.schema_name),
            escape(str(schema.source)),
            escape(str(schema.manifest)),
        )
    console.print(table)
    console.print(
        f"{len(report.schemas)} manifests written, "
        f"{len(report.removed_stale)} stale manifests removed, "
        f"index: {escape(str(report.kustomization))}"
    )
    for name in sorted(report.duplicate_names):
        console.print(f"[yellow]warning: schema name {escape(name)} derived more than once[/yellow]")


@click.command(PROG_NAME)
@click.option(
    "--pubsub-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help=f"Directory containing `*.pubsub.proto` files. [default: {DEFAULT_PUBSUB_DIR}]",
)
@click.option(
    "--glob",
    "glob_pattern",
    default=None,
    help=f"Glob pattern within --pubsub-dir to match pubsub proto files. [default: {DEFAULT_GLOB}]",
)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory to write generated schema YAMLs into. [required]",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="YAML file with default settings (also PUBSUBSCHEMA_GEN_CONFIG).",
)
@click.option(
    "--strict-names/--no-strict-names",
    default=None,
    help=(
        "Fail when two inputs derive the same schema name. Without it the last "
        "input wins and kustomization.yaml lists the manifest once."
    ),
)
@click.option(
    "--summary",
    is_flag=True,
    help="Print a table of generated manifests after the run.",
)
@click.option(
    "--log-level",
    type=click.Choice(VALID_LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Structured log level on stderr. [default: WARNING]",
)
@click.pass_context
def cli(
    ctx: click.Context,
    pubsub_dir: Optional[Path],
    glob_pattern: Optional[str],
    output_dir: Optional[Path],
    config_path: Optional[Path],
    strict_names: Optional[bool],
    summary: bool,
    log_level: Optional[str],
) -> None:
    """Generate PubSubSchema manifests and a kustomization.yaml from pubsub protos.

    Stale *.schema.yaml files in the output directory are removed first, and
    kustomization.yaml is written last.

    \b
    Examples:
        pubsubschema-gen --output-dir namespaces/core-app/base/schemas
        pubsubschema-gen --pubsub-dir protos --glob '*.pubsub.proto' --output-dir out
    """
    configure_logging()
    try:
        config = ConfigLoader(config_path).load(
            {
                "pubsub_dir": pubsub_dir,
                "glob": glob_pattern,
                "output_dir": output_dir,
                "strict_names": strict_names,
                "log_level": log_level,
            }
        )
        configure_logging(config.log_level)
        config.require_output_dir()
        report = run(config)
    except ConfigurationError as e:
        logger.debug("Configuration failed", **e.to_dict())
        exit_with_error(ctx, e.message, show_usage=e.context.get("setting") == "output_dir")
        return
    except PubSubSchemaGenError as e:
        logger.debug("Generation failed", **e.to_dict())
        exit_with_error(ctx, e.message)
        return

    if summary:
        print_summary(report)


def main(argv: Optional[List[str]] = None) -> None:
    """Console script entry point.

    Every failure, including click usage errors, exits with status 1.
    """
    load_dotenv()
    try:
        rv = cli.main(args=argv, prog_name=PROG_NAME, standalone_mode=False)
    except click.ClickException as e:
        click.echo(f"error: {e.format_message()}", err=True)
        sys.exit(1)
    except click.Abort:
        click.echo("error: aborted", err=True)
        sys.exit(1)
    sys.exit(rv if isinstance(rv, int) else 0)


if __name__ == "__main__":
    main()
