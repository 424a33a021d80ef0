"""changeline CLI entry point and global options."""

import sys
from pathlib import Path
from typing import Literal

import click

from changeline import __version__
from changeline.cli.output import OutputFormat, OutputFormatter, set_output_format
from changeline.cli.timeline import classify, legend, timeline
from changeline.core.config import load_config
from changeline.core.errors import EXIT_ERROR, EXIT_INVALID_ARGS, ConfigurationError, handle_error
from changeline.core.logging import configure_logging, set_verbose


@click.group()
@click.option(
    "--format",
    "-f",
    type=click.Choice(["json", "jsonl", "human"]),
    default="json",
    help="Output format (default: json)",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="YAML file with report settings",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose logging to stderr",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    default=False,
    help="Suppress informational output",
)
@click.option(
    "--log-format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Log format for stderr (default: text)",
)
@click.version_option(version=__version__, prog_name="changeline")
@click.pass_context
def cli(
    ctx: click.Context,
    format: OutputFormat,
    config_path: Path | None,
    verbose: bool,
    quiet: bool,
    log_format: Literal["text", "json"],
) -> None:
    """changeline: timelines of managed database configuration changes.

    Classifies configuration change records and groups them into a
    per-database timeline dataset ready for rendering.
    """
    set_output_format(format)
    set_verbose(verbose)
    configure_logging(log_format=log_format, quiet=quiet)

    try:
        config = load_config(config_path)
    except ConfigurationError as e:
        handle_error(e, exit_code=EXIT_INVALID_ARGS)

    ctx.ensure_object(dict)
    ctx.obj = {
        "format": format,
        "verbose": verbose,
        "quiet": quiet,
        "config": config,
        "formatter": OutputFormatter(format=format),
    }


cli.add_command(classify)
cli.add_command(timeline)
cli.add_command(legend)


def main() -> None:
    """Main entry point."""
    try:
        cli()
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_ERROR)


if __name__ == "__main__":
    main()
