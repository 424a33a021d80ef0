"""Classification and timeline CLI commands for changeline."""

from typing import Any, TextIO

import click

from changeline.classifier.dispatcher import classify_all
from changeline.cli.output import OutputFormatter
from changeline.cli.records import read_records
from changeline.core.config import Granularity, ReportConfig
from changeline.core.errors import EXIT_ERROR, EXIT_INVALID_ARGS, ChangelineError, ConfigurationError
from changeline.core.logging import debug, get_counts, info, reset_counts
from changeline.core.metrics import MetricsCollector, collect_metrics
from changeline.report import assemble_report
from changeline.timeline.legend import legend as build_legend


def _config(ctx: click.Context, **overrides: Any) -> ReportConfig:
    """Apply command-line overrides to the loaded configuration."""
    formatter: OutputFormatter = ctx.obj["formatter"]
    try:
        return ctx.obj["config"].with_overrides(**overrides)
    except ConfigurationError as e:
        formatter.error(e.to_structured_error())
        ctx.exit(EXIT_INVALID_ARGS)


def _report_metrics(metrics: MetricsCollector) -> None:
    counts = get_counts()
    metrics.add_warnings(counts["warning"])
    metrics.add_errors(counts["error"])
    info(
        f"Classified {metrics.records_output} records in {metrics.duration_ms}ms"
        + (f" ({metrics.skipped} skipped)" if metrics.skipped else "")
    )
    debug("Run metrics", **metrics.to_dict())


@click.command()
@click.argument("input_file", type=click.File("r", encoding="utf-8"), default="-")
@click.option("--workers", "-w", type=int, default=None, help="Classification threads")
@click.pass_context
def classify(ctx: click.Context, input_file: TextIO, workers: int | None) -> None:
    """Classify change records.

    \b
    Reads JSON Lines change records (one object per line with timestamp,
    entity and change fields) from INPUT_FILE or stdin and emits the
    classified events.

    \b
    Examples:
      changeline classify changes.jsonl
      changeline -f human classify < changes.jsonl
    """
    formatter: OutputFormatter = ctx.obj["formatter"]
    config = _config(ctx, workers=workers)
    reset_counts()

    try:
        with collect_metrics("classify") as metrics:
            records = list(read_records(input_file, metrics))
            events = classify_all(records, workers=config.workers)
            metrics.add_records_output(len(events))
    except ChangelineError as e:
        formatter.error(e.to_structured_error())
        ctx.exit(EXIT_ERROR)

    formatter.stream(iter(events), title=f"Classified changes ({len(events)} total)")
    _report_metrics(metrics)


@click.command()
@click.argument("input_file", type=click.File("r", encoding="utf-8"), default="-")
@click.option("--hourly", is_flag=True, default=False, help="Bucket by hour instead of day")
@click.option("--title", "-t", default=None, help="Report title passed to the renderer")
@click.option("--row-width", type=int, default=None, help="Legend entries per row")
@click.option("--workers", "-w", type=int, default=None, help="Classification threads")
@click.pass_context
def timeline(
    ctx: click.Context,
    input_file: TextIO,
    hourly: bool,
    title: str | None,
    row_width: int | None,
    workers: int | None,
) -> None:
    """Build the timeline dataset for a set of change records.

    \b
    Output is a single JSON document with the timeline buckets, the
    database list, the legend and the memory/throughput series.

    \b
    Examples:
      changeline timeline changes.jsonl --title "Q1 changes"
      changeline timeline --hourly < changes.jsonl
    """
    formatter: OutputFormatter = ctx.obj["formatter"]
    config = _config(
        ctx,
        granularity=Granularity.HOURLY if hourly else None,
        title=title,
        legend_row_width=row_width,
        workers=workers,
    )
    reset_counts()

    try:
        with collect_metrics("timeline") as metrics:
            records = list(read_records(input_file, metrics))
            events = classify_all(records, workers=config.workers)
            report = assemble_report(events, config)
            metrics.add_records_output(len(events))
    except ChangelineError as e:
        formatter.error(e.to_structured_error())
        ctx.exit(EXIT_ERROR)

    formatter.output(report.to_dict(), title=report.title or "Timeline")
    _report_metrics(metrics)


@click.command()
@click.option("--row-width", type=int, default=None, help="Legend entries per row")
@click.pass_context
def legend(ctx: click.Context, row_width: int | None) -> None:
    """Show the classification legend (rule titles and icons) in rows."""
    formatter: OutputFormatter = ctx.obj["formatter"]
    config = _config(ctx, legend_row_width=row_width)

    rows = build_legend(config.legend_row_width)
    formatter.output(
        [[{"title": entry.title, "icon": entry.icon} for entry in row] for row in rows],
        title="Legend",
    )
