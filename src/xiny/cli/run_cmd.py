# src/xiny/cli/run_cmd.py
from __future__ import annotations

import signal
from pathlib import Path

import typer
from rich import print
from rich.table import Table

from xiny.chains.report import length_histogram, write_report
from xiny.chains.search import (
    ChainSearch,
    StopFlag,
    StopReason,
    install_interrupt_handler,
)
from xiny.config.settings import (
    DEFAULT_CAPACITY,
    DEFAULT_MAX_STEPS,
    DEFAULT_PROGRESS_EVERY,
    DEFAULT_REPORT,
    DEFAULT_REPORT_LIMIT,
    DEFAULT_RETENTION_MARGIN,
    ReportSettings,
    SearchLimits,
)
from xiny.gazetteer.index import NameIndex

from ._common import load_store, unknown_summary


# ---------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------

def _histogram_table(histogram: dict) -> Table:
    table = Table(title="Finished chains by length")
    table.add_column("length", justify="right")
    table.add_column("chains", justify="right")
    for length, count in histogram.items():
        table.add_row(str(length), f"{count:,}")
    return table


# ---------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------

def run_callback(
    input_path: Path = typer.Argument(
        ...,
        help="place-in-area CSV (optionally .gz).",
    ),
    output_path: Path = typer.Argument(
        Path(DEFAULT_REPORT),
        help="Markdown report to write.",
    ),
    capacity: int = typer.Option(
        DEFAULT_CAPACITY,
        "--capacity",
        help="Frontier size that triggers a memory clean-up.",
    ),
    margin: int = typer.Option(
        DEFAULT_RETENTION_MARGIN,
        "--margin",
        help="During clean-up, drop chains this much shorter than their origin's best.",
    ),
    max_steps: int = typer.Option(
        DEFAULT_MAX_STEPS,
        "--max-steps",
        help="Hard limit on search steps.",
    ),
    progress_every: int = typer.Option(
        DEFAULT_PROGRESS_EVERY,
        "--progress-every",
        help="Steps between progress reports.",
    ),
    limit: int = typer.Option(
        DEFAULT_REPORT_LIMIT,
        "--limit",
        "-n",
        help="Maximum number of chains written to the report.",
    ),
):
    """Search for the longest chains and write them as Markdown."""
    try:
        limits = SearchLimits(
            capacity=capacity,
            retention_margin=margin,
            max_steps=max_steps,
            progress_every=progress_every,
        )
        report_settings = ReportSettings(limit=limit)
    except ValueError as e:
        raise typer.BadParameter(str(e))

    store, stats = load_store(input_path)

    print(
        f"There are [bold]{stats.kept:,}[/bold] name/contain pairs "
        f"({stats.unknown_total:,} unknown place tags). "
        f"Top unknowns: {', '.join(unknown_summary(stats)) or '-'}"
    )
    print(
        f"Removed {store.removed:,} ({store.removed_pct:.1f}%) self-named places, "
        f"{len(store):,} facts remain"
    )

    stop = StopFlag()
    search = ChainSearch(store, NameIndex(store), limits=limits, stop=stop)

    typer.secho(
        "Starting search. Press Ctrl-C to stop going further.",
        fg=typer.colors.CYAN,
    )
    previous = install_interrupt_handler(stop)
    try:
        outcome = search.run()
    finally:
        if previous is not None:
            signal.signal(signal.SIGINT, previous)

    if outcome.reason is StopReason.INTERRUPTED:
        typer.secho("Interrupted; keeping what we have.", fg=typer.colors.YELLOW)

    print(_histogram_table(length_histogram(outcome.finished)))

    try:
        summary = write_report(output_path, outcome.finished, report_settings)
    except OSError as e:
        typer.secho(f"Cannot write {output_path}: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    print(
        f"[green]Wrote out {summary.written:,} of {summary.total:,} "
        f"({summary.written_pct:.1f}%) to {summary.path}[/green]"
    )
