# src/xiny/cli/facts_cmd.py
from __future__ import annotations

from pathlib import Path

import typer
from rich import print
from rich.table import Table

from xiny.gazetteer.index import NameIndex

from ._common import load_store, pct


def facts_callback(
    input_path: Path = typer.Argument(
        ...,
        help="place-in-area CSV (optionally .gz).",
    ),
    top: int = typer.Option(
        5,
        "--top",
        help="How many unknown place tags to list.",
    ),
):
    """Show what the input holds after filtering, without searching."""
    store, stats = load_store(input_path)
    index = NameIndex(store)

    table = Table(title=str(input_path))
    table.add_column("")
    table.add_column("count", justify="right")
    table.add_column("%", justify="right")

    table.add_row("rows", f"{stats.rows:,}", "")
    table.add_row("empty name", f"{stats.empty_name:,}", pct(stats.empty_name, stats.rows))
    table.add_row("ignored place tag", f"{stats.ignored:,}", pct(stats.ignored, stats.rows))
    table.add_row("unknown place tag", f"{stats.unknown_total:,}", pct(stats.unknown_total, stats.rows))
    table.add_row("kept", f"{stats.kept:,}", pct(stats.kept, stats.rows))
    table.add_row("self-named removed", f"{store.removed:,}", f"{store.removed_pct:.1f}%")
    table.add_row("facts", f"{len(store):,}", "")
    table.add_row("places", f"{store.place_count:,}", "")
    table.add_row("distinct place names", f"{len(index):,}", "")
    print(table)

    if stats.unknown:
        unknown = Table(title="Unknown place tags")
        unknown.add_column("tag")
        unknown.add_column("rows", justify="right")
        for tag, count in stats.top_unknown(top):
            unknown.add_row(tag, f"{count:,}")
        print(unknown)
