# src/xiny/cli/app.py

from __future__ import annotations
import logging

import typer
from rich.logging import RichHandler

from .run_cmd import run_callback as run
from .facts_cmd import facts_callback as facts
from .extract_cmd import extract_callback as extract

app = typer.Typer(help="xiny: find long 'X is in Y' chains in OpenStreetMap data")


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log debug detail (frontier sizes during clean-up).",
    ),
):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


# standalone verbs
app.command("run")(run)
app.command("facts")(facts)
app.command("extract")(extract)
