# src/xiny/cli/extract_cmd.py
from __future__ import annotations

from pathlib import Path

import typer
from rich import print

from xiny.config.settings import DEFAULT_INPUT


def extract_callback(
    osm_path: Path = typer.Argument(
        ...,
        help="OSM extract (.osm, .osm.pbf).",
    ),
    csv_path: Path = typer.Argument(
        Path(DEFAULT_INPUT),
        help="place-in-area CSV to write (gzipped if it ends in .gz).",
    ),
    lang: str = typer.Option(
        "en",
        "--lang",
        help="Prefer name:<lang> over name.",
    ),
    overwrite: bool = typer.Option(
        False,
        "--overwrite",
        help="Replace an existing output file.",
    ),
):
    """Join place nodes with the admin areas containing them."""
    from xiny.gazetteer.osm_extract import extract_containment

    try:
        result = extract_containment(
            osm_path=osm_path,
            csv_path=csv_path,
            lang=lang,
            overwrite=overwrite,
            progress_cb=lambda msg: typer.secho(msg, fg=typer.colors.CYAN),
        )
    except FileNotFoundError:
        raise typer.BadParameter(f"OSM file not found: {osm_path}")
    except FileExistsError:
        typer.secho(
            f"{csv_path} exists; pass --overwrite to replace it.",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(code=1)

    print(
        f"[green]Wrote {result.fact_count:,} place/boundary pairs "
        f"({result.place_count:,} places, {result.boundary_count:,} areas) "
        f"to {result.csv_path}[/green]"
    )
