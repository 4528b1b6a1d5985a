# src/xiny/cli/_common.py
from __future__ import annotations

from pathlib import Path
from typing import List, Tuple

import typer

from xiny.gazetteer.io import IngestStats, read_containment_csv
from xiny.gazetteer.store import FactStore


def load_store(path: Path) -> Tuple[FactStore, IngestStats]:
    """Read the CSV and build the fact store, turning input errors into CLI errors."""
    try:
        facts, stats = read_containment_csv(path)
    except FileNotFoundError:
        raise typer.BadParameter(f"Input file not found: {path}")
    except ValueError as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    return FactStore.from_facts(facts), stats


def pct(part: int, whole: int) -> str:
    if not whole:
        return "0%"
    return f"{part * 100 // whole}%"


def unknown_summary(stats: IngestStats, top: int = 5) -> List[str]:
    total = stats.unknown_total
    return [
        f"{tag} {count:,} ({pct(count, total)})"
        for tag, count in stats.top_unknown(top)
    ]

