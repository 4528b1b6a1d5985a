# src/xiny/chains/report.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, TextIO

from xiny.chains.finished import FinishedChains
from xiny.chains.typedefs import Chain
from xiny.config.settings import ReportSettings
from xiny.gazetteer.typedefs import ContainmentFact

logger = logging.getLogger(__name__)

# Short labels used inside the link text, e.g. "(rel. 62,422)"
_KIND_LABELS: Dict[str, str] = {
    "n": "node",
    "w": "way",
    "r": "rel.",
}


@dataclass(frozen=True)
class ReportSummary:
    path: Path
    written: int
    total: int

    @property
    def written_pct(self) -> float:
        if not self.total:
            return 0.0
        return self.written * 100.0 / self.total


def length_histogram(finished: FinishedChains) -> Dict[int, int]:
    """Chain length -> number of finished chains of that length."""
    totals: Dict[int, int] = {}
    for chain in finished:
        totals[len(chain)] = totals.get(len(chain), 0) + 1
    return dict(sorted(totals.items()))


def render_fact(fact: ContainmentFact) -> str:
    place_label = _KIND_LABELS[fact.place_osmtype]
    boundary_label = _KIND_LABELS[fact.boundary_osmtype]
    return (
        f"There is a `place={fact.place_type}` called "
        f"[{fact.place_name} ({place_label} {fact.place_id:,})]({fact.place_url}) "
        f"in [{fact.boundary_name} ({boundary_label} {fact.boundary_id:,})]({fact.boundary_url}) "
        f"(`admin_level={fact.boundary_admin_level}`)"
    )


def write_chain(out: TextIO, chain: Chain) -> None:
    out.write(f"chain of len {len(chain)}:\n")
    for i, fact in enumerate(chain):
        out.write(f"{i}: {render_fact(fact)}\n\n")
    out.write("\n")


def write_report(
    path: Path,
    finished: FinishedChains,
    settings: Optional[ReportSettings] = None,
) -> ReportSummary:
    """
    Write the best chains, longest first, as Markdown. One-fact chains are
    never written.
    """
    settings = settings or ReportSettings()
    path = Path(path)
    total = len(finished)

    logger.info("Have %s chains. Writing to %s", f"{total:,}", path)

    chains = finished.ranked(min_length=max(settings.min_length, 2))
    written = 0
    with path.open("w", encoding="utf-8") as out:
        for chain in chains[: settings.limit]:
            write_chain(out, chain)
            written += 1

    summary = ReportSummary(path=path, written=written, total=total)
    logger.info(
        "Wrote out %s of %s (%.1f%%)",
        f"{written:,}",
        f"{total:,}",
        summary.written_pct,
    )
    return summary
