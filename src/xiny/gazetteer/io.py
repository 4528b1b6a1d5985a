# src/xiny/gazetteer/io.py
from __future__ import annotations

import csv
import gzip
import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Iterable, Iterator, List, Optional, Tuple

from xiny.config.settings import PlaceTagPolicy
from xiny.gazetteer.typedefs import ContainmentFact

logger = logging.getLogger(__name__)

CSV_COLUMNS: Tuple[str, ...] = (
    "place_osmtype",
    "place_id",
    "place_name",
    "place_type",
    "place_lat",
    "place_lon",
    "boundary_osmtype",
    "boundary_id",
    "boundary_name",
    "boundary_admin_level",
)


# ------------------------------
# Stats
# ------------------------------

@dataclass
class IngestStats:
    rows: int = 0
    kept: int = 0
    empty_name: int = 0
    ignored: int = 0
    unknown: Counter = field(default_factory=Counter)

    @property
    def unknown_total(self) -> int:
        return sum(self.unknown.values())

    def top_unknown(self, n: int = 5) -> List[Tuple[str, int]]:
        return self.unknown.most_common(n)


# ------------------------------
# File helpers
# ------------------------------

def _open_text(path: Path, mode: str) -> IO[str]:
    if path.suffix == ".gz":
        return gzip.open(path, mode + "t", encoding="utf-8", newline="")
    return path.open(mode, encoding="utf-8", newline="")


def _row_to_fact(row: dict, line_no: int) -> ContainmentFact:
    try:
        return ContainmentFact(
            place_osmtype=row["place_osmtype"],
            place_id=int(row["place_id"]),
            place_name=row["place_name"],
            place_type=row["place_type"],
            place_lat=float(row["place_lat"]),
            place_lon=float(row["place_lon"]),
            boundary_osmtype=row["boundary_osmtype"],
            boundary_id=int(row["boundary_id"]),
            boundary_name=row["boundary_name"],
            boundary_admin_level=row["boundary_admin_level"] or "",
        )
    except (TypeError, ValueError) as e:
        raise ValueError(f"Line {line_no}: malformed row ({e})") from e


# ------------------------------
# Reader
# ------------------------------

def iter_containment_rows(path: Path) -> Iterator[Tuple[int, dict]]:
    """
    Yield (line number, row dict) from a place-in-area CSV, gzipped or not.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(path)

    with _open_text(path, "r") as f:
        reader = csv.DictReader(f)
        missing = [c for c in CSV_COLUMNS if c not in (reader.fieldnames or [])]
        if missing:
            raise ValueError(
                f"{path}: missing column(s): {', '.join(missing)}"
            )
        for row in reader:
            yield reader.line_num, row


def read_containment_csv(
    path: Path,
    policy: Optional[PlaceTagPolicy] = None,
) -> Tuple[List[ContainmentFact], IngestStats]:
    """
    Read containment facts, keeping rows with both names set and an allowed
    `place=*` tag. Ignored and unknown tags are counted, never kept.
    """
    policy = policy or PlaceTagPolicy()
    stats = IngestStats()
    facts: List[ContainmentFact] = []

    logger.info("Reading in %s", path)
    for line_no, row in iter_containment_rows(path):
        stats.rows += 1

        if not row.get("place_name") or not row.get("boundary_name"):
            stats.empty_name += 1
            continue

        tag = row.get("place_type") or ""
        verdict = policy.classify(tag)
        if verdict == "ignored":
            stats.ignored += 1
            continue
        if verdict == "unknown":
            stats.unknown[tag] += 1
            continue

        facts.append(_row_to_fact(row, line_no))
        stats.kept += 1

    logger.info(
        "There are %s name/contain pairs (%s unknown place tags)",
        f"{stats.kept:,}",
        f"{stats.unknown_total:,}",
    )
    return facts, stats


# ------------------------------
# Writer
# ------------------------------

def fact_to_row(fact: ContainmentFact) -> dict:
    return {
        "place_osmtype": fact.place_osmtype,
        "place_id": fact.place_id,
        "place_name": fact.place_name,
        "place_type": fact.place_type,
        "place_lat": fact.place_lat,
        "place_lon": fact.place_lon,
        "boundary_osmtype": fact.boundary_osmtype,
        "boundary_id": fact.boundary_id,
        "boundary_name": fact.boundary_name,
        "boundary_admin_level": fact.boundary_admin_level,
    }


def write_containment_csv(path: Path, facts: Iterable[ContainmentFact]) -> int:
    """Write facts in the place-in-area CSV format. Returns rows written."""
    path = Path(path)
    n = 0
    with _open_text(path, "w") as f:
        writer = csv.DictWriter(f, fieldnames=list(CSV_COLUMNS))
        writer.writeheader()
        for fact in facts:
            writer.writerow(fact_to_row(fact))
            n += 1
    return n
