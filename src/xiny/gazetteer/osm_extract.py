# src/xiny/gazetteer/osm_extract.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, List, Optional, Tuple

import osmium
from rtree.index import Index as RTreeIndex
from shapely import wkb
from shapely.geometry import Point
from shapely.prepared import prep

from xiny.gazetteer.io import write_containment_csv
from xiny.gazetteer.typedefs import ContainmentFact


# =============================================================================
# Names
# =============================================================================

def preferred_name(tags: osmium.osm.TagList, lang: str = "en") -> Optional[str]:
    """`name:<lang>` when set, otherwise `name`."""
    return tags.get(f"name:{lang}") or tags.get("name") or None


# =============================================================================
# Result
# =============================================================================

@dataclass(frozen=True)
class ExtractResult:
    osm_path: Path
    csv_path: Path

    place_count: int
    boundary_count: int
    fact_count: int

    started_at: datetime
    completed_at: datetime


# =============================================================================
# Handler
# =============================================================================

# (osm_id, name, place tag, lat, lon)
PlaceRow = Tuple[int, str, str, float, float]
# (kind, osm_id, name, admin_level, wkb)
BoundaryRow = Tuple[str, int, str, str, bytes]


class PlaceBoundaryHandler(osmium.SimpleHandler):
    """
    Collect named `place=*` nodes and named areas carrying `admin_level`.

    Because the handler defines `area`, pyosmium assembles multipolygons
    from closed ways and relations during apply_file.
    """

    def __init__(self, lang: str = "en"):
        super().__init__()
        self.lang = lang
        self.places: List[PlaceRow] = []
        self.boundaries: List[BoundaryRow] = []

        self._wkb_factory = osmium.geom.WKBFactory()
        self._seen_boundary: set[Tuple[str, int]] = set()

    def node(self, n: osmium.osm.Node) -> None:
        place = n.tags.get("place")
        if not place or not n.location.valid():
            return
        name = preferred_name(n.tags, self.lang)
        if not name:
            return
        self.places.append(
            (n.id, name, place, n.location.lat, n.location.lon)
        )

    def area(self, a: osmium.osm.Area) -> None:
        tags = a.tags
        level = tags.get("admin_level")
        if not level:
            return
        name = preferred_name(tags, self.lang)
        if not name:
            return

        kind = "w" if a.from_way() else "r"
        osm_id = a.orig_id()
        if (kind, osm_id) in self._seen_boundary:
            return

        try:
            wkb_bytes = self._wkb_factory.create_multipolygon(a)
        except RuntimeError:
            # broken geometry
            return

        self.boundaries.append(
            (kind, osm_id, name, level, bytes.fromhex(wkb_bytes))
        )
        self._seen_boundary.add((kind, osm_id))


# =============================================================================
# Containment join
# =============================================================================

def join_containment(
    places: List[PlaceRow],
    boundaries: List[BoundaryRow],
) -> List[ContainmentFact]:
    """
    Point-in-polygon join: one fact per (place, boundary containing it).
    """
    rtree = RTreeIndex()
    prepared = {}

    for i, (_, _, _, _, geom_wkb) in enumerate(boundaries):
        geom = wkb.loads(geom_wkb)
        prepared[i] = prep(geom)
        rtree.insert(i, geom.bounds)

    facts: List[ContainmentFact] = []
    for place_id, place_name, place_tag, lat, lon in places:
        pt = Point(lon, lat)
        for i in sorted(rtree.intersection((lon, lat, lon, lat))):
            if not prepared[i].contains(pt):
                continue
            kind, boundary_id, boundary_name, level, _ = boundaries[i]
            facts.append(
                ContainmentFact(
                    place_osmtype="n",
                    place_id=place_id,
                    place_name=place_name,
                    place_type=place_tag,
                    place_lat=lat,
                    place_lon=lon,
                    boundary_osmtype=kind,
                    boundary_id=boundary_id,
                    boundary_name=boundary_name,
                    boundary_admin_level=level,
                )
            )
    return facts


# =============================================================================
# Public API
# =============================================================================

def extract_containment(
    *,
    osm_path: Path,
    csv_path: Path,
    lang: str = "en",
    overwrite: bool = False,
    progress_cb: Optional[Callable[[str], None]] = None,
) -> ExtractResult:
    """
    Build the place-in-area CSV from an OSM file (.osm, .osm.pbf, ...).
    """
    started_at = datetime.now(timezone.utc)
    osm_path = Path(osm_path).expanduser().resolve()
    csv_path = Path(csv_path).expanduser().resolve()

    if not osm_path.exists():
        raise FileNotFoundError(osm_path)
    if csv_path.exists() and not overwrite:
        raise FileExistsError(csv_path)

    def log(msg: str) -> None:
        if progress_cb:
            progress_cb(msg)

    log("OSM extract: places and admin areas")
    handler = PlaceBoundaryHandler(lang)
    handler.apply_file(str(osm_path), locations=True)

    log(
        f"OSM extract: containment ({len(handler.places):,} places, "
        f"{len(handler.boundaries):,} areas)"
    )
    facts = join_containment(handler.places, handler.boundaries)

    log(f"OSM extract: writing {csv_path}")
    write_containment_csv(csv_path, facts)

    return ExtractResult(
        osm_path=osm_path,
        csv_path=csv_path,
        place_count=len(handler.places),
        boundary_count=len(handler.boundaries),
        fact_count=len(facts),
        started_at=started_at,
        completed_at=datetime.now(timezone.utc),
    )
