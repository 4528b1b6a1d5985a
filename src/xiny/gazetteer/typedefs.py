# src/xiny/gazetteer/typedefs.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple


# ---------------------------------------------------------------------------
# OSM object kinds
# ---------------------------------------------------------------------------

OSM_KINDS: Dict[str, str] = {
    "n": "node",
    "w": "way",
    "r": "relation",
}

OSM_BASE_URL = "https://www.openstreetmap.org"


def osm_url(kind: str, osm_id: int) -> str:
    """
    Browse URL of an OSM object, e.g. osm_url("r", 7444) ->
    https://www.openstreetmap.org/relation/7444
    """
    try:
        return f"{OSM_BASE_URL}/{OSM_KINDS[kind]}/{osm_id}"
    except KeyError:
        raise ValueError(f"Unknown OSM kind {kind!r}") from None


# ---------------------------------------------------------------------------
# Containment fact
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class ContainmentFact:
    """
    One observed "place P is inside boundary B" statement, as produced by
    the point-in-polygon join over OSM `place=*` nodes and `admin_level`
    areas.

    Identity is (place_id, boundary_id): two facts with the same ids are the
    same fact, whatever their names. Facts sort by place_id, then
    boundary_id.
    """

    place_osmtype: str
    place_id: int
    place_name: str
    place_type: str
    place_lat: float
    place_lon: float

    boundary_osmtype: str
    boundary_id: int
    boundary_name: str
    boundary_admin_level: str

    def __post_init__(self) -> None:
        for kind in (self.place_osmtype, self.boundary_osmtype):
            if kind not in OSM_KINDS:
                raise ValueError(f"Unknown OSM kind {kind!r}")

    @property
    def key(self) -> Tuple[int, int]:
        return (self.place_id, self.boundary_id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ContainmentFact):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __lt__(self, other: "ContainmentFact") -> bool:
        return self.key < other.key

    @property
    def place_coord(self) -> Tuple[float, float]:
        return (self.place_lat, self.place_lon)

    @property
    def place_url(self) -> str:
        return osm_url(self.place_osmtype, self.place_id)

    @property
    def boundary_url(self) -> str:
        return osm_url(self.boundary_osmtype, self.boundary_id)

    @property
    def self_named(self) -> bool:
        """True when the place carries its own boundary's name."""
        return self.place_name == self.boundary_name
