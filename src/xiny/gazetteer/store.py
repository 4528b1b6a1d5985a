# src/xiny/gazetteer/store.py
from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List

from xiny.gazetteer.typedefs import ContainmentFact

logger = logging.getLogger(__name__)


class FactStore:
    """
    Retained containment facts, grouped by place id.

    Often, in OSM, an admin boundary has a matching `place` node inside it
    (Paris the node is inside Paris the relation). Those places say nothing
    about nesting, so every place that sits in a boundary carrying its own
    name is dropped together with all of its facts.

    The store is read-only after construction.
    """

    def __init__(self, by_place: Dict[int, List[ContainmentFact]], received: int):
        self._by_place = by_place
        self.received = received
        self.retained = sum(len(v) for v in by_place.values())

    @classmethod
    def from_facts(cls, facts: Iterable[ContainmentFact]) -> "FactStore":
        by_place: Dict[int, List[ContainmentFact]] = {}
        seen = set()
        received = 0

        for fact in facts:
            if fact in seen:
                continue
            seen.add(fact)
            received += 1
            by_place.setdefault(fact.place_id, []).append(fact)

        logger.info("Removing places which are inside a boundary with the same name")
        by_place = {
            place_id: group
            for place_id, group in by_place.items()
            if not any(f.self_named for f in group)
        }

        store = cls(by_place, received)
        logger.info(
            "Have removed %s (%.1f%%) places",
            f"{store.removed:,}",
            store.removed_pct,
        )
        return store

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def removed(self) -> int:
        return self.received - self.retained

    @property
    def removed_pct(self) -> float:
        if not self.received:
            return 0.0
        return self.removed * 100.0 / self.received

    @property
    def place_count(self) -> int:
        return len(self._by_place)

    def facts_for_place(self, place_id: int) -> List[ContainmentFact]:
        return list(self._by_place.get(place_id, []))

    def __iter__(self) -> Iterator[ContainmentFact]:
        for group in self._by_place.values():
            yield from group

    def __len__(self) -> int:
        return self.retained

    def __contains__(self, fact: object) -> bool:
        if not isinstance(fact, ContainmentFact):
            return False
        return fact in self._by_place.get(fact.place_id, ())
