# src/xiny/gazetteer/index.py
from __future__ import annotations

import logging
from typing import Dict, FrozenSet, Iterable, List

from xiny.gazetteer.typedefs import ContainmentFact

logger = logging.getLogger(__name__)

_EMPTY: FrozenSet[ContainmentFact] = frozenset()


class NameIndex:
    """
    Place name -> every retained fact whose place carries that name.

    A chain ending in boundary "B" continues with any fact listed under "B".
    Names match exactly; no normalization is applied.
    """

    def __init__(self, facts: Iterable[ContainmentFact]):
        logger.info("Generating name lookup")
        staging: Dict[str, List[ContainmentFact]] = {}
        for fact in facts:
            staging.setdefault(fact.place_name, []).append(fact)

        self._by_name: Dict[str, FrozenSet[ContainmentFact]] = {
            name: frozenset(group) for name, group in staging.items()
        }

    def lookup(self, name: str) -> FrozenSet[ContainmentFact]:
        return self._by_name.get(name, _EMPTY)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._by_name)

    def continuations(self, fact: ContainmentFact) -> List[ContainmentFact]:
        """
        Facts that may follow `fact` in a chain, in (place_id, boundary_id)
        order so branching is reproducible between runs.
        """
        return sorted(self.lookup(fact.boundary_name))
