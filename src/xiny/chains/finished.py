# src/xiny/chains/finished.py

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple

from xiny.chains.typedefs import Chain
from xiny.gazetteer.typedefs import ContainmentFact


class FinishedChains:
    """
    The longest chain found so far for each origin fact.

    A stored chain is only ever replaced by a strictly longer one, so the
    length recorded for an origin never goes down.
    """

    def __init__(self) -> None:
        self._by_origin: Dict[ContainmentFact, Chain] = {}

    def offer(self, chain: Chain) -> bool:
        """Store `chain` if it beats the current best for its origin."""
        current = self._by_origin.get(chain.origin)
        if current is not None and len(chain) <= len(current):
            return False
        self._by_origin[chain.origin] = chain
        return True

    def get(self, origin: ContainmentFact) -> Optional[Chain]:
        return self._by_origin.get(origin)

    def longest_for(self, origin: ContainmentFact) -> int:
        """Length of the best chain for `origin`, 0 if there is none."""
        current = self._by_origin.get(origin)
        return len(current) if current is not None else 0

    def __len__(self) -> int:
        return len(self._by_origin)

    def __contains__(self, origin: object) -> bool:
        return origin in self._by_origin

    def __iter__(self) -> Iterator[Chain]:
        return iter(self._by_origin.values())

    def items(self) -> Iterator[Tuple[ContainmentFact, Chain]]:
        return iter(self._by_origin.items())

    def ranked(self, min_length: int = 1) -> List[Chain]:
        """
        Chains of at least `min_length` facts, longest first. Equal lengths
        are ordered by origin so output is stable.
        """
        chains = [c for c in self._by_origin.values() if len(c) >= min_length]
        chains.sort(key=lambda c: (-len(c), c.sort_key))
        return chains

    def longest(self) -> int:
        return max((len(c) for c in self._by_origin.values()), default=0)
