# src/xiny/chains/frontier.py

from __future__ import annotations

import heapq
from typing import Callable, Iterable, Iterator, List, Optional

from xiny.chains.typedefs import Chain, FrontierEntry, FrontierKey
from xiny.gazetteer.index import NameIndex
from xiny.gazetteer.typedefs import ContainmentFact


class Frontier:
    """
    Chains still eligible for extension, as a binary heap of FrontierEntry.

    pop() hands out the entry with the smallest key: the longest chain,
    and among those the one that has travelled furthest.
    """

    def __init__(self, entries: Optional[Iterable[FrontierEntry]] = None):
        self._heap: List[FrontierEntry] = list(entries or [])
        heapq.heapify(self._heap)
        self.seed_count = sum(1 for e in self._heap if len(e.chain) == 1)

    @classmethod
    def seeded(cls, facts: Iterable[ContainmentFact], index: NameIndex) -> "Frontier":
        """
        One single-fact chain for every fact whose boundary name is also a
        place name, i.e. every fact that could be extended at least once.
        """
        key = FrontierKey.seed()
        return cls(
            FrontierEntry(key, Chain.seed(f))
            for f in facts
            if f.boundary_name in index
        )

    # ------------------------------------------------------------------
    # Queue operations
    # ------------------------------------------------------------------

    def push(self, key: FrontierKey, chain: Chain) -> None:
        heapq.heappush(self._heap, FrontierEntry(key, chain))

    def pop(self) -> Optional[FrontierEntry]:
        if not self._heap:
            return None
        return heapq.heappop(self._heap)

    def peek(self) -> Optional[FrontierEntry]:
        return self._heap[0] if self._heap else None

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __iter__(self) -> Iterator[FrontierEntry]:
        """Entries in no particular order."""
        return iter(self._heap)

    # ------------------------------------------------------------------
    # Bulk removal (memory clean-up)
    # ------------------------------------------------------------------

    def retain(self, keep: Callable[[FrontierEntry], bool]) -> int:
        """Drop every entry for which `keep` is false. Returns count dropped."""
        before = len(self._heap)
        self._heap = [e for e in self._heap if keep(e)]
        heapq.heapify(self._heap)
        return before - len(self._heap)

    def truncate(self, size: int) -> int:
        """
        Keep only the `size` best entries. Returns count dropped.
        """
        before = len(self._heap)
        if before <= size:
            return 0
        # nsmallest returns a sorted list, which is already a valid heap
        self._heap = heapq.nsmallest(size, self._heap)
        return before - len(self._heap)

    def drain(self) -> List[FrontierEntry]:
        """Remove and return all entries, best first."""
        out = sorted(self._heap)
        self._heap = []
        return out
