# src/xiny/chains/typedefs.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterator, Tuple

from xiny.gazetteer.typedefs import ContainmentFact
from xiny.spatial.distance import step_distance_m


# =====================================================
#  CHAIN
# =====================================================

@dataclass(frozen=True)
class Chain:
    """
    Facts linked by name: facts[i].boundary_name == facts[i + 1].place_name.

    No place id and no boundary id occurs twice. Chains are immutable;
    `extend` returns a new chain and leaves the receiver untouched.
    """

    facts: Tuple[ContainmentFact, ...]
    _place_ids: FrozenSet[int] = field(init=False, repr=False, compare=False)
    _boundary_ids: FrozenSet[int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.facts:
            raise ValueError("A chain holds at least one fact")
        object.__setattr__(
            self, "_place_ids", frozenset(f.place_id for f in self.facts)
        )
        object.__setattr__(
            self, "_boundary_ids", frozenset(f.boundary_id for f in self.facts)
        )

    @classmethod
    def seed(cls, fact: ContainmentFact) -> "Chain":
        return cls((fact,))

    # ------------------------------------------------------------------

    @property
    def origin(self) -> ContainmentFact:
        return self.facts[0]

    @property
    def last(self) -> ContainmentFact:
        return self.facts[-1]

    def __len__(self) -> int:
        return len(self.facts)

    def __iter__(self) -> Iterator[ContainmentFact]:
        return iter(self.facts)

    def __getitem__(self, i: int) -> ContainmentFact:
        return self.facts[i]

    @property
    def sort_key(self) -> Tuple[Tuple[int, int], ...]:
        return tuple(f.key for f in self.facts)

    # ------------------------------------------------------------------

    def reuses(self, fact: ContainmentFact) -> bool:
        """True if `fact`'s place or boundary already occurs in this chain."""
        return fact.place_id in self._place_ids or fact.boundary_id in self._boundary_ids

    def extend(self, fact: ContainmentFact) -> "Chain":
        if fact.place_name != self.last.boundary_name:
            raise ValueError(
                f"{fact.place_name!r} does not continue {self.last.boundary_name!r}"
            )
        if self.reuses(fact):
            raise ValueError(f"Fact {fact.key} would repeat a place or boundary")
        return Chain(self.facts + (fact,))


# =====================================================
#  FRONTIER KEY / ENTRY
# =====================================================

@dataclass(frozen=True, order=True)
class FrontierKey:
    """
    Sort key of a frontier entry; smaller pops first.

    neg_length puts longer chains first. dispersion is the running sum of
    minus each step's distance in meters, so among equally long chains the
    one covering more ground pops first.
    """

    neg_length: int
    dispersion: int

    @classmethod
    def seed(cls) -> "FrontierKey":
        return cls(-1, 0)

    def after_step(self, prev: ContainmentFact, new: ContainmentFact) -> "FrontierKey":
        step = step_distance_m(
            prev.place_lat, prev.place_lon, new.place_lat, new.place_lon
        )
        return FrontierKey(self.neg_length - 1, self.dispersion - step)

    @property
    def length(self) -> int:
        return -self.neg_length


class FrontierEntry:
    """
    A chain waiting in the frontier. Entries compare key first, then by the
    chain's fact ids so that every pair of distinct entries is ordered.
    """

    __slots__ = ("key", "chain")

    def __init__(self, key: FrontierKey, chain: Chain):
        self.key = key
        self.chain = chain

    def _cmp_tuple(self):
        return (self.key, self.chain.sort_key)

    def __lt__(self, other: "FrontierEntry") -> bool:
        return self._cmp_tuple() < other._cmp_tuple()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FrontierEntry):
            return NotImplemented
        return self._cmp_tuple() == other._cmp_tuple()

    def __hash__(self) -> int:
        return hash(self._cmp_tuple())

    def __repr__(self) -> str:
        return f"FrontierEntry(key={self.key!r}, len={len(self.chain)})"
