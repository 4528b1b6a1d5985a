# src/xiny/chains/governor.py

from __future__ import annotations

import logging
from dataclasses import dataclass

from xiny.chains.finished import FinishedChains
from xiny.chains.frontier import Frontier
from xiny.chains.typedefs import FrontierEntry
from xiny.config.settings import SearchLimits

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CleanupReport:
    before: int
    archived: int
    pruned: int
    dropped: int

    @property
    def after(self) -> int:
        return self.before - self.pruned - self.dropped


class MemoryGovernor:
    """
    Keeps the frontier near `limits.capacity` entries.

    A clean-up runs three passes:
      1. archive: every multi-fact chain that beats the finished chain for
         its origin is copied into the finished store
      2. prune: multi-fact chains more than `retention_margin` facts shorter
         than the finished chain for their origin are dropped; seeds stay
      3. failsafe: while still over capacity, the worst entries go

    Archiving before pruning means memory pressure only costs the ability
    to extend a branch further, never a result already reached.
    """

    def __init__(self, limits: SearchLimits):
        self.limits = limits
        self.runs = 0

    def over_capacity(self, frontier: Frontier) -> bool:
        return len(frontier) > self.limits.capacity

    def enforce(self, frontier: Frontier, finished: FinishedChains) -> CleanupReport:
        before = len(frontier)
        logger.info("Doing memory clean up (%s frontier entries)", f"{before:,}")

        archived = 0
        for entry in frontier:
            if len(entry.chain) > 1 and finished.offer(entry.chain):
                archived += 1

        margin = self.limits.retention_margin

        def keep(entry: FrontierEntry) -> bool:
            chain = entry.chain
            if len(chain) == 1:
                return True
            return finished.longest_for(chain.origin) - len(chain) <= margin

        pruned = frontier.retain(keep)
        logger.debug("After pruning: %s", f"{len(frontier):,}")

        dropped = frontier.truncate(self.limits.floor)
        if dropped:
            logger.debug("Failsafe dropped %s, now %s", f"{dropped:,}", f"{len(frontier):,}")

        self.runs += 1
        return CleanupReport(before, archived, pruned, dropped)
