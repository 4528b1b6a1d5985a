# src/xiny/chains/search.py

from __future__ import annotations

import logging
import signal
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from xiny.chains.finished import FinishedChains
from xiny.chains.frontier import Frontier
from xiny.chains.governor import MemoryGovernor
from xiny.chains.typedefs import FrontierEntry
from xiny.config.settings import SearchLimits
from xiny.gazetteer.index import NameIndex
from xiny.gazetteer.store import FactStore

logger = logging.getLogger(__name__)


# =====================================================
#  STOP FLAG
# =====================================================

class StopFlag:
    """Process-wide "please stop" flag, safe to set from a signal handler."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def request(self) -> None:
        self._event.set()

    def is_set(self) -> bool:
        return self._event.is_set()


def install_interrupt_handler(flag: StopFlag):
    """
    Route Ctrl-C to `flag`. Returns the previous SIGINT handler so the
    caller can restore it.
    """

    def _handler(signum, frame):
        flag.request()

    return signal.signal(signal.SIGINT, _handler)


# =====================================================
#  STATE / RESULTS
# =====================================================

class SearchState(Enum):
    RUNNING = "running"
    DRAINING = "draining"
    DONE = "done"


class StopReason(Enum):
    EXHAUSTED = "exhausted"
    INTERRUPTED = "interrupted"
    STEP_LIMIT = "step_limit"


@dataclass(frozen=True)
class SearchProgress:
    steps: int
    live: int
    finished: int
    longest: int


@dataclass
class SearchOutcome:
    finished: FinishedChains
    steps: int
    reason: StopReason
    cleanups: int
    longest: int


# =====================================================
#  DRIVER
# =====================================================

class ChainSearch:
    """
    Best-first search for the longest name-linked containment chains.

    Each step pops the best frontier chain and looks up its last boundary
    name among place names. With no match the chain is finished. Otherwise
    every matching fact forks a new, one-longer chain; a match that would
    revisit a place or boundary finishes the chain instead.

    The run ends when the frontier is empty, when `stop` is set (checked
    once per step), or after `limits.max_steps` steps. Whatever the reason,
    multi-fact chains left in the frontier are flushed into the finished
    store before returning.
    """

    def __init__(
        self,
        store: FactStore,
        index: NameIndex,
        limits: Optional[SearchLimits] = None,
        stop: Optional[StopFlag] = None,
        on_progress: Optional[Callable[[SearchProgress], None]] = None,
    ):
        self.index = index
        self.limits = limits or SearchLimits()
        self.stop = stop or StopFlag()
        self.on_progress = on_progress

        self.frontier = Frontier.seeded(store, index)
        self.finished = FinishedChains()
        self.governor = MemoryGovernor(self.limits)

        self.state = SearchState.RUNNING
        self.steps = 0
        self.longest = 1 if self.frontier else 0

    @classmethod
    def from_store(cls, store: FactStore, **kwargs) -> "ChainSearch":
        return cls(store, NameIndex(store), **kwargs)

    # ------------------------------------------------------------------

    def run(self) -> SearchOutcome:
        logger.info(
            "Starting main loop calculation with %s seed chains",
            f"{len(self.frontier):,}",
        )
        reason = self._loop()

        self.state = SearchState.DRAINING
        self._flush()
        self.state = SearchState.DONE

        logger.info(
            "Search finished (%s) after %s steps: %s chains, longest %d",
            reason.value,
            f"{self.steps:,}",
            f"{len(self.finished):,}",
            self.longest,
        )
        return SearchOutcome(
            finished=self.finished,
            steps=self.steps,
            reason=reason,
            cleanups=self.governor.runs,
            longest=self.longest,
        )

    def _loop(self) -> StopReason:
        while True:
            entry = self.frontier.pop()
            if entry is None:
                return StopReason.EXHAUSTED

            if self.stop.is_set():
                logger.info("Stop requested, breaking out with what we have now")
                # put it back so the flush sees it
                self.frontier.push(entry.key, entry.chain)
                return StopReason.INTERRUPTED

            self.longest = max(self.longest, len(entry.chain))
            self._expand(entry)

            if self.governor.over_capacity(self.frontier):
                self.governor.enforce(self.frontier, self.finished)

            self.steps += 1
            if self.steps % self.limits.progress_every == 0:
                self._report_progress()

            if self.steps >= self.limits.max_steps:
                logger.warning("Reached step limit of %s", f"{self.limits.max_steps:,}")
                return StopReason.STEP_LIMIT

    def _expand(self, entry: FrontierEntry) -> None:
        chain = entry.chain
        candidates = self.index.continuations(chain.last)

        if not candidates:
            # can't go any further
            self.finished.offer(chain)
            return

        for fact in candidates:
            if chain.reuses(fact):
                # would loop back on itself
                self.finished.offer(chain)
                continue
            self.frontier.push(entry.key.after_step(chain.last, fact), chain.extend(fact))

    def _flush(self) -> None:
        for entry in self.frontier.drain():
            if len(entry.chain) > 1:
                self.finished.offer(entry.chain)

    def _report_progress(self) -> None:
        progress = SearchProgress(
            steps=self.steps,
            live=max(0, len(self.frontier) - self.frontier.seed_count),
            finished=len(self.finished),
            longest=self.longest,
        )
        logger.info(
            "Done %s steps, intermediate_chains: %s finished_chains: %s longest: %d",
            f"{progress.steps:,}",
            f"{progress.live:,}",
            f"{progress.finished:,}",
            progress.longest,
        )
        if self.on_progress:
            self.on_progress(progress)


def find_chains(
    store: FactStore,
    limits: Optional[SearchLimits] = None,
    stop: Optional[StopFlag] = None,
    on_progress: Optional[Callable[[SearchProgress], None]] = None,
) -> SearchOutcome:
    """Build the name index over `store` and run a search to completion."""
    return ChainSearch.from_store(
        store, limits=limits, stop=stop, on_progress=on_progress
    ).run()
