# src/xiny/config/settings.py
from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_INPUT = "place-in-area.csv.gz"
DEFAULT_REPORT = "distances.md"

DEFAULT_CAPACITY = 8_000_000
DEFAULT_RETENTION_MARGIN = 10
DEFAULT_MAX_STEPS = 10**12
DEFAULT_PROGRESS_EVERY = 10_000

DEFAULT_REPORT_LIMIT = 1001

# ---------------------------------------------------------------------------
# `place=*` tag policy
# ---------------------------------------------------------------------------

# Places we chain through.
ALLOWED_PLACE_TAGS: FrozenSet[str] = frozenset({
    "city",
    "town",
    "village",
    "suburb",
    "neighbourhood",
    "square",
    "quarter",
    "islet",
    "island",
    "municipality",
    "city_block",
    "district",
    "BAMYANGA",
    "borough",
    "block",
    "hamlet",
})

# Known tags we deliberately skip. Anything outside both sets is "unknown".
IGNORED_PLACE_TAGS: FrozenSet[str] = frozenset({
    "locality",
    "isolated_dwelling",
    "farm",
    "country",
    "unknown",
    "plot",
    "yes",
    "field",
    "county",
    "state",
    "single_dwelling",
    "region",
    "fixme",
    "FIXME",
    "allotments",
})


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SearchLimits:
    """
    Resource limits for the chain search.

      - capacity: frontier size that triggers a memory clean-up
      - retention_margin: during clean-up, chains more than this many facts
        shorter than the best chain for their origin are dropped
      - max_steps: hard iteration ceiling
      - progress_every: steps between progress reports
    """

    capacity: int = DEFAULT_CAPACITY
    retention_margin: int = DEFAULT_RETENTION_MARGIN
    max_steps: int = DEFAULT_MAX_STEPS
    progress_every: int = DEFAULT_PROGRESS_EVERY

    def __post_init__(self) -> None:
        if self.capacity < 0:
            raise ValueError(f"capacity must be >= 0, got {self.capacity}")
        if self.retention_margin < 0:
            raise ValueError(
                f"retention_margin must be >= 0, got {self.retention_margin}"
            )
        if self.max_steps <= 0:
            raise ValueError(f"max_steps must be > 0, got {self.max_steps}")
        if self.progress_every <= 0:
            raise ValueError(
                f"progress_every must be > 0, got {self.progress_every}"
            )

    @property
    def floor(self) -> int:
        """Smallest frontier size the clean-up failsafe trims down to."""
        return max(self.capacity, 1)


@dataclass(frozen=True)
class ReportSettings:
    limit: int = DEFAULT_REPORT_LIMIT
    min_length: int = 2

    def __post_init__(self) -> None:
        if self.limit < 0:
            raise ValueError(f"limit must be >= 0, got {self.limit}")
        if self.min_length < 1:
            raise ValueError(f"min_length must be >= 1, got {self.min_length}")


@dataclass(frozen=True)
class PlaceTagPolicy:
    allowed: FrozenSet[str] = ALLOWED_PLACE_TAGS
    ignored: FrozenSet[str] = IGNORED_PLACE_TAGS

    def classify(self, tag: str) -> str:
        """Return "allowed", "ignored" or "unknown"."""
        if tag in self.allowed:
            return "allowed"
        if tag in self.ignored:
            return "ignored"
        return "unknown"
