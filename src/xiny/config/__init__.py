"""
Configuration defaults and settings objects for xiny.
"""

from .settings import (
    ALLOWED_PLACE_TAGS,
    DEFAULT_INPUT,
    DEFAULT_REPORT,
    IGNORED_PLACE_TAGS,
    PlaceTagPolicy,
    ReportSettings,
    SearchLimits,
)

__all__ = [
    "ALLOWED_PLACE_TAGS",
    "DEFAULT_INPUT",
    "DEFAULT_REPORT",
    "IGNORED_PLACE_TAGS",
    "PlaceTagPolicy",
    "ReportSettings",
    "SearchLimits",
]
