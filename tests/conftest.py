"""
Shared fixtures for the xiny test suite.

Facts are built with `make_fact`; ids default to a running counter so that
tests only spell out the names and coordinates they care about.
"""

import itertools

import pytest

from xiny.gazetteer.store import FactStore
from xiny.gazetteer.typedefs import ContainmentFact

_ids = itertools.count(1000)


def build_fact(
    place_name,
    boundary_name,
    *,
    place_id=None,
    boundary_id=None,
    lat=0.0,
    lon=0.0,
    place_type="village",
    admin_level="8",
    place_osmtype="n",
    boundary_osmtype="r",
):
    return ContainmentFact(
        place_osmtype=place_osmtype,
        place_id=place_id if place_id is not None else next(_ids),
        place_name=place_name,
        place_type=place_type,
        place_lat=lat,
        place_lon=lon,
        boundary_osmtype=boundary_osmtype,
        boundary_id=boundary_id if boundary_id is not None else next(_ids),
        boundary_name=boundary_name,
        boundary_admin_level=admin_level,
    )


@pytest.fixture
def make_fact():
    return build_fact


@pytest.fixture
def linear_facts():
    """Alpha in Beta, Beta in Gamma, Gamma in Delta."""
    return [
        build_fact("Alpha", "Beta", place_id=1, boundary_id=101, lat=0.0, lon=0.0),
        build_fact("Beta", "Gamma", place_id=2, boundary_id=102, lat=1.0, lon=0.0),
        build_fact("Gamma", "Delta", place_id=3, boundary_id=103, lat=2.0, lon=0.0),
    ]


@pytest.fixture
def linear_store(linear_facts):
    return FactStore.from_facts(linear_facts)
