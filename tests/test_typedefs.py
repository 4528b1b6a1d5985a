import pytest

from xiny.chains.typedefs import Chain, FrontierEntry, FrontierKey
from xiny.gazetteer.typedefs import ContainmentFact, osm_url


def test_osm_url():
    assert osm_url("n", 17807753) == "https://www.openstreetmap.org/node/17807753"
    assert osm_url("w", 5) == "https://www.openstreetmap.org/way/5"
    assert osm_url("r", 7444) == "https://www.openstreetmap.org/relation/7444"
    with pytest.raises(ValueError):
        osm_url("x", 1)


def test_fact_identity_ignores_names(make_fact):
    a = make_fact("Alpha", "Beta", place_id=1, boundary_id=2)
    b = make_fact("Other", "Name", place_id=1, boundary_id=2)
    c = make_fact("Alpha", "Beta", place_id=1, boundary_id=3)
    assert a == b
    assert hash(a) == hash(b)
    assert a != c
    assert len({a, b, c}) == 2


def test_fact_ordering(make_fact):
    facts = [
        make_fact("a", "b", place_id=2, boundary_id=1),
        make_fact("a", "b", place_id=1, boundary_id=9),
        make_fact("a", "b", place_id=1, boundary_id=3),
    ]
    assert [f.key for f in sorted(facts)] == [(1, 3), (1, 9), (2, 1)]


def test_fact_rejects_unknown_kind():
    with pytest.raises(ValueError):
        ContainmentFact("q", 1, "a", "village", 0.0, 0.0, "r", 2, "b", "8")


def test_fact_urls(make_fact):
    f = make_fact("a", "b", place_id=5, boundary_id=6, boundary_osmtype="w")
    assert f.place_url.endswith("/node/5")
    assert f.boundary_url.endswith("/way/6")


def test_chain_extend_copies(linear_facts):
    alpha, beta, gamma = linear_facts
    c1 = Chain.seed(alpha)
    c2 = c1.extend(beta)
    c3 = c2.extend(gamma)

    assert len(c1) == 1
    assert len(c2) == 2
    assert len(c3) == 3
    assert c3.origin is alpha
    assert c3.last is gamma
    assert list(c2) == [alpha, beta]


def test_chain_extend_requires_name_link(linear_facts):
    alpha, _, gamma = linear_facts
    with pytest.raises(ValueError):
        Chain.seed(alpha).extend(gamma)


def test_chain_reuse_guard(make_fact):
    a = make_fact("Alpha", "Beta", place_id=1, boundary_id=10)
    same_place = make_fact("Beta", "X", place_id=1, boundary_id=11)
    same_boundary = make_fact("Beta", "Y", place_id=2, boundary_id=10)
    fresh = make_fact("Beta", "Z", place_id=3, boundary_id=12)
    chain = Chain.seed(a)

    assert chain.reuses(same_place)
    assert chain.reuses(same_boundary)
    assert not chain.reuses(fresh)
    with pytest.raises(ValueError):
        chain.extend(same_place)


def test_empty_chain_rejected():
    with pytest.raises(ValueError):
        Chain(())


def test_key_prefers_longer_then_further(linear_facts):
    alpha, beta, _ = linear_facts
    seed = FrontierKey.seed()
    step = seed.after_step(alpha, beta)

    assert step.length == 2
    assert step < seed
    assert step.dispersion < 0

    near = FrontierKey(-3, -1_000)
    far = FrontierKey(-3, -50_000)
    assert far < near


def test_entries_with_equal_keys_are_ordered_by_chain(make_fact):
    a = make_fact("A", "B", place_id=1, boundary_id=10)
    b = make_fact("A", "B", place_id=2, boundary_id=10)
    key = FrontierKey.seed()
    ea = FrontierEntry(key, Chain.seed(a))
    eb = FrontierEntry(key, Chain.seed(b))

    assert ea < eb
    assert not eb < ea
    assert ea != eb
    assert ea == FrontierEntry(key, Chain.seed(a))
