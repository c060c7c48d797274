import pytest

from scavenger.errors import ConfigurationError
from scavenger.rng import RandomSource


def test_unique_indices_are_distinct_and_in_range():
    rng = RandomSource(4)
    for _ in range(50):
        picked = rng.unique_indices(5, 17)
        assert len(picked) == 5
        assert len(set(picked)) == 5
        assert all(0 <= i < 17 for i in picked)
    assert sorted(rng.unique_indices(5, 5)) == [0, 1, 2, 3, 4]


def test_unique_indices_refuses_impossible_request():
    with pytest.raises(ConfigurationError):
        RandomSource(1).unique_indices(5, 4)


def test_remove_random_pops_from_list():
    rng = RandomSource(2)
    pool = list(range(6))
    taken = [rng.remove_random(pool) for _ in range(6)]
    assert sorted(taken) == list(range(6))
    assert pool == []
    with pytest.raises(ValueError):
        rng.remove_random(pool)


def test_seeded_sources_repeat():
    a, b = RandomSource(9), RandomSource(9)
    assert [a.random() for _ in range(5)] == [b.random() for _ in range(5)]
    assert a.shuffle(list(range(10))) == b.shuffle(list(range(10)))


def test_weighted_choice():
    rng = RandomSource(3)
    assert rng.weighted_choice([("a", 0.0), ("b", 2.0)]) == "b"
    with pytest.raises(ValueError):
        rng.weighted_choice([("a", 0.0)])
    with pytest.raises(ValueError):
        rng.weighted_choice([("a", -1.0)])
