import random

import pytest
from missionpicker.errors import InvalidArgument
from missionpicker.services.catalogue import DAILY_POOL, WEEKLY_POOL, pick_n, pick_one

POOL = ["a", "b", "c", "d", "e"]


def test_pools_are_non_empty_and_distinct():
    for pool in (DAILY_POOL, WEEKLY_POOL):
        assert pool
        assert len(set(pool)) == len(pool)


def test_pick_n_returns_distinct_members():
    picks = pick_n(POOL, 2, random.Random(1))
    assert len(picks) == 2
    assert len(set(picks)) == 2
    assert all(p in POOL for p in picks)


def test_pick_n_whole_pool_is_a_permutation():
    picks = pick_n(POOL, len(POOL), random.Random(7))
    assert sorted(picks) == POOL


def test_pick_n_too_many_fails():
    with pytest.raises(InvalidArgument) as exc:
        pick_n(POOL, 6, random.Random(1))
    assert exc.value.code == "INVALID_ARGUMENT"
    assert exc.value.details == {"n": 6, "pool_size": 5}
    assert exc.value.to_dict() == {
        "code": "INVALID_ARGUMENT",
        "message": "Cannot pick 6 missions from a pool of 5",
        "details": {"n": 6, "pool_size": 5},
    }


def test_pick_n_negative_fails():
    with pytest.raises(InvalidArgument):
        pick_n(POOL, -1)


def test_pick_one_from_empty_pool_fails():
    with pytest.raises(InvalidArgument):
        pick_one([])


def test_seeded_picks_are_reproducible():
    assert pick_one(DAILY_POOL, random.Random(123)) == pick_one(DAILY_POOL, random.Random(123))
    assert pick_n(WEEKLY_POOL, 3, random.Random(5)) == pick_n(WEEKLY_POOL, 3, random.Random(5))
