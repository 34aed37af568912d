"""
Team assembly test suite.

Validates: parameter errors, trivial case (whole pool in order), size invariant,
determinism, priority phase, diverse vs specialized fill, id tie-breaks, and that the
caller's pool is never mutated.
"""
from __future__ import annotations

import logging
import random
from pathlib import Path

import pytest

import sys
sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))

from fivefold.models import Candidate, RoleScoreVector, TeamCompositionParams
from fivefold.roles import Role
from fivefold.services.team_assembly import (
    InvalidParameterError,
    assemble,
    priority_count,
    strongest_role,
    target_role,
    weakest_role,
)


def _c(cid, **scores) -> Candidate:
    return Candidate(candidate_id=cid, scores=RoleScoreVector(**scores))


def _random_pool(n: int, seed: int) -> list[Candidate]:
    rng = random.Random(seed)
    return [
        _c(i + 1, **{r.value: rng.randint(0, 30) for r in Role})
        for i in range(n)
    ]


@pytest.fixture
def mixed_pool() -> list[Candidate]:
    """Two apostles, one prophet, one evangelist, one weak teacher."""
    return [
        _c(1, apostle=10),
        _c(2, apostle=9),
        _c(3, prophet=5),
        _c(4, evangelist=5),
        _c(5, teacher=3),
    ]


# ---------- Parameter errors ----------


@pytest.mark.parametrize("size", [0, -1, -10])
def test_desired_size_below_one_rejected(size):
    with pytest.raises(InvalidParameterError):
        assemble([_c(1, apostle=1)], TeamCompositionParams(desired_size=size))


def test_desired_size_rejected_even_for_empty_pool():
    """Not clamped: a caller bug is reported regardless of the pool."""
    with pytest.raises(InvalidParameterError):
        assemble([], TeamCompositionParams(desired_size=0))


@pytest.mark.parametrize("balance", [-1, 100.5, 250])
def test_balance_factor_out_of_range_rejected(balance):
    with pytest.raises(InvalidParameterError):
        assemble([_c(1)], TeamCompositionParams(desired_size=1, balance_factor=balance))


def test_duplicate_ids_rejected():
    with pytest.raises(InvalidParameterError):
        assemble([_c(1), _c(1)], TeamCompositionParams(desired_size=1))


def test_mixed_id_types_rejected():
    with pytest.raises(InvalidParameterError):
        assemble([_c(1), _c("1")], TeamCompositionParams(desired_size=1))


def test_invalid_parameter_is_value_error():
    assert issubclass(InvalidParameterError, ValueError)


# ---------- Trivial case ----------


def test_empty_pool_gives_empty_team():
    team = assemble([], TeamCompositionParams(desired_size=3))
    assert team.members == ()
    assert team.aggregate == RoleScoreVector.zero()


def test_two_specialists_fill_team_of_two():
    """Pool of 2, size 2 -> both, aggregate is the role-wise sum."""
    pool = [_c(1, apostle=10), _c(2, teacher=10)]
    team = assemble(pool, TeamCompositionParams(desired_size=2))
    assert team.member_ids == [1, 2]
    assert team.aggregate == RoleScoreVector(apostle=10, teacher=10)


def test_trivial_case_keeps_original_order():
    pool = [_c(3, prophet=1), _c(1, teacher=9), _c(2, apostle=4)]
    team = assemble(pool, TeamCompositionParams(desired_size=5, priority_role=Role.TEACHER))
    assert team.member_ids == [3, 1, 2]
    assert team.aggregate == RoleScoreVector(apostle=4, prophet=1, teacher=9)


# ---------- Invariants ----------


@pytest.mark.parametrize("pool_size", [0, 1, 4, 9, 17])
@pytest.mark.parametrize("desired", [1, 3, 5, 10])
def test_size_invariant(pool_size, desired):
    pool = _random_pool(pool_size, seed=pool_size * 31 + desired)
    for balance in (0, 49, 50, 100):
        for priority in (None, Role.EVANGELIST):
            params = TeamCompositionParams(desired_size=desired, balance_factor=balance, priority_role=priority)
            team = assemble(pool, params)
            assert len(team.members) == min(pool_size, desired)
            assert len(set(team.member_ids)) == len(team.members)


def test_aggregate_is_sum_of_members():
    pool = _random_pool(12, seed=7)
    team = assemble(pool, TeamCompositionParams(desired_size=5, balance_factor=20))
    assert team.aggregate == RoleScoreVector.sum(m.scores for m in team.members)


def test_assemble_deterministic():
    pool = _random_pool(15, seed=42)
    params = TeamCompositionParams(desired_size=6, balance_factor=30, priority_role=Role.SHEPHERD)
    first = assemble(pool, params)
    second = assemble(list(pool), params)
    assert first == second


def test_pool_not_mutated():
    pool = _random_pool(10, seed=3)
    snapshot = list(pool)
    assemble(pool, TeamCompositionParams(desired_size=4, priority_role=Role.PROPHET))
    assert pool == snapshot


# ---------- Identical and all-zero pools ----------


def test_identical_candidates_pick_lowest_ids():
    """5 identical vectors, size 3, diverse -> first 3 by id, aggregate all 3s."""
    pool = [_c(cid, apostle=1, prophet=1, evangelist=1, shepherd=1, teacher=1) for cid in (5, 3, 1, 4, 2)]
    team = assemble(pool, TeamCompositionParams(desired_size=3, balance_factor=10))
    assert team.member_ids == [1, 2, 3]
    assert team.aggregate == RoleScoreVector(3, 3, 3, 3, 3)


def test_all_zero_pool_orders_by_id():
    pool = [_c("d"), _c("b"), _c("a"), _c("c")]
    team = assemble(pool, TeamCompositionParams(desired_size=2, balance_factor=80))
    assert team.member_ids == ["a", "b"]
    assert team.aggregate == RoleScoreVector.zero()


# ---------- Priority phase ----------


def test_priority_phase_takes_top_scorers_first():
    """size 4 -> ceil(4/2) = 2 priority seats, filled by the two best prophets."""
    prophet_scores = [3, 1, 25, 2, 4, 30, 0, 27, 5, 6]
    pool = [_c(i + 1, prophet=s, teacher=10 - i) for i, s in enumerate(prophet_scores)]
    team = assemble(pool, TeamCompositionParams(desired_size=4, priority_role=Role.PROPHET))
    assert len(team.members) == 4
    assert team.member_ids[:2] == [6, 8]


def test_priority_ties_broken_by_id():
    pool = [_c(9, evangelist=5), _c(4, evangelist=5), _c(7, evangelist=5), _c(1, evangelist=2)]
    team = assemble(pool, TeamCompositionParams(desired_size=3, priority_role=Role.EVANGELIST))
    # ceil(3/2) = 2 priority seats
    assert team.member_ids[:2] == [4, 7]


def test_priority_then_fill():
    pool = [
        _c(1, evangelist=9),
        _c(2, evangelist=8),
        _c(3, evangelist=7),
        _c(4, shepherd=6),
        _c(5, teacher=2),
    ]
    params = TeamCompositionParams(desired_size=3, balance_factor=0, priority_role=Role.EVANGELIST)
    team = assemble(pool, params)
    # Priority: 1, 2. Fill: aggregate has evangelist only; weakest is apostle (all 0 among
    # remaining -> lowest id 3).
    assert team.member_ids == [1, 2, 3]


def test_priority_role_accepts_herder_sourced_scores():
    """Vectors stored under 'herder' and 'shepherd' land on the same canonical role."""
    herder = Candidate(candidate_id=1, scores=RoleScoreVector.from_mapping({"herder": 12, "apostle": 1}))
    shepherd = Candidate(candidate_id=2, scores=RoleScoreVector.from_mapping({"shepherd": 11}))
    other = Candidate(candidate_id=3, scores=RoleScoreVector.from_mapping({"teacher": 20}))
    team = assemble([other, shepherd, herder], TeamCompositionParams(desired_size=2, priority_role=Role.SHEPHERD))
    # ceil(2/2) = 1 priority seat -> best shepherd (herder-sourced)
    assert team.member_ids[0] == 1


def test_priority_count():
    assert [priority_count(n) for n in (1, 2, 3, 4, 5, 10)] == [1, 1, 2, 2, 3, 5]


# ---------- Fill strategies ----------


def test_diverse_strategy_fills_weak_roles(mixed_pool):
    team = assemble(mixed_pool, TeamCompositionParams(desired_size=3, balance_factor=0))
    assert team.member_ids == [1, 3, 4]
    assert team.aggregate == RoleScoreVector(apostle=10, prophet=5, evangelist=5)


def test_specialized_strategy_reinforces_strong_role(mixed_pool):
    team = assemble(mixed_pool, TeamCompositionParams(desired_size=3, balance_factor=100))
    assert team.member_ids == [1, 2, 3]


def test_balance_pivot_is_50(mixed_pool):
    """49.9 -> diverse; exactly 50 -> specialized."""
    diverse = assemble(mixed_pool, TeamCompositionParams(desired_size=3, balance_factor=49.9))
    specialized = assemble(mixed_pool, TeamCompositionParams(desired_size=3, balance_factor=50))
    assert diverse.member_ids == [1, 3, 4]
    assert specialized.member_ids == [1, 2, 3]


def test_target_role_helpers():
    agg = RoleScoreVector(apostle=4, prophet=1, evangelist=9, shepherd=1, teacher=9)
    assert weakest_role(agg) == Role.PROPHET
    assert strongest_role(agg) == Role.EVANGELIST
    assert target_role(agg, 10) == Role.PROPHET
    assert target_role(agg, 90) == Role.EVANGELIST
    assert weakest_role(RoleScoreVector.zero()) == Role.APOSTLE
    assert strongest_role(RoleScoreVector.zero()) == Role.APOSTLE


def test_injected_logger_receives_decisions(caplog):
    log = logging.getLogger("tests.assembly")
    caplog.set_level(logging.DEBUG, logger="tests.assembly")
    pool = _random_pool(6, seed=1)
    assemble(pool, TeamCompositionParams(desired_size=3, priority_role=Role.TEACHER), log=log)
    messages = [r.getMessage() for r in caplog.records if r.name == "tests.assembly"]
    assert any(m.startswith("Priority phase") for m in messages)
    assert any(m.startswith("Fill phase") for m in messages)
