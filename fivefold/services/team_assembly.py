"""
Greedy team assembly from a candidate pool.

Phases:
1. Trivial: pool no larger than the desired size -> whole pool, original order.
2. Priority (optional): the ceil(size / 2) best scorers in the priority role go in first.
3. Fill: one member at a time, pick the best scorer in a target role. The target is the
   team's weakest role when balance_factor < 50 (diverse) and its strongest role
   otherwise (specialized).

This is a heuristic, not an optimal assignment. Every sort carries a total tie-break
(canonical role order for roles, candidate id ascending for candidates) so the same
input always yields the same team.
"""
from __future__ import annotations

import logging
import math
from typing import Sequence

from fivefold.models import Candidate, RoleScoreVector, SuggestedTeam, TeamCompositionParams
from fivefold.roles import ROLE_ORDER, Role, role_rank

logger = logging.getLogger(__name__)

BALANCE_PIVOT = 50  # balance_factor below this -> diverse strategy
BALANCE_MIN = 0
BALANCE_MAX = 100


# ---------- Exceptions ----------


class InvalidParameterError(ValueError):
    """Composition parameters a caller should never send (e.g. desired_size < 1)."""


# ---------- Helpers ----------


def _validate(pool: Sequence[Candidate], params: TeamCompositionParams) -> None:
    if params.desired_size < 1:
        raise InvalidParameterError(f"desired_size must be >= 1 (got {params.desired_size})")
    if not BALANCE_MIN <= params.balance_factor <= BALANCE_MAX:
        raise InvalidParameterError(
            f"balance_factor must be between {BALANCE_MIN} and {BALANCE_MAX} (got {params.balance_factor})"
        )
    if params.priority_role is not None and not isinstance(params.priority_role, Role):
        raise InvalidParameterError(f"priority_role must be a Role (got {params.priority_role!r})")
    ids = [c.candidate_id for c in pool]
    if len(set(ids)) != len(ids):
        raise InvalidParameterError("Candidate ids must be unique within a pool")
    # Tie-breaks order by id, so ids must be mutually comparable.
    if len({isinstance(i, str) for i in ids}) > 1:
        raise InvalidParameterError("Candidate ids must be all numbers or all strings")


def _by_role_score(candidates: Sequence[Candidate], role: Role) -> list[Candidate]:
    """Highest score in role first; equal scores by candidate id ascending."""
    return sorted(candidates, key=lambda c: (-c.scores.score(role), c.candidate_id))


def aggregate_scores(members: Sequence[Candidate]) -> RoleScoreVector:
    """Role-wise sum of the members' vectors (zero vector for no members)."""
    return RoleScoreVector.sum(m.scores for m in members)


def weakest_role(aggregate: RoleScoreVector) -> Role:
    return min(ROLE_ORDER, key=lambda r: (aggregate.score(r), role_rank(r)))


def strongest_role(aggregate: RoleScoreVector) -> Role:
    return min(ROLE_ORDER, key=lambda r: (-aggregate.score(r), role_rank(r)))


def target_role(aggregate: RoleScoreVector, balance_factor: float) -> Role:
    """Role the next pick should score highest in."""
    if balance_factor < BALANCE_PIVOT:
        return weakest_role(aggregate)
    return strongest_role(aggregate)


def priority_count(desired_size: int) -> int:
    """Seats reserved for priority-role scorers: half the team, rounded up."""
    return math.ceil(desired_size / 2)


# ---------- Engine ----------


def assemble(
    pool: Sequence[Candidate],
    params: TeamCompositionParams,
    log: logging.Logger | None = None,
) -> SuggestedTeam:
    """
    Propose a team of min(len(pool), params.desired_size) members.
    The caller's pool is never mutated. Raises InvalidParameterError for bad params.
    """
    log = log or logger
    _validate(pool, params)
    size = params.desired_size

    if len(pool) <= size:
        members = tuple(pool)
        log.debug("Pool of %d fits desired size %d; taking everyone", len(pool), size)
        return SuggestedTeam(members=members, aggregate=aggregate_scores(members))

    team: list[Candidate] = []
    remaining: list[Candidate] = list(pool)

    if params.priority_role is not None:
        ranked = _by_role_score(remaining, params.priority_role)
        count = priority_count(size)
        team = ranked[:count]
        remaining = ranked[count:]
        log.debug(
            "Priority phase: %d seats for %s -> %s",
            count,
            params.priority_role.value,
            [c.candidate_id for c in team],
        )

    while len(team) < size and remaining:
        aggregate = aggregate_scores(team)
        role = target_role(aggregate, params.balance_factor)
        ranked = _by_role_score(remaining, role)
        pick = ranked[0]
        team.append(pick)
        remaining = ranked[1:]
        log.debug("Fill phase: target %s -> %s", role.value, pick.candidate_id)

    members = tuple(team)
    return SuggestedTeam(members=members, aggregate=aggregate_scores(members))
