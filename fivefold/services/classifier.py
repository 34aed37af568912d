"""
Role profile classification.

Turns one role-score vector into primary/secondary role, dominance ratio and a
profile type. Pure and total: every vector classifies, an all-zero vector yields the
unknown sentinel.
"""
from __future__ import annotations

from fivefold.config import DEFAULT_THRESHOLDS, Thresholds
from fivefold.models import UNKNOWN_PROFILE, ProfileType, RoleProfile, RoleScoreVector
from fivefold.roles import ROLE_ORDER, Role, role_rank


def rank_roles(vector: RoleScoreVector) -> list[tuple[Role, float]]:
    """
    (role, score) pairs ordered by score descending.
    Equal scores keep canonical order, so the ranking is fully deterministic.
    """
    pairs = [(r, vector.score(r)) for r in ROLE_ORDER]
    return sorted(pairs, key=lambda p: (-p[1], role_rank(p[0])))


def profile_type_for(dominance_ratio: float, thresholds: Thresholds = DEFAULT_THRESHOLDS) -> ProfileType:
    # Both boundaries are inclusive on the moderate side.
    if dominance_ratio < thresholds.balanced_below:
        return ProfileType.BALANCED
    if dominance_ratio > thresholds.specialized_above:
        return ProfileType.SPECIALIZED
    return ProfileType.MODERATE


def classify(vector: RoleScoreVector, thresholds: Thresholds | None = None) -> RoleProfile:
    """Classify a vector. thresholds defaults to DEFAULT_THRESHOLDS."""
    thresholds = thresholds or DEFAULT_THRESHOLDS
    total = vector.total
    if total == 0:
        return UNKNOWN_PROFILE

    ranked = rank_roles(vector)
    primary, primary_score = ranked[0]
    # Five dimensions with at least one positive: second place always exists,
    # even when its score is 0.
    secondary = ranked[1][0]
    dominance = primary_score / total
    return RoleProfile(
        primary_role=primary,
        secondary_role=secondary,
        dominance_ratio=dominance,
        profile_type=profile_type_for(dominance, thresholds),
    )
