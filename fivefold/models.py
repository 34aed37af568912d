"""
Data models for the profiling and team-assembly engine.
Domain objects only; no persistence or API logic.

Every entity here is transient: built from a request, consumed by one call, discarded.
Vectors are immutable; aggregation always returns a new vector.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping, Union

from fivefold.roles import ROLE_ORDER, Role, parse_role

CandidateId = Union[int, str]


# ---------- Role-score vector ----------
@dataclass(frozen=True)
class RoleScoreVector:
    """Five non-negative scores, one per APEST role. Missing roles are zero."""
    apostle: float = 0
    prophet: float = 0
    evangelist: float = 0
    shepherd: float = 0
    teacher: float = 0

    def __post_init__(self) -> None:
        for role in ROLE_ORDER:
            value = getattr(self, role.value)
            if value is None:
                object.__setattr__(self, role.value, 0)
            elif not math.isfinite(value):
                raise ValueError(f"Role score for {role.value} must be a finite number (got {value})")
            elif value < 0:
                raise ValueError(f"Role score for {role.value} must be non-negative (got {value})")

    @classmethod
    def zero(cls) -> RoleScoreVector:
        return cls()

    @classmethod
    def from_mapping(cls, scores: Mapping[str, Any] | None) -> RoleScoreVector:
        """
        Build a vector from any role-keyed mapping (e.g. a stored role-score row).
        Keys go through parse_role, so "herder" and "shepherd" both land on shepherd.
        Aliases name the same score, they are never added together: the canonical key
        wins, otherwise the first alias seen is used.
        Keys that are not roles (ids, timestamps, primaryRole, ...) are ignored.
        """
        if not scores:
            return cls()
        values: dict[str, float] = {}
        for key, value in scores.items():
            role = parse_role(key) if isinstance(key, (str, Role)) else None
            if role is None or value is None:
                continue
            if isinstance(key, Role) or key.strip().lower() == role.value:
                values[role.value] = float(value)
            elif role.value not in values:
                values[role.value] = float(value)
        return cls(**values)

    def score(self, role: Role) -> float:
        return getattr(self, role.value)

    @property
    def total(self) -> float:
        return sum(self.score(r) for r in ROLE_ORDER)

    def __add__(self, other: RoleScoreVector) -> RoleScoreVector:
        if not isinstance(other, RoleScoreVector):
            return NotImplemented
        return RoleScoreVector(**{r.value: self.score(r) + other.score(r) for r in ROLE_ORDER})

    @classmethod
    def sum(cls, vectors: Iterable[RoleScoreVector]) -> RoleScoreVector:
        total = cls()
        for v in vectors:
            total = total + v
        return total

    def as_dict(self) -> dict[str, float]:
        return {r.value: self.score(r) for r in ROLE_ORDER}


# ---------- Role profile ----------
class ProfileType(str, Enum):
    """How concentrated a profile is in its primary role."""
    BALANCED = "balanced"        # dominance < 0.35
    MODERATE = "moderate"        # 0.35 <= dominance <= 0.5
    SPECIALIZED = "specialized"  # dominance > 0.5
    UNKNOWN = "unknown"          # all scores zero


@dataclass(frozen=True)
class RoleProfile:
    primary_role: Role | None
    secondary_role: Role | None
    dominance_ratio: float
    profile_type: ProfileType

    def to_dict(self) -> dict[str, Any]:
        return {
            "primary_role": self.primary_role.value if self.primary_role else None,
            "secondary_role": self.secondary_role.value if self.secondary_role else None,
            "dominance_ratio": self.dominance_ratio,
            "profile_type": self.profile_type.value,
        }


UNKNOWN_PROFILE = RoleProfile(
    primary_role=None,
    secondary_role=None,
    dominance_ratio=0.0,
    profile_type=ProfileType.UNKNOWN,
)


# ---------- Team assembly ----------
@dataclass(frozen=True)
class Candidate:
    """
    One member eligible for a team.
    candidate_id is the stable tie-break key; ids in one pool must be unique and
    mutually comparable (all ints or all strings).
    """
    candidate_id: CandidateId
    scores: RoleScoreVector
    name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"id": self.candidate_id, "scores": self.scores.as_dict()}
        if self.name is not None:
            d["name"] = self.name
        return d


@dataclass(frozen=True)
class TeamCompositionParams:
    desired_size: int
    balance_factor: float = 50  # 0 = diverse, 100 = specialized
    priority_role: Role | None = None


@dataclass(frozen=True)
class SuggestedTeam:
    """Selected members in selection order, plus their role-wise sum."""
    members: tuple[Candidate, ...]
    aggregate: RoleScoreVector

    @property
    def member_ids(self) -> list[CandidateId]:
        return [m.candidate_id for m in self.members]

    def to_dict(self) -> dict[str, Any]:
        return {
            "members": [m.to_dict() for m in self.members],
            "aggregate": self.aggregate.as_dict(),
        }


# ---------- Invite codes ----------
@dataclass(frozen=True)
class InviteCodeEntry:
    """One (entity, code) pair from the snapshot of currently valid codes."""
    entity_id: CandidateId
    code: str


class MatchTier(str, Enum):
    EXACT = "exact"
    CASE_INSENSITIVE = "case_insensitive"
    FUZZY = "fuzzy"


@dataclass(frozen=True)
class MatchResult:
    entry: InviteCodeEntry
    tier: MatchTier
    similarity: float = 1.0

    @property
    def corrected(self) -> bool:
        """True when the user typed something other than the stored code."""
        return self.tier != MatchTier.EXACT

    def to_dict(self) -> dict[str, Any]:
        return {
            "entity_id": self.entry.entity_id,
            "code": self.entry.code,
            "tier": self.tier.value,
            "similarity": round(self.similarity, 4),
            "corrected": self.corrected,
        }
