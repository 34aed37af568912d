"""
Questionnaire scoring: forced-choice answers -> role-score vector.

Each question shows two statements, each tied to a role, and a 7-point slider:
    0  1  2  3  4  5  6
    ^ statement 1     ^ statement 2
         neutral = 3
Leaning toward statement 1 (v < 3) gives 5 - v points to its role (0 -> 5, 1 -> 4, 2 -> 3).
Leaning toward statement 2 (v > 3) gives v - 3 points to its role (4 -> 1, 5 -> 2, 6 -> 3).
The asymmetry matches the scoring users' stored results were computed with.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from fivefold.models import RoleScoreVector
from fivefold.roles import ROLE_ORDER, Role, normalize_role

SCALE_MIN = 0
SCALE_MAX = 6
NEUTRAL = 3
STATEMENT1_BASE = 5


@dataclass(frozen=True)
class QuestionResponse:
    question_id: int
    value: int
    statement1_role: Role
    statement2_role: Role

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> QuestionResponse:
        """Accepts snake_case or the camelCase keys stored by the web client."""
        def pick(*keys: str) -> Any:
            for k in keys:
                if k in data:
                    return data[k]
            raise ValueError(f"Response is missing {keys[0]}")

        value = pick("value")
        if isinstance(value, float) and not value.is_integer():
            raise ValueError(f"Response value must be a whole number (got {value})")
        return cls(
            question_id=int(pick("question_id", "questionId")),
            value=int(value),
            statement1_role=normalize_role(pick("statement1_role", "statement1Role")),
            statement2_role=normalize_role(pick("statement2_role", "statement2Role")),
        )


def points_for(value: int) -> tuple[int, int]:
    """(points to statement 1 role, points to statement 2 role) for one slider value."""
    if not SCALE_MIN <= value <= SCALE_MAX:
        raise ValueError(f"Response value must be between {SCALE_MIN} and {SCALE_MAX} (got {value})")
    if value < NEUTRAL:
        return (STATEMENT1_BASE - value, 0)
    if value > NEUTRAL:
        return (0, value - NEUTRAL)
    return (0, 0)


def score_responses(responses: Iterable[QuestionResponse]) -> RoleScoreVector:
    totals: dict[Role, int] = {r: 0 for r in ROLE_ORDER}
    for response in responses:
        first, second = points_for(response.value)
        totals[normalize_role(response.statement1_role)] += first
        totals[normalize_role(response.statement2_role)] += second
    return RoleScoreVector(**{r.value: totals[r] for r in ROLE_ORDER})
