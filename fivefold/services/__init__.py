"""
Service layer: the three pure engines.
No I/O and no shared state; the API layer and persistence are callers, not dependencies.
"""
from .classifier import classify, profile_type_for, rank_roles
from .team_assembly import InvalidParameterError, aggregate_scores, assemble, target_role
from .invite_codes import resolve, similarity

__all__ = [
    "classify",
    "profile_type_for",
    "rank_roles",
    "InvalidParameterError",
    "aggregate_scores",
    "assemble",
    "target_role",
    "resolve",
    "similarity",
]
