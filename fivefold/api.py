"""
HTTP adapter for the profiling engine.
Stateless: every request carries the vectors / pool / code snapshot it needs. Storage,
auth and sessions belong to the surrounding application, which calls these endpoints
(or the services directly) with data it has already loaded.
"""
from __future__ import annotations

import logging
from typing import Any, Union

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from fivefold.config import load_thresholds
from fivefold.models import (
    Candidate,
    InviteCodeEntry,
    RoleScoreVector,
    TeamCompositionParams,
)
from fivefold.questionnaire import QuestionResponse, score_responses
from fivefold.roles import list_all_roles, parse_role
from fivefold.services import InvalidParameterError, assemble, classify, resolve

logger = logging.getLogger(__name__)


# ---------- FastAPI app ----------
app = FastAPI(
    title="Five-Fold Ministry API",
    description="Role profiling, team suggestions and invite-code resolution",
    version="0.1.0",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------- Request/Response models ----------


class ClassifyRequest(BaseModel):
    scores: dict[str, float | None] = Field(
        ..., description="Role -> score. 'herder' is accepted for shepherd; missing roles count as 0."
    )


class PoolMember(BaseModel):
    id: Union[int, str]
    name: str | None = None
    scores: dict[str, float | None] = Field(default_factory=dict)


class SuggestTeamRequest(BaseModel):
    members: list[PoolMember] = Field(default_factory=list, description="Eligible members (pre-filtered by the caller)")
    team_size: int = Field(..., description="Desired team size (>= 1)")
    balance_factor: float = Field(default=50, description="0 = diverse, 100 = specialized")
    priority_role: str | None = Field(None, description="One of: apostle, prophet, evangelist, shepherd, teacher")


class InviteCode(BaseModel):
    entity_id: Union[int, str]
    code: str


class ResolveInviteRequest(BaseModel):
    code: str = Field(..., description="Code as typed by the user")
    codes: list[InviteCode] = Field(default_factory=list, description="Snapshot of currently valid codes")


class ResponseItem(BaseModel):
    question_id: int
    value: int
    statement1_role: str
    statement2_role: str


class ScoreQuestionnaireRequest(BaseModel):
    responses: list[ResponseItem]


# ---------- Helpers ----------


def _vector(scores: dict[str, float | None]) -> RoleScoreVector:
    try:
        return RoleScoreVector.from_mapping(scores)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


def _vector_and_profile(vector: RoleScoreVector) -> dict[str, Any]:
    return {
        "scores": vector.as_dict(),
        "profile": classify(vector, load_thresholds()).to_dict(),
    }


# ---------- Endpoints ----------


@app.get("/roles")
def list_roles() -> dict[str, Any]:
    """List the five roles with definitions, in canonical order."""
    roles = [
        {"id": r.value, "name": d.name, "label": d.label, "description": d.description}
        for r, d in list_all_roles()
    ]
    return {"roles": roles}


@app.post("/profiles/classify")
def classify_profile(req: ClassifyRequest) -> dict[str, Any]:
    """Primary/secondary role, dominance ratio and profile type for one vector."""
    return _vector_and_profile(_vector(req.scores))


@app.post("/teams/suggest")
def suggest_team(req: SuggestTeamRequest) -> dict[str, Any]:
    """
    Propose a team from the given members.
    Returns fewer members than team_size when the pool runs out.
    """
    priority = None
    if req.priority_role:
        priority = parse_role(req.priority_role)
        if priority is None:
            raise HTTPException(status_code=400, detail=f"Unknown priority_role: {req.priority_role}")

    pool = [Candidate(candidate_id=m.id, scores=_vector(m.scores), name=m.name) for m in req.members]
    params = TeamCompositionParams(
        desired_size=req.team_size,
        balance_factor=req.balance_factor,
        priority_role=priority,
    )
    try:
        team = assemble(pool, params)
    except InvalidParameterError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    thresholds = load_thresholds()
    return {
        "members": [
            {**m.to_dict(), "profile": classify(m.scores, thresholds).to_dict()}
            for m in team.members
        ],
        "aggregate": team.aggregate.as_dict(),
        "aggregate_profile": classify(team.aggregate, thresholds).to_dict(),
        "requested_size": req.team_size,
    }


@app.post("/invites/resolve")
def resolve_invite(req: ResolveInviteRequest) -> dict[str, Any]:
    """Resolve a typed invite code. 404 when no valid code is close enough."""
    index = [InviteCodeEntry(entity_id=c.entity_id, code=c.code) for c in req.codes]
    result = resolve(req.code, index, threshold=load_thresholds().invite_similarity)
    if result is None:
        raise HTTPException(status_code=404, detail="No team or church found for this invite code")
    if result.corrected:
        logger.info("Invite code corrected from %s to %s (%s)", req.code, result.entry.code, result.tier.value)
    return result.to_dict()


@app.post("/questionnaire/score")
def score_questionnaire(req: ScoreQuestionnaireRequest) -> dict[str, Any]:
    """Score questionnaire answers and classify the resulting vector."""
    try:
        responses = [QuestionResponse.from_dict(r.model_dump()) for r in req.responses]
        vector = score_responses(responses)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return _vector_and_profile(vector)


# ---------- Run with: uvicorn fivefold.api:app --reload ----------
