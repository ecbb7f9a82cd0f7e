"""
Planner API Router

Roster editing, planner form state, plan generation and the saved plan
library for the single in-process coaching session.

The rendering layer reads state through these endpoints and changes it only
through the intent actions below; it never writes roster or plan fields
directly.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, status

from core.exceptions import (
    ConflictError,
    GenerationInProgressError,
    NotFoundError,
    PlayerNotFoundError,
    PreconditionError,
    ValidationError,
)
from models import PlanMode
from schemas import (
    CustomSkillCreate,
    CustomSkillResponse,
    PlannerStateResponse,
    PlayerCreate,
    PlayerResponse,
    PracticePlan,
    RecoveryDetailsResponse,
    RecoveryDetailsUpdate,
    SkillUpdate,
)
from services.planner_session import PlannerSession, create_planner_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["planner"])

_session: Optional[PlannerSession] = None


def get_planner_session() -> PlannerSession:
    """The process-wide session, created on first use."""
    global _session
    if _session is None:
        _session = create_planner_session()
    return _session


def _not_found(e: PlayerNotFoundError) -> NotFoundError:
    if e.skill_id is not None:
        return NotFoundError("Custom skill", e.skill_id)
    return NotFoundError("Player", e.player_id)


def _state_response(session: PlannerSession) -> PlannerStateResponse:
    recovery = session.recovery
    return PlannerStateResponse(
        state=session.state.value,
        error=session.error,
        current_plan=session.current_plan,
        selected_player_ids=session.selected_player_ids,
        recovery=RecoveryDetailsResponse(
            issue=recovery.issue,
            location=recovery.location,
            target_player_id=recovery.target_player_id,
            severity=recovery.severity,
        ),
        saved_plan_count=len(session.library),
    )


# ---------------------------------------------------------------------------
# Roster
# ---------------------------------------------------------------------------

@router.get("/roster", response_model=List[PlayerResponse])
def list_roster(session: PlannerSession = Depends(get_planner_session)):
    return [PlayerResponse.model_validate(p) for p in session.players()]


@router.post("/roster", response_model=PlayerResponse, status_code=status.HTTP_201_CREATED)
def add_player(body: PlayerCreate, session: PlannerSession = Depends(get_planner_session)):
    try:
        player = session.add_player(body.name, body.position)
    except ValueError as e:
        raise ValidationError(str(e), field="name")
    return PlayerResponse.model_validate(player)


@router.delete("/roster/{player_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_player(player_id: str, session: PlannerSession = Depends(get_planner_session)):
    try:
        session.remove_player(player_id)
    except PlayerNotFoundError as e:
        raise _not_found(e)


@router.put("/roster/{player_id}/skills", response_model=PlayerResponse)
def update_skill(
    player_id: str,
    body: SkillUpdate,
    session: PlannerSession = Depends(get_planner_session),
):
    try:
        player = session.update_skill(player_id, body.category, body.level)
    except PlayerNotFoundError as e:
        raise _not_found(e)
    return PlayerResponse.model_validate(player)


@router.post(
    "/roster/{player_id}/custom-skills",
    response_model=CustomSkillResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_custom_skill(
    player_id: str,
    body: CustomSkillCreate,
    session: PlannerSession = Depends(get_planner_session),
):
    try:
        skill = session.add_custom_skill(player_id, body.name, body.level)
    except PlayerNotFoundError as e:
        raise _not_found(e)
    except ValueError as e:
        raise ValidationError(str(e), field="name")
    return CustomSkillResponse.model_validate(skill)


@router.delete("/roster/{player_id}/custom-skills/{skill_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_custom_skill(
    player_id: str,
    skill_id: str,
    session: PlannerSession = Depends(get_planner_session),
):
    try:
        session.remove_custom_skill(player_id, skill_id)
    except PlayerNotFoundError as e:
        raise _not_found(e)


# ---------------------------------------------------------------------------
# Planner
# ---------------------------------------------------------------------------

@router.get("/planner/state", response_model=PlannerStateResponse)
def get_planner_state(session: PlannerSession = Depends(get_planner_session)):
    return _state_response(session)


@router.post("/planner/selection/{player_id}", response_model=List[str])
def toggle_selection(player_id: str, session: PlannerSession = Depends(get_planner_session)):
    try:
        return session.toggle_planner_selection(player_id)
    except PlayerNotFoundError as e:
        raise _not_found(e)


@router.put("/planner/recovery", response_model=RecoveryDetailsResponse)
def set_recovery_details(
    body: RecoveryDetailsUpdate,
    session: PlannerSession = Depends(get_planner_session),
):
    try:
        details = session.set_recovery_details(
            issue=body.issue,
            location=body.location,
            target_player_id=body.target_player_id,
            severity=body.severity,
        )
    except PlayerNotFoundError as e:
        raise _not_found(e)
    return RecoveryDetailsResponse(
        issue=details.issue,
        location=details.location,
        target_player_id=details.target_player_id,
        severity=details.severity,
    )


@router.post("/planner/generate/{mode}", response_model=PlannerStateResponse)
async def generate_plan(mode: PlanMode, session: PlannerSession = Depends(get_planner_session)):
    """
    Run one generation attempt.

    Precondition and service failures are reported in the returned state's
    `error` field (HTTP 200). Only a request made while another generation is
    outstanding is refused with 409.
    """
    try:
        await session.generate(mode)
    except GenerationInProgressError as e:
        raise ConflictError(str(e))
    return _state_response(session)


@router.delete("/planner/current", status_code=status.HTTP_204_NO_CONTENT)
def discard_current_plan(session: PlannerSession = Depends(get_planner_session)):
    session.discard_plan()


# ---------------------------------------------------------------------------
# Plan library
# ---------------------------------------------------------------------------

@router.post("/plans", response_model=PracticePlan, status_code=status.HTTP_201_CREATED)
def save_current_plan(session: PlannerSession = Depends(get_planner_session)):
    try:
        return session.save_plan()
    except PreconditionError as e:
        raise ConflictError(str(e))


@router.get("/plans", response_model=List[PracticePlan])
def list_saved_plans(session: PlannerSession = Depends(get_planner_session)):
    return session.library.plans()


@router.get("/plans/{plan_id}", response_model=PracticePlan)
def get_saved_plan(plan_id: str, session: PlannerSession = Depends(get_planner_session)):
    plan = session.library.get(plan_id)
    if plan is None:
        raise NotFoundError("Plan", plan_id)
    return plan
