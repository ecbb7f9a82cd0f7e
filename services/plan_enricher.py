"""
Plan Metadata Enricher

Stamps a raw generated plan with session metadata: id, created_at, type and
participants. This is the only writer of those four fields. Title, summary
and drills are carried over untouched.
"""

import time
from typing import Callable, Optional, Sequence

from models import PlanMode, Player, new_id
from schemas import GeneratedPlan, PracticePlan
from services.planner_constants import TEAM_PARTICIPANT_LABEL, UNSPECIFIED_ATHLETE_LABEL


def _now_ms() -> int:
    return int(time.time() * 1000)


def participant_labels(mode: PlanMode, focus_group: Optional[Sequence[Player]]) -> list:
    if focus_group:
        return [p.name for p in focus_group]
    if PlanMode(mode) == PlanMode.RECOVERY:
        return [UNSPECIFIED_ATHLETE_LABEL]
    return [TEAM_PARTICIPANT_LABEL]


def enrich_plan(
    raw: GeneratedPlan,
    mode: PlanMode,
    focus_group: Optional[Sequence[Player]] = None,
    clock: Callable[[], int] = _now_ms,
    id_factory: Callable[[], str] = new_id,
) -> PracticePlan:
    """Build a complete PracticePlan from a validated service reply."""
    return PracticePlan(
        id=id_factory(),
        created_at=clock(),
        type=PlanMode(mode),
        participants=participant_labels(mode, focus_group),
        title=raw.title,
        summary=raw.summary,
        drills=[d.model_copy() for d in raw.drills],
    )
