"""
Plan Library

In-memory collection of saved plans, newest first. Entries are deep
snapshots: changing the plan that was saved does not reach back into the
library, and saving never edits the caller's plan.
"""

import logging
from datetime import datetime
from typing import List, Optional

from models import PlanMode
from schemas import PracticePlan

logger = logging.getLogger(__name__)


def display_title(plan: PracticePlan) -> str:
    """
    Library title derived from the plan's type and participants.

    Plans without a recognised type (or without participants where the
    title needs them) keep their generated title.
    """
    names = ", ".join(plan.participants) if plan.participants else None

    if plan.type == PlanMode.INDIVIDUAL and names:
        return f"{names} Individual Focus"
    if plan.type == PlanMode.CONDITIONING and names:
        return f"{names} Conditioning"
    if plan.type == PlanMode.RECOVERY and names:
        return f"{names} Recovery Plan"
    if plan.type == PlanMode.TEAM:
        return f"Team Practice - {_plan_date(plan)}"
    return plan.title


def _plan_date(plan: PracticePlan) -> str:
    if plan.created_at is not None:
        created = datetime.fromtimestamp(plan.created_at / 1000)
    else:
        created = datetime.now()
    return created.strftime("%m/%d/%Y")


class PlanLibrary:
    """Saved plans for the current process. Nothing is written to disk."""

    def __init__(self):
        self._plans: List[PracticePlan] = []

    def save(self, plan: PracticePlan) -> PracticePlan:
        snapshot = plan.model_copy(update={"title": display_title(plan)}, deep=True)
        self._plans.insert(0, snapshot)
        logger.info(f"Saved plan {plan.id} as '{snapshot.title}'")
        return snapshot.model_copy(deep=True)

    def plans(self) -> List[PracticePlan]:
        """All saved plans, newest first, as copies."""
        return [p.model_copy(deep=True) for p in self._plans]

    def get(self, plan_id: str) -> Optional[PracticePlan]:
        for plan in self._plans:
            if plan.id == plan_id:
                return plan.model_copy(deep=True)
        return None

    def __len__(self) -> int:
        return len(self._plans)
