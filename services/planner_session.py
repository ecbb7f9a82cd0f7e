"""
Planner Session

The orchestrator behind the coach's screens. Owns the roster, the planner
selection, the recovery form, the current result and the plan library, and
exposes them only through intent-named actions.

Generation lifecycle:

    IDLE → VALIDATING ─(rejected)→ IDLE
                      └→ REQUESTING ─(failed)→ IDLE
                                    └→ ENRICHING → IDLE (with result)

- Only one generation may be outstanding. generate() outside IDLE raises
  GenerationInProgressError; nothing is queued.
- Every attempt clears the previous error and current result first.
- Every failure is recovered here and surfaced as a single error message.
  The state always returns to IDLE.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from core.config import settings
from core.exceptions import (
    ConfigurationError,
    GenerationInProgressError,
    PlanServiceError,
    PlayerNotFoundError,
    PreconditionError,
)
from models import CustomSkill, PlanMode, Player, Position, SkillCategory, SkillLevel
from schemas import PracticePlan
from services.participant_resolver import resolve_generation_context
from services.plan_enricher import enrich_plan
from services.plan_generation_client import PlanGenerationClient
from services.plan_library import PlanLibrary
from services.plan_prompt_builder import build_plan_request
from services.planner_constants import DEFAULT_SEVERITY, DEMO_ROSTER
from services.roster_store import RosterStore

logger = logging.getLogger(__name__)


GENERATION_FAILED_MESSAGE = "Failed to generate plan. Please check your API key or try again."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred."
NOTHING_TO_SAVE_MESSAGE = "There is no generated plan to save."


class GenerationState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    REQUESTING = "requesting"
    ENRICHING = "enriching"


@dataclass
class RecoveryDetails:
    """Injury form state. Validated only when a recovery plan is requested."""
    issue: str = ""
    location: str = ""
    target_player_id: Optional[str] = None
    severity: int = DEFAULT_SEVERITY


class PlannerSession:
    """
    Single-coach planning session.

    Usage:
        session = PlannerSession(RosterStore(), PlanGenerationClient())
        session.toggle_planner_selection(player_id)
        plan = await session.generate(PlanMode.INDIVIDUAL)
        if plan is None:
            print(session.error)
        else:
            session.save_plan()
    """

    def __init__(
        self,
        roster: Optional[RosterStore] = None,
        generation_client: Optional[PlanGenerationClient] = None,
        library: Optional[PlanLibrary] = None,
    ):
        self.roster = roster if roster is not None else RosterStore()
        self.library = library if library is not None else PlanLibrary()
        self._client = generation_client if generation_client is not None else PlanGenerationClient()

        self._state = GenerationState.IDLE
        self._error: Optional[str] = None
        self._current_plan: Optional[PracticePlan] = None
        self._selected_ids: List[str] = []
        self._recovery = RecoveryDetails()

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def state(self) -> GenerationState:
        return self._state

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def current_plan(self) -> Optional[PracticePlan]:
        if self._current_plan is None:
            return None
        return self._current_plan.model_copy(deep=True)

    @property
    def selected_player_ids(self) -> List[str]:
        return list(self._selected_ids)

    @property
    def recovery(self) -> RecoveryDetails:
        r = self._recovery
        return RecoveryDetails(r.issue, r.location, r.target_player_id, r.severity)

    def players(self) -> List[Player]:
        return self.roster.players()

    # ------------------------------------------------------------------
    # Roster actions
    # ------------------------------------------------------------------

    def add_player(self, name: str, position: Position) -> Player:
        return self.roster.add_player(name, position)

    def remove_player(self, player_id: str) -> Player:
        """Remove a player and drop them from every pending selection."""
        player = self.roster.remove_player(player_id)
        if player_id in self._selected_ids:
            self._selected_ids.remove(player_id)
        if self._recovery.target_player_id == player_id:
            self._recovery.target_player_id = None
        return player

    def update_skill(self, player_id: str, category: SkillCategory, level: SkillLevel) -> Player:
        return self.roster.update_skill(player_id, category, level)

    def add_custom_skill(self, player_id: str, name: str, level: SkillLevel) -> CustomSkill:
        return self.roster.add_custom_skill(player_id, name, level)

    def remove_custom_skill(self, player_id: str, skill_id: str) -> CustomSkill:
        return self.roster.remove_custom_skill(player_id, skill_id)

    # ------------------------------------------------------------------
    # Planner form actions
    # ------------------------------------------------------------------

    def toggle_planner_selection(self, player_id: str) -> List[str]:
        """Check or uncheck a player for individual/conditioning plans."""
        if player_id in self._selected_ids:
            self._selected_ids.remove(player_id)
        else:
            if player_id not in self.roster:
                raise PlayerNotFoundError(player_id)
            self._selected_ids.append(player_id)
        return self.selected_player_ids

    def set_recovery_details(
        self,
        issue: str = "",
        location: str = "",
        target_player_id: Optional[str] = None,
        severity: int = DEFAULT_SEVERITY,
    ) -> RecoveryDetails:
        if target_player_id and target_player_id not in self.roster:
            raise PlayerNotFoundError(target_player_id)
        self._recovery = RecoveryDetails(
            issue=issue,
            location=location,
            target_player_id=target_player_id or None,
            severity=severity,
        )
        return self.recovery

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    async def generate(self, mode: PlanMode) -> Optional[PracticePlan]:
        """
        Run one generation attempt.

        Returns the enriched plan, or None with `error` set. Raises
        GenerationInProgressError if an attempt is already outstanding.
        """
        mode = PlanMode(mode)
        if self._state != GenerationState.IDLE:
            logger.warning(f"Rejected {mode.value} generation: attempt already {self._state.value}")
            raise GenerationInProgressError("A plan is already being generated.")

        self._error = None
        self._current_plan = None
        self._state = GenerationState.VALIDATING

        try:
            try:
                context = resolve_generation_context(
                    mode,
                    self.roster.players(),
                    selected_ids=self._selected_ids,
                    issue=self._recovery.issue,
                    location=self._recovery.location,
                    target_player_id=self._recovery.target_player_id,
                    severity=self._recovery.severity,
                )
            except PreconditionError as e:
                logger.info(f"{mode.value} generation rejected: {e}")
                self._error = str(e)
                return None

            request = build_plan_request(
                context.mode,
                context.roster,
                focus_group=context.focus_group,
                context=context.context,
                severity=context.severity,
            )

            self._state = GenerationState.REQUESTING
            try:
                raw_plan = await self._client.generate(request)
            except ConfigurationError as e:
                logger.error(f"Plan generation not configured: {e}")
                self._error = GENERATION_FAILED_MESSAGE
                return None
            except PlanServiceError as e:
                logger.warning(f"{mode.value} generation failed: {e}")
                self._error = GENERATION_FAILED_MESSAGE
                return None

            self._state = GenerationState.ENRICHING
            plan = enrich_plan(raw_plan, context.mode, context.focus_group)
            self._current_plan = plan
            logger.info(f"Generated {mode.value} plan {plan.id} for {', '.join(plan.participants)}")
            return plan.model_copy(deep=True)

        except Exception:
            logger.exception(f"Unexpected error during {mode.value} generation")
            self._error = UNEXPECTED_ERROR_MESSAGE
            return None
        finally:
            self._state = GenerationState.IDLE

    # ------------------------------------------------------------------
    # Result actions
    # ------------------------------------------------------------------

    def discard_plan(self) -> None:
        self._current_plan = None

    def save_plan(self) -> PracticePlan:
        """Copy the current result into the library under its display title."""
        if self._current_plan is None:
            raise PreconditionError(NOTHING_TO_SAVE_MESSAGE)
        return self.library.save(self._current_plan)


def create_planner_session() -> PlannerSession:
    """Session wired from settings: demo roster (if enabled) and a Gemini client."""
    roster = RosterStore.from_seed(DEMO_ROSTER) if settings.SEED_DEMO_ROSTER else RosterStore()
    return PlannerSession(roster=roster, generation_client=PlanGenerationClient())
