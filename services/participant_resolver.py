"""
Mode Selector & Participant Resolver

Given a requested plan mode, the roster and the planner form state, decide
which players the plan is tailored to (the focus group) and reject attempts
whose preconditions do not hold. Pure: nothing here mutates the roster.

Rules:
    team                    - focus group None, whole roster goes to the builder
    individual/conditioning - at least one selected id; all must be on the roster;
                              focus group follows roster order, not click order
    recovery                - non-blank issue and location; optional target id
                              must be on the roster; severity 1-10, default 5
    any mode                - empty roster fails first
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from core.exceptions import PreconditionError
from models import PlanMode, Player
from services.planner_constants import DEFAULT_SEVERITY, SEVERITY_MAX, SEVERITY_MIN


EMPTY_ROSTER_MESSAGE = "Roster is empty. Add players first."
NO_SELECTION_MESSAGE = "Please select at least one player."
UNKNOWN_SELECTION_MESSAGE = "Selected player is no longer on the roster."
MISSING_INJURY_MESSAGE = "Please describe the injury and location."
UNKNOWN_TARGET_MESSAGE = "Injured player is no longer on the roster."
INVALID_SEVERITY_MESSAGE = (
    f"Severity must be a whole number between {SEVERITY_MIN} and {SEVERITY_MAX}."
)


@dataclass(frozen=True)
class GenerationContext:
    """A validated generation request, ready for the prompt builder."""
    mode: PlanMode
    roster: List[Player]
    focus_group: Optional[List[Player]] = None
    context: str = ""
    severity: Optional[int] = None


def resolve_generation_context(
    mode: PlanMode,
    roster: Sequence[Player],
    selected_ids: Iterable[str] = (),
    issue: str = "",
    location: str = "",
    target_player_id: Optional[str] = None,
    severity: Optional[int] = None,
) -> GenerationContext:
    """
    Validate preconditions for `mode` and resolve the focus group.

    Raises PreconditionError with a user-facing message when the attempt
    must not reach the generation service.
    """
    mode = PlanMode(mode)
    roster = list(roster)

    if not roster:
        raise PreconditionError(EMPTY_ROSTER_MESSAGE)

    if mode == PlanMode.TEAM:
        return GenerationContext(mode=mode, roster=roster)

    if mode in (PlanMode.INDIVIDUAL, PlanMode.CONDITIONING):
        focus_group = _resolve_selection(roster, selected_ids)
        return GenerationContext(mode=mode, roster=roster, focus_group=focus_group)

    if mode == PlanMode.RECOVERY:
        return _resolve_recovery(roster, issue, location, target_player_id, severity)

    raise PreconditionError(f"Unsupported plan mode: {mode}")


def _resolve_selection(roster: List[Player], selected_ids: Iterable[str]) -> List[Player]:
    wanted = set(selected_ids)
    if not wanted:
        raise PreconditionError(NO_SELECTION_MESSAGE)

    roster_ids = {p.id for p in roster}
    if not wanted <= roster_ids:
        raise PreconditionError(UNKNOWN_SELECTION_MESSAGE)

    return [p for p in roster if p.id in wanted]


def _resolve_recovery(
    roster: List[Player],
    issue: str,
    location: str,
    target_player_id: Optional[str],
    severity: Optional[int],
) -> GenerationContext:
    issue = (issue or "").strip()
    location = (location or "").strip()
    if not issue or not location:
        raise PreconditionError(MISSING_INJURY_MESSAGE)

    focus_group = None
    if target_player_id:
        target = next((p for p in roster if p.id == target_player_id), None)
        if target is None:
            raise PreconditionError(UNKNOWN_TARGET_MESSAGE)
        focus_group = [target]

    return GenerationContext(
        mode=PlanMode.RECOVERY,
        roster=roster,
        focus_group=focus_group,
        context=f"{issue} in {location}",
        severity=validate_severity(severity),
    )


def validate_severity(severity: Optional[int]) -> int:
    """Default a missing severity to mid-scale and bound it to 1-10."""
    if severity is None:
        return DEFAULT_SEVERITY
    # bool is an int subclass
    if isinstance(severity, bool) or not isinstance(severity, int):
        raise PreconditionError(INVALID_SEVERITY_MESSAGE)
    if not SEVERITY_MIN <= severity <= SEVERITY_MAX:
        raise PreconditionError(INVALID_SEVERITY_MESSAGE)
    return severity
