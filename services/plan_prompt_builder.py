"""
Plan Prompt Builder

Turns a resolved generation context into a single Gemini request:
    - A system instruction (the coach persona)
    - A mode-specific user prompt with serialized roster data
    - The fixed response schema every mode must honour

The schema never varies by mode. Only the natural-language instructions do:
    team         - whole-roster weaknesses, warm-up / skill building / scrimmage
    individual   - selected players' weaknesses, complementary strengths
    conditioning - pool conditioning + weight room / dryland
    recovery     - rehab protocol gated on exactly one severity tier

Roster data is scoped to the focus group. Team requests carry the whole
roster; every other mode carries only the resolved players (recovery without
a target carries none).
"""

import json
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from google.genai import types as genai_types

from models import PlanMode, Player, SkillLevel
from schemas import Difficulty
from services.planner_constants import (
    DEFAULT_SEVERITY,
    HIGH_SEVERITY_FLOOR,
    MEDIUM_SEVERITY_FLOOR,
)


# ---------------------------------------------------------------------------
# Response schema
# ---------------------------------------------------------------------------

DRILL_FIELDS = ("name", "duration", "category", "description", "focus", "difficulty")

DRILL_SCHEMA = genai_types.Schema(
    type=genai_types.Type.OBJECT,
    properties={
        "name": genai_types.Schema(
            type=genai_types.Type.STRING,
            description="Name of the drill or exercise",
        ),
        "duration": genai_types.Schema(
            type=genai_types.Type.STRING,
            description="Duration or Sets/Reps (e.g. '10 mins' or '3x10 reps')",
        ),
        "category": genai_types.Schema(
            type=genai_types.Type.STRING,
            description="Category: 'Pool Conditioning', 'Weight Room', 'Rehab', or Skill Category",
        ),
        "description": genai_types.Schema(
            type=genai_types.Type.STRING,
            description="Step-by-step instructions",
        ),
        "focus": genai_types.Schema(
            type=genai_types.Type.STRING,
            description="What specifically this improves",
        ),
        "difficulty": genai_types.Schema(
            type=genai_types.Type.STRING,
            enum=[d.value for d in Difficulty],
        ),
    },
    required=list(DRILL_FIELDS),
)

PLAN_RESPONSE_SCHEMA = genai_types.Schema(
    type=genai_types.Type.OBJECT,
    properties={
        "title": genai_types.Schema(
            type=genai_types.Type.STRING,
            description="Creative title for the session",
        ),
        "summary": genai_types.Schema(
            type=genai_types.Type.STRING,
            description="Brief overview of the goals",
        ),
        "drills": genai_types.Schema(
            type=genai_types.Type.ARRAY,
            items=DRILL_SCHEMA,
        ),
    },
    required=["title", "summary", "drills"],
)


# ---------------------------------------------------------------------------
# Prompt templates
# ---------------------------------------------------------------------------

SYSTEM_INSTRUCTION = (
    "You are a world-class Water Polo coach designed to create "
    "high-performance practice plans."
)


class SeverityTier(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


SEVERITY_GUIDANCE = {
    SeverityTier.HIGH: (
        "Severity is HIGH (7-10): focus on absolute rest, icing, protection, and "
        "extremely gentle passive range of motion only if safe. No load of any kind."
    ),
    SeverityTier.MEDIUM: (
        "Severity is MEDIUM (4-6): focus on active mobility, light isometric "
        "loading, and water treading only if safe."
    ),
    SeverityTier.LOW: (
        "Severity is LOW (1-3): focus on progressive strengthening, dynamic "
        "stability, and return-to-sport drills."
    ),
}


def severity_tier(severity: int) -> SeverityTier:
    if severity >= HIGH_SEVERITY_FLOOR:
        return SeverityTier.HIGH
    if severity >= MEDIUM_SEVERITY_FLOOR:
        return SeverityTier.MEDIUM
    return SeverityTier.LOW


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PlanRequest:
    """Everything the generation client needs for one call."""
    mode: PlanMode
    system_instruction: str
    prompt: str
    roster_payload: List[Dict[str, Any]]

    @property
    def response_schema(self) -> genai_types.Schema:
        return PLAN_RESPONSE_SCHEMA

    @property
    def participant_names(self) -> List[str]:
        return [entry["name"] for entry in self.roster_payload]


def build_plan_request(
    mode: PlanMode,
    roster: Sequence[Player],
    focus_group: Optional[Sequence[Player]] = None,
    context: str = "",
    severity: Optional[int] = None,
) -> PlanRequest:
    """Build the prompt and payload for `mode`. Pure; no I/O."""
    mode = PlanMode(mode)

    if mode == PlanMode.TEAM:
        payload = [_serialize_player(p) for p in roster]
        prompt = _team_prompt(roster, payload)
    elif mode == PlanMode.INDIVIDUAL:
        payload = [_serialize_player(p) for p in focus_group or []]
        prompt = _individual_prompt(payload)
    elif mode == PlanMode.CONDITIONING:
        payload = [_serialize_player(p, include_position=False) for p in focus_group or []]
        prompt = _conditioning_prompt(payload)
    elif mode == PlanMode.RECOVERY:
        payload = [_serialize_player(p) for p in focus_group or []]
        prompt = _recovery_prompt(payload, context, severity)
    else:
        raise ValueError(f"Unsupported plan mode: {mode}")

    return PlanRequest(
        mode=mode,
        system_instruction=SYSTEM_INSTRUCTION,
        prompt=prompt,
        roster_payload=payload,
    )


def _serialize_player(player: Player, include_position: bool = True) -> Dict[str, Any]:
    data: Dict[str, Any] = {"name": player.name}
    if include_position:
        data["position"] = player.position.value
    data["skills"] = {c.value: level.value for c, level in player.skills.items()}
    data["custom_skills"] = [
        {"name": s.name, "level": s.level.value} for s in player.custom_skills
    ]
    return data


def _dump(payload: List[Dict[str, Any]]) -> str:
    return json.dumps(payload, indent=2)


def _names(payload: List[Dict[str, Any]]) -> str:
    return ", ".join(entry["name"] for entry in payload)


def summarize_weaknesses(roster: Sequence[Player]) -> List[str]:
    """
    Count players rated Weakness per category, most common first.

    Custom skills are tallied by name alongside the fixed categories.
    """
    tally: Counter = Counter()
    for player in roster:
        for category, level in player.skills.items():
            if level == SkillLevel.WEAKNESS:
                tally[category.value] += 1
        for skill in player.custom_skills:
            if skill.level == SkillLevel.WEAKNESS:
                tally[f"{skill.name} (custom)"] += 1
    return [f"{name}: {count}/{len(roster)}" for name, count in tally.most_common()]


def _team_prompt(roster: Sequence[Player], payload: List[Dict[str, Any]]) -> str:
    weaknesses = summarize_weaknesses(roster)
    tally = "\n".join(f"  - {line}" for line in weaknesses) if weaknesses else "  - none recorded"
    return f"""Create a 2-hour TEAM practice plan for the following roster.

Roster Data (includes standard skills and personalized custom skills):
{_dump(payload)}

Players rated 'Weakness' per area:
{tally}

Analyze the collective weaknesses of the team.
If many players are weak in a specific area (e.g., Defense), prioritize drills for that.
Pay attention to custom skills marked as 'Weakness' for potential specialized improvement drills.
Include a mix of warm-up, skill building, and scrimmaging components."""


def _individual_prompt(payload: List[Dict[str, Any]]) -> str:
    return f"""Create a personalized small-group practice plan (1 hour) for the following players: {_names(payload)}.

Player Profiles:
{_dump(payload)}

Focus heavily on improving the 'Weakness' areas identified in these profiles.
If they share weaknesses, focus on those. If they have complementary strengths, use them in drills (e.g., a good passer working with a good shooter).

Since this is a group of {len(payload)} specific players, ensure the drills allow them to work together.
For example, if one is a goalie and one is a shooter, include shooting drills. If both are drivers, include driving/passing drills."""


def _conditioning_prompt(payload: List[Dict[str, Any]]) -> str:
    return f"""Create a high-intensity Conditioning Set for the following players: {_names(payload)}.

Detailed Player Profiles:
{_dump(payload)}

The goal is to physically strengthen these players. Analyze their collective weaknesses.
If specific players have specific physical deficits (e.g., weak legs vs weak shoulders), include exercises that benefit them.

The plan MUST be divided into two distinct sections (mix the drills in the list but categorize them clearly):
1. Pool Conditioning: Swimming sets, leg work (eggbeater), and water resistance drills.
2. Weight Room / Dryland: Strength training, core work, and mobility exercises suitable for water polo.

Use the 'category' field to specify 'Pool Conditioning' or 'Weight Room'.
For 'duration', use Reps/Sets for weights (e.g., "3x10") and Time/Distance for swimming (e.g., "10 mins" or "500 yards")."""


def _recovery_prompt(payload: List[Dict[str, Any]], context: str, severity: Optional[int]) -> str:
    if severity is None:
        severity = DEFAULT_SEVERITY
    athlete = payload[0]["name"] if payload else "the athlete"
    profile = f"\nAthlete Profile:\n{_dump(payload)}\n" if payload else ""

    return f"""Create a comprehensive Recovery and Rehabilitation Plan for {athlete}.

Injury Details & Location: {context}
Current Pain Severity: {severity}/10
{profile}
The goal is to facilitate healing, maintain mobility, and safely return to sport.
Act as a specialized Physical Therapist and Water Polo Coach.

{SEVERITY_GUIDANCE[severity_tier(severity)]}

The plan MUST be divided into logical sections:
1. Mobility/Stretching: Gentle range of motion exercises.
2. Rehab/Strengthening: Specific dryland exercises to strengthen the injured area (if safe) or surrounding muscles.
3. Water Work (if applicable): Low-impact pool movements or modified swimming that avoids aggravating the injury.
4. Prehab: Exercises to prevent future recurrence.

Use 'Rehab', 'Mobility', or 'Pool Recovery' for the category field.
Be specific about sets, reps, and precautions."""
