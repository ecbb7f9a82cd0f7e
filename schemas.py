from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from models import PlanMode, Position, SkillCategory, SkillLevel


class Difficulty(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


# ---------------------------------------------------------------------------
# Plan shapes (generation service contract)
# ---------------------------------------------------------------------------

class Drill(BaseModel):
    """A single drill or exercise as produced by the generation service."""
    name: str
    duration: str  # "10 mins", "3x10", "500 yards"
    category: str
    description: str
    focus: str
    difficulty: Difficulty


class GeneratedPlan(BaseModel):
    """Raw service output, before session metadata is attached."""
    title: str
    summary: str
    drills: List[Drill]


class PracticePlan(BaseModel):
    """
    A generated plan plus session metadata.

    id, created_at, type and participants are written only by the enricher.
    """
    id: Optional[str] = None
    created_at: Optional[int] = None  # epoch millis
    type: Optional[PlanMode] = None
    participants: Optional[List[str]] = None
    title: str
    summary: str
    drills: List[Drill]


# ---------------------------------------------------------------------------
# Roster API
# ---------------------------------------------------------------------------

class CustomSkillResponse(BaseModel):
    id: str
    name: str
    level: SkillLevel

    model_config = ConfigDict(from_attributes=True)


class PlayerResponse(BaseModel):
    id: str
    name: str
    position: Position
    skills: Dict[SkillCategory, SkillLevel]
    custom_skills: List[CustomSkillResponse] = []

    model_config = ConfigDict(from_attributes=True)


class PlayerCreate(BaseModel):
    name: str = Field(min_length=1)
    position: Position = Position.DRIVER


class SkillUpdate(BaseModel):
    category: SkillCategory
    level: SkillLevel


class CustomSkillCreate(BaseModel):
    name: str = Field(min_length=1)
    level: SkillLevel = SkillLevel.WEAKNESS


# ---------------------------------------------------------------------------
# Planner API
# ---------------------------------------------------------------------------

class RecoveryDetailsUpdate(BaseModel):
    """Injury form fields. Blank issue/location are rejected at generation time."""
    issue: str = ""
    location: str = ""
    target_player_id: Optional[str] = None
    severity: int = Field(default=5, ge=1, le=10)


class RecoveryDetailsResponse(BaseModel):
    issue: str
    location: str
    target_player_id: Optional[str] = None
    severity: int


class PlannerStateResponse(BaseModel):
    """Read-only view model for the rendering layer."""
    state: str
    error: Optional[str] = None
    current_plan: Optional[PracticePlan] = None
    selected_player_ids: List[str]
    recovery: RecoveryDetailsResponse
    saved_plan_count: int
