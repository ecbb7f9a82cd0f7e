"""
Roster domain model.

Players, their skill ratings and the closed vocabularies (skill categories,
levels, positions, plan modes) shared by every planner service.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Optional
from uuid import uuid4


class SkillCategory(str, Enum):
    """Assessable competencies. Declaration order is display order."""
    SWIMMING = "Swimming & Conditioning"
    TREADING = "Treading (Legs)"
    BALL_HANDLING = "Ball Handling"
    PASSING = "Passing"
    SHOOTING = "Shooting"
    DEFENSE = "Defense"
    HOLE_SET_DEFENSE = "Hole Set Defense"
    OFFENSE = "Offense"
    GOALIE = "Goalie Skills"


class SkillLevel(str, Enum):
    """Tri-state rating. Categorical only, never compared numerically."""
    WEAKNESS = "Weakness"
    NEUTRAL = "Neutral"
    STRENGTH = "Strength"


class Position(str, Enum):
    DRIVER = "Driver"
    HOLE_SET = "Hole Set"
    WING = "Wing"
    POINT = "Point"
    GOALIE = "Goalie"
    UTILITY = "Utility"


class PlanMode(str, Enum):
    """Generation modes."""
    TEAM = "team"
    INDIVIDUAL = "individual"
    CONDITIONING = "conditioning"
    RECOVERY = "recovery"


def new_id() -> str:
    return uuid4().hex


def complete_skill_map(
    skills: Optional[Mapping[SkillCategory, SkillLevel]] = None,
) -> Dict[SkillCategory, SkillLevel]:
    """
    Return a rating for every SkillCategory, in declaration order.

    Categories missing from `skills` are backfilled as Neutral.
    Keys and values may be given as enum members or their string values.
    """
    given: Dict[SkillCategory, SkillLevel] = {}
    for category, level in (skills or {}).items():
        given[SkillCategory(category)] = SkillLevel(level)
    return {
        category: given.get(category, SkillLevel.NEUTRAL)
        for category in SkillCategory
    }


@dataclass
class CustomSkill:
    """An athlete-specific trait outside the fixed category set."""
    name: str
    level: SkillLevel
    id: str = field(default_factory=new_id)


@dataclass
class Player:
    name: str
    position: Position
    skills: Dict[SkillCategory, SkillLevel] = field(default_factory=complete_skill_map)
    custom_skills: List[CustomSkill] = field(default_factory=list)
    id: str = field(default_factory=new_id)

    def __post_init__(self):
        self.position = Position(self.position)
        self.skills = complete_skill_map(self.skills)

