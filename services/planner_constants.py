"""
Constants for the practice planner.

Demo roster and severity thresholds. Seed ratings may be partial; the
roster store backfills missing categories as Neutral.
"""

from typing import Any, Dict, List

from models import Position, SkillCategory, SkillLevel


# Recovery severity scale (pain, 1-10)
SEVERITY_MIN = 1
SEVERITY_MAX = 10
DEFAULT_SEVERITY = 5
HIGH_SEVERITY_FLOOR = 7      # 7-10: rest and protection, no load
MEDIUM_SEVERITY_FLOOR = 4    # 4-6: light mobility and isometrics, 1-3 below

# Participant labels when a plan has no focus group
TEAM_PARTICIPANT_LABEL = "Team"
UNSPECIFIED_ATHLETE_LABEL = "Injured Player"


DEMO_ROSTER: List[Dict[str, Any]] = [
    {
        "name": "Alex Miller",
        "position": Position.DRIVER,
        "skills": {
            SkillCategory.SWIMMING: SkillLevel.STRENGTH,
            SkillCategory.TREADING: SkillLevel.NEUTRAL,
            SkillCategory.BALL_HANDLING: SkillLevel.STRENGTH,
            SkillCategory.PASSING: SkillLevel.STRENGTH,
            SkillCategory.SHOOTING: SkillLevel.NEUTRAL,
            SkillCategory.DEFENSE: SkillLevel.WEAKNESS,
            SkillCategory.HOLE_SET_DEFENSE: SkillLevel.WEAKNESS,
            SkillCategory.OFFENSE: SkillLevel.STRENGTH,
        },
        "custom_skills": [
            ("Counter Attack Speed", SkillLevel.STRENGTH),
        ],
    },
    {
        "name": "Jordan Smith",
        "position": Position.HOLE_SET,
        "skills": {
            SkillCategory.SWIMMING: SkillLevel.NEUTRAL,
            SkillCategory.TREADING: SkillLevel.STRENGTH,
            SkillCategory.BALL_HANDLING: SkillLevel.NEUTRAL,
            SkillCategory.PASSING: SkillLevel.NEUTRAL,
            SkillCategory.SHOOTING: SkillLevel.STRENGTH,
            SkillCategory.DEFENSE: SkillLevel.NEUTRAL,
            SkillCategory.HOLE_SET_DEFENSE: SkillLevel.WEAKNESS,
            SkillCategory.OFFENSE: SkillLevel.STRENGTH,
        },
        "custom_skills": [],
    },
    {
        "name": "Casey Jones",
        "position": Position.GOALIE,
        "skills": {
            SkillCategory.SWIMMING: SkillLevel.STRENGTH,
            SkillCategory.TREADING: SkillLevel.STRENGTH,
            SkillCategory.BALL_HANDLING: SkillLevel.NEUTRAL,
            SkillCategory.PASSING: SkillLevel.STRENGTH,
            SkillCategory.SHOOTING: SkillLevel.WEAKNESS,
            SkillCategory.DEFENSE: SkillLevel.STRENGTH,
            SkillCategory.OFFENSE: SkillLevel.WEAKNESS,
            SkillCategory.GOALIE: SkillLevel.STRENGTH,
        },
        "custom_skills": [
            ("Penalty Blocking", SkillLevel.STRENGTH),
            ("Outlet Passing", SkillLevel.WEAKNESS),
        ],
    },
]
