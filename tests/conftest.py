"""
Pytest configuration and fixtures

No test talks to Gemini. Every generation goes through a MagicMock client
whose responses are shaped like google.genai responses
(candidates → content → parts → text).
"""
import json
import os
import sys
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add the parent directory to the path so we can import core/services/routers
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("SEED_DEMO_ROSTER", "false")

from models import CustomSkill, Player, Position, SkillCategory, SkillLevel
from services.plan_generation_client import PlanGenerationClient
from services.planner_session import PlannerSession
from services.roster_store import RosterStore


def _mock_gemini_response(text: str):
    """Create a mock Gemini API response."""
    mock_part = MagicMock()
    mock_part.text = text

    mock_content = MagicMock()
    mock_content.parts = [mock_part]

    mock_candidate = MagicMock()
    mock_candidate.content = mock_content

    mock_usage = MagicMock()
    mock_usage.prompt_token_count = 900
    mock_usage.candidates_token_count = 600

    mock_response = MagicMock()
    mock_response.candidates = [mock_candidate]
    mock_response.usage_metadata = mock_usage

    return mock_response


@pytest.fixture
def gemini_response():
    """Factory: text → mock Gemini response."""
    return _mock_gemini_response


@pytest.fixture
def plan_payload():
    """A schema-conformant plan reply."""
    return {
        "title": "Shell Defense Tune-Up",
        "summary": "Tighten hole set defense and finish with a controlled scrimmage.",
        "drills": [
            {
                "name": "Eggbeater Warm-Up",
                "duration": "10 mins",
                "category": "Treading (Legs)",
                "description": "Continuous eggbeater with hands up, 30s on / 15s off.",
                "focus": "Leg endurance",
                "difficulty": "Beginner",
            },
            {
                "name": "Front Fronting Battle",
                "duration": "15 mins",
                "category": "Hole Set Defense",
                "description": "Defender fronts the set while wings feed entry passes.",
                "focus": "Denying entry passes",
                "difficulty": "Advanced",
            },
        ],
    }


@pytest.fixture
def mock_gemini(gemini_response, plan_payload):
    """MagicMock google.genai.Client returning a valid plan."""
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(
        return_value=gemini_response(json.dumps(plan_payload))
    )
    return client


@pytest.fixture
def players():
    """Three players in roster order: Ana, Ben, Cleo."""
    ana = Player(
        name="Ana Ortiz",
        position=Position.DRIVER,
        skills={
            SkillCategory.DEFENSE: SkillLevel.WEAKNESS,
            SkillCategory.SWIMMING: SkillLevel.STRENGTH,
        },
        custom_skills=[CustomSkill(name="Backhand Shot", level=SkillLevel.WEAKNESS)],
    )
    ben = Player(
        name="Ben Park",
        position=Position.HOLE_SET,
        skills={SkillCategory.TREADING: SkillLevel.WEAKNESS},
    )
    cleo = Player(
        name="Cleo Grant",
        position=Position.GOALIE,
        skills={
            SkillCategory.DEFENSE: SkillLevel.WEAKNESS,
            SkillCategory.GOALIE: SkillLevel.STRENGTH,
        },
    )
    return [ana, ben, cleo]


@pytest.fixture
def roster(players):
    return RosterStore(players)


@pytest.fixture
def session(roster, mock_gemini):
    """Planner session over the three-player roster with a mock Gemini client."""
    return PlannerSession(
        roster=roster,
        generation_client=PlanGenerationClient(gemini_client=mock_gemini, timeout_s=5),
    )
