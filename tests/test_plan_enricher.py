"""
Plan Metadata Enricher Tests
"""

import pytest

from models import PlanMode, Player, Position
from schemas import Drill, GeneratedPlan
from services.plan_enricher import enrich_plan, participant_labels


@pytest.fixture
def raw_plan():
    return GeneratedPlan(
        title="A",
        summary="B",
        drills=[
            Drill(
                name="Sprint Set",
                duration="8x25",
                category="Pool Conditioning",
                description="Head-up sprints on the 30s.",
                focus="Acceleration",
                difficulty="Intermediate",
            )
        ],
    )


class TestEnrichPlan:

    def test_conditioning_round_trip(self, raw_plan):
        plan = enrich_plan(
            raw_plan,
            PlanMode.CONDITIONING,
            [Player(name="X", position=Position.WING)],
        )

        assert plan.participants == ["X"]
        assert plan.type == PlanMode.CONDITIONING
        assert plan.id
        assert isinstance(plan.created_at, int)
        assert plan.title == "A"
        assert plan.summary == "B"
        assert plan.drills == raw_plan.drills

    def test_team_without_focus_group(self, raw_plan):
        plan = enrich_plan(raw_plan, PlanMode.TEAM, None)
        assert plan.participants == ["Team"]

    def test_recovery_without_target(self, raw_plan):
        plan = enrich_plan(raw_plan, PlanMode.RECOVERY, None)
        assert plan.participants == ["Injured Player"]

    def test_focus_group_names_in_order(self, raw_plan, players):
        plan = enrich_plan(raw_plan, PlanMode.INDIVIDUAL, [players[2], players[0]])
        assert plan.participants == ["Cleo Grant", "Ana Ortiz"]

    def test_injected_clock_and_ids(self, raw_plan):
        plan = enrich_plan(
            raw_plan, PlanMode.TEAM, clock=lambda: 1_700_000_000_000, id_factory=lambda: "plan-1"
        )
        assert plan.id == "plan-1"
        assert plan.created_at == 1_700_000_000_000

    def test_fresh_id_each_time(self, raw_plan):
        first = enrich_plan(raw_plan, PlanMode.TEAM)
        second = enrich_plan(raw_plan, PlanMode.TEAM)
        assert first.id != second.id

    def test_raw_plan_not_shared(self, raw_plan):
        plan = enrich_plan(raw_plan, PlanMode.TEAM)
        plan.drills[0].name = "Changed"
        assert raw_plan.drills[0].name == "Sprint Set"


class TestParticipantLabels:

    @pytest.mark.parametrize("mode,expected", [
        (PlanMode.TEAM, ["Team"]),
        (PlanMode.RECOVERY, ["Injured Player"]),
    ])
    def test_empty_focus_group(self, mode, expected):
        assert participant_labels(mode, []) == expected
