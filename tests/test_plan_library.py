"""
Plan Library Tests

Display titles, newest-first ordering and snapshot isolation.
"""

from datetime import datetime

import pytest

from models import PlanMode
from schemas import Drill, PracticePlan
from services.plan_library import PlanLibrary, display_title


def _plan(plan_type, participants, plan_id="p1", created_at=None, title="Generated Title"):
    return PracticePlan(
        id=plan_id,
        created_at=created_at,
        type=plan_type,
        participants=participants,
        title=title,
        summary="Summary",
        drills=[
            Drill(
                name="Passing Triangle",
                duration="10 mins",
                category="Passing",
                description="Dry passes around a triangle, switch hands every minute.",
                focus="Accuracy",
                difficulty="Beginner",
            )
        ],
    )


class TestDisplayTitle:

    def test_individual(self):
        assert display_title(_plan(PlanMode.INDIVIDUAL, ["X", "Y"])) == "X, Y Individual Focus"

    def test_conditioning(self):
        assert display_title(_plan(PlanMode.CONDITIONING, ["X"])) == "X Conditioning"

    def test_recovery(self):
        assert display_title(_plan(PlanMode.RECOVERY, ["Injured Player"])) == "Injured Player Recovery Plan"

    def test_team_uses_plan_date(self):
        created = int(datetime(2026, 3, 14, 12, 0).timestamp() * 1000)
        plan = _plan(PlanMode.TEAM, ["Team"], created_at=created)
        assert display_title(plan) == "Team Practice - 03/14/2026"

    def test_untyped_plan_keeps_generated_title(self):
        assert display_title(_plan(None, None)) == "Generated Title"

    def test_selection_plan_without_participants_keeps_generated_title(self):
        assert display_title(_plan(PlanMode.INDIVIDUAL, None)) == "Generated Title"


class TestPlanLibrary:

    def test_save_stores_display_title_and_leaves_original(self):
        library = PlanLibrary()
        current = _plan(PlanMode.INDIVIDUAL, ["X", "Y"])

        saved = library.save(current)

        assert saved.title == "X, Y Individual Focus"
        assert current.title == "Generated Title"
        assert library.plans()[0].title == "X, Y Individual Focus"

    def test_newest_first(self):
        library = PlanLibrary()
        library.save(_plan(PlanMode.CONDITIONING, ["A"], plan_id="first"))
        library.save(_plan(PlanMode.CONDITIONING, ["B"], plan_id="second"))

        assert [p.id for p in library.plans()] == ["second", "first"]
        assert len(library) == 2

    def test_snapshot_unaffected_by_later_changes(self):
        library = PlanLibrary()
        current = _plan(PlanMode.CONDITIONING, ["A"])
        library.save(current)

        current.title = "Edited"
        current.drills[0].name = "Edited Drill"
        current.participants.append("B")

        stored = library.get("p1")
        assert stored.title == "A Conditioning"
        assert stored.drills[0].name == "Passing Triangle"
        assert stored.participants == ["A"]

    def test_returned_copies_cannot_edit_entries(self):
        library = PlanLibrary()
        library.save(_plan(PlanMode.CONDITIONING, ["A"]))

        library.plans()[0].drills[0].name = "Mutated"
        library.get("p1").title = "Mutated"

        stored = library.get("p1")
        assert stored.drills[0].name == "Passing Triangle"
        assert stored.title == "A Conditioning"

    @pytest.mark.parametrize("plan_id", ["missing", ""])
    def test_get_unknown(self, plan_id):
        assert PlanLibrary().get(plan_id) is None
