"""
Roster Store Tests

Player creation, skill rating edits, custom skills and the total skill map
invariant.
"""

import pytest

from core.exceptions import PlayerNotFoundError
from models import CustomSkill, Player, Position, SkillCategory, SkillLevel, complete_skill_map
from services.planner_constants import DEMO_ROSTER
from services.roster_store import RosterStore


class TestAddPlayer:

    def test_new_player_rated_neutral_everywhere(self):
        store = RosterStore()
        player = store.add_player("Sam Lee", Position.WING)

        assert set(player.skills) == set(SkillCategory)
        assert all(level == SkillLevel.NEUTRAL for level in player.skills.values())
        assert player.custom_skills == []

    def test_ids_are_unique(self):
        store = RosterStore()
        ids = {store.add_player(f"Player {i}", Position.UTILITY).id for i in range(50)}
        assert len(ids) == 50

    def test_name_is_trimmed(self):
        player = RosterStore().add_player("  Sam Lee ", Position.POINT)
        assert player.name == "Sam Lee"

    def test_blank_name_rejected(self):
        store = RosterStore()
        with pytest.raises(ValueError):
            store.add_player("   ", Position.WING)
        assert len(store) == 0

    def test_roster_keeps_insertion_order(self):
        store = RosterStore()
        names = ["C", "A", "B"]
        for name in names:
            store.add_player(name, Position.DRIVER)
        assert [p.name for p in store.players()] == names

    def test_position_string_coerced(self):
        player = RosterStore().add_player("Sam", "Hole Set")
        assert player.position is Position.HOLE_SET


class TestRemovePlayer:

    def test_remove_existing(self, roster, players):
        removed = roster.remove_player(players[1].id)
        assert removed is players[1]
        assert players[1].id not in roster
        assert [p.name for p in roster.players()] == ["Ana Ortiz", "Cleo Grant"]

    def test_remove_unknown_raises(self, roster):
        with pytest.raises(PlayerNotFoundError):
            roster.remove_player("nope")


class TestSkills:

    def test_update_skill(self, roster, players):
        roster.update_skill(players[0].id, SkillCategory.SHOOTING, SkillLevel.STRENGTH)
        assert roster.get(players[0].id).skills[SkillCategory.SHOOTING] == SkillLevel.STRENGTH

    def test_update_skill_unknown_player(self, roster):
        with pytest.raises(PlayerNotFoundError):
            roster.update_skill("nope", SkillCategory.SHOOTING, SkillLevel.STRENGTH)

    def test_add_and_remove_custom_skill(self, roster, players):
        skill = roster.add_custom_skill(players[1].id, "Wet Pass", SkillLevel.WEAKNESS)
        assert roster.get(players[1].id).custom_skills == [skill]

        roster.remove_custom_skill(players[1].id, skill.id)
        assert roster.get(players[1].id).custom_skills == []

    def test_custom_skills_keep_order(self, roster, players):
        first = roster.add_custom_skill(players[1].id, "Wet Pass", SkillLevel.WEAKNESS)
        second = roster.add_custom_skill(players[1].id, "Drive Timing", SkillLevel.STRENGTH)
        assert [s.id for s in roster.get(players[1].id).custom_skills] == [first.id, second.id]

    def test_blank_custom_skill_rejected(self, roster, players):
        with pytest.raises(ValueError):
            roster.add_custom_skill(players[1].id, " ", SkillLevel.WEAKNESS)

    def test_remove_unknown_custom_skill(self, roster, players):
        with pytest.raises(PlayerNotFoundError) as exc:
            roster.remove_custom_skill(players[0].id, "missing")
        assert exc.value.skill_id == "missing"


class TestSkillMapInvariant:

    def test_partial_map_backfilled_on_construction(self):
        player = Player(
            name="Partial",
            position=Position.WING,
            skills={SkillCategory.SHOOTING: SkillLevel.STRENGTH},
        )
        assert set(player.skills) == set(SkillCategory)
        assert player.skills[SkillCategory.SHOOTING] == SkillLevel.STRENGTH
        assert player.skills[SkillCategory.GOALIE] == SkillLevel.NEUTRAL

    def test_backfill_after_ratings_go_missing(self, roster, players):
        del players[0].skills[SkillCategory.GOALIE]
        del players[2].skills[SkillCategory.PASSING]

        assert roster.backfill_skills() == 2
        assert players[0].skills[SkillCategory.GOALIE] == SkillLevel.NEUTRAL
        assert players[2].skills[SkillCategory.PASSING] == SkillLevel.NEUTRAL
        assert roster.backfill_skills() == 0

    def test_complete_skill_map_accepts_string_values(self):
        skills = complete_skill_map({"Shooting": "Weakness"})
        assert skills[SkillCategory.SHOOTING] == SkillLevel.WEAKNESS
        assert list(skills) == list(SkillCategory)

    def test_duplicate_ids_rejected(self):
        player = Player(name="A", position=Position.WING)
        with pytest.raises(ValueError):
            RosterStore([player, player])


class TestDemoRoster:

    def test_seed_is_total_and_keeps_custom_skills(self):
        store = RosterStore.from_seed(DEMO_ROSTER)
        assert len(store) == len(DEMO_ROSTER)
        for player in store.players():
            assert set(player.skills) == set(SkillCategory)

        casey = store.players()[2]
        assert [s.name for s in casey.custom_skills] == ["Penalty Blocking", "Outlet Passing"]
        assert all(isinstance(s, CustomSkill) for s in casey.custom_skills)
        # Field players are not rated on goalie skills in the seed
        assert store.players()[0].skills[SkillCategory.GOALIE] == SkillLevel.NEUTRAL
