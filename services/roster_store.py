"""
Roster Store

Holds the athlete collection and their skill ratings. The store is the only
authority on which player ids exist; every other planner component resolves
ids through it.

All mutations are synchronous and keep each player's skill map total over
SkillCategory.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from core.exceptions import PlayerNotFoundError
from models import CustomSkill, Player, Position, SkillCategory, SkillLevel, complete_skill_map

logger = logging.getLogger(__name__)


class RosterStore:
    """
    In-memory ordered roster.

    Usage:
        store = RosterStore()
        player = store.add_player("Sam Lee", Position.WING)
        store.update_skill(player.id, SkillCategory.SHOOTING, SkillLevel.WEAKNESS)
    """

    def __init__(self, players: Optional[Iterable[Player]] = None):
        self._players: List[Player] = []
        for player in players or []:
            self._append(player)

    @classmethod
    def from_seed(cls, seed: Iterable[Dict[str, Any]]) -> "RosterStore":
        """Build a store from seed dicts (see planner_constants.DEMO_ROSTER)."""
        players = []
        for entry in seed:
            players.append(Player(
                name=entry["name"],
                position=entry["position"],
                skills=entry.get("skills"),
                custom_skills=[
                    CustomSkill(name=name, level=level)
                    for name, level in entry.get("custom_skills", [])
                ],
            ))
        return cls(players)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def players(self) -> List[Player]:
        """Roster in insertion order. The list is a copy; players are live."""
        return list(self._players)

    def get(self, player_id: str) -> Player:
        for player in self._players:
            if player.id == player_id:
                return player
        raise PlayerNotFoundError(player_id)

    def __contains__(self, player_id: object) -> bool:
        return any(p.id == player_id for p in self._players)

    def __len__(self) -> int:
        return len(self._players)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_player(self, name: str, position: Position) -> Player:
        """Create a player with every category rated Neutral."""
        if not name or not name.strip():
            raise ValueError("Player name must not be blank")
        player = Player(name=name.strip(), position=position)
        self._append(player)
        logger.info(f"Added player {player.id} ({player.name}, {player.position.value})")
        return player

    def remove_player(self, player_id: str) -> Player:
        player = self.get(player_id)
        self._players.remove(player)
        logger.info(f"Removed player {player_id}")
        return player

    def update_skill(self, player_id: str, category: SkillCategory, level: SkillLevel) -> Player:
        player = self.get(player_id)
        player.skills[SkillCategory(category)] = SkillLevel(level)
        return player

    def add_custom_skill(self, player_id: str, name: str, level: SkillLevel) -> CustomSkill:
        if not name or not name.strip():
            raise ValueError("Custom skill name must not be blank")
        player = self.get(player_id)
        skill = CustomSkill(name=name.strip(), level=SkillLevel(level))
        player.custom_skills.append(skill)
        return skill

    def remove_custom_skill(self, player_id: str, skill_id: str) -> CustomSkill:
        player = self.get(player_id)
        for skill in player.custom_skills:
            if skill.id == skill_id:
                player.custom_skills.remove(skill)
                return skill
        raise PlayerNotFoundError(player_id, skill_id=skill_id)

    def backfill_skills(self) -> int:
        """
        Re-total every player's skill map over the current SkillCategory set.

        Returns the number of ratings that were added as Neutral.
        """
        added = 0
        for player in self._players:
            before = len(player.skills)
            player.skills = complete_skill_map(player.skills)
            added += len(player.skills) - before
        if added:
            logger.info(f"Backfilled {added} missing skill ratings as Neutral")
        return added

    def _append(self, player: Player) -> None:
        if player.id in self:
            raise ValueError(f"Duplicate player id: {player.id}")
        player.skills = complete_skill_map(player.skills)
        self._players.append(player)
