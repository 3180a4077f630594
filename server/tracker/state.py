from __future__ import annotations
from dataclasses import dataclass, field

from .config import (
    COMMANDER_DAMAGE_LIMIT,
    COMMANDER_LIFE,
    POISON_LIMIT,
    STANDARD_LIFE,
    clamp_players,
)


@dataclass
class MatchState:
    """Mutable working copy of a match.

    Commands edit a copy of the current state and commit it to the timeline
    as a new snapshot. Player indices are 0-based here; the command layer
    converts from the 1-based numbers shown to users.
    """
    players: int
    commander: bool
    life: list[int]
    poison: list[int]
    # commander_damage[target][source]
    commander_damage: list[list[int]] = field(default_factory=list)
    turn: int = 0

    @classmethod
    def new_match(cls, players: int = 4, commander: bool = True) -> MatchState:
        """Create a fresh match with starting life totals."""
        players = clamp_players(players)
        starting_life = COMMANDER_LIFE if commander else STANDARD_LIFE
        return cls(
            players=players,
            commander=commander,
            life=[starting_life] * players,
            poison=[0] * players,
            commander_damage=[[0] * players for _ in range(players)],
            turn=0,
        )

    def copy(self) -> MatchState:
        """Deep copy; nothing is shared with the original."""
        return MatchState(
            players=self.players,
            commander=self.commander,
            life=list(self.life),
            poison=list(self.poison),
            commander_damage=[list(row) for row in self.commander_damage],
            turn=self.turn,
        )

    def _valid_player(self, idx: int) -> bool:
        return 0 <= idx < self.players

    def _bad_player(self, idx: int) -> dict:
        return {
            "success": False,
            "message": f"Player must be between 1 and {self.players}, got {idx + 1}",
        }

    def change_life(self, player_idx: int, delta: int) -> dict:
        """Add (or subtract) life. Life totals may go negative."""
        if not self._valid_player(player_idx):
            return self._bad_player(player_idx)
        self.life[player_idx] += delta
        return {
            "success": True,
            "player": player_idx,
            "life": self.life[player_idx],
        }

    def set_life(self, player_idx: int, value: int) -> dict:
        if not self._valid_player(player_idx):
            return self._bad_player(player_idx)
        self.life[player_idx] = value
        return {
            "success": True,
            "player": player_idx,
            "life": value,
        }

    def add_poison(self, player_idx: int, delta: int) -> dict:
        """Add or remove poison counters, never below zero."""
        if not self._valid_player(player_idx):
            return self._bad_player(player_idx)
        self.poison[player_idx] = max(0, self.poison[player_idx] + delta)
        return {
            "success": True,
            "player": player_idx,
            "poison": self.poison[player_idx],
        }

    def add_commander_damage(self, target_idx: int, source_idx: int, delta: int) -> dict:
        """Track commander damage dealt to target by source's commander.

        Only valid in commander mode. The tally never drops below zero and
        does not change life; players adjust life separately.
        """
        if not self.commander:
            return {"success": False, "message": "Commander damage requires a commander match"}
        if not self._valid_player(target_idx):
            return self._bad_player(target_idx)
        if not self._valid_player(source_idx):
            return self._bad_player(source_idx)
        if target_idx == source_idx:
            return {"success": False, "message": "A commander cannot damage its own player"}

        row = self.commander_damage[target_idx]
        row[source_idx] = max(0, row[source_idx] + delta)
        return {
            "success": True,
            "target": target_idx,
            "source": source_idx,
            "damage": row[source_idx],
        }

    def next_turn(self) -> dict:
        self.turn = (self.turn + 1) % self.players
        return {"success": True, "turn": self.turn}

    def is_eliminated(self, player_idx: int) -> bool:
        """True if the player has lost by life, poison or commander damage."""
        if self.life[player_idx] <= 0 or self.poison[player_idx] >= POISON_LIMIT:
            return True
        if self.commander:
            return any(d >= COMMANDER_DAMAGE_LIMIT for d in self.commander_damage[player_idx])
        return False

    def to_dict(self) -> dict:
        return {
            "players": self.players,
            "commander": self.commander,
            "life": list(self.life),
            "poison": list(self.poison),
            "commander_damage": [list(row) for row in self.commander_damage],
            "turn": self.turn,
            "eliminated": [self.is_eliminated(i) for i in range(self.players)],
        }

    @classmethod
    def from_dict(cls, data: dict) -> MatchState:
        players = data["players"]
        damage = data.get("commander_damage") or [[0] * players for _ in range(players)]
        return cls(
            players=players,
            commander=data["commander"],
            life=list(data["life"]),
            poison=list(data["poison"]),
            commander_damage=[list(row) for row in damage],
            turn=data.get("turn", 0),
        )
