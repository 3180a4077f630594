"""Match action recording."""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import time


class ActionType(Enum):
    NEW_MATCH = "new_match"
    LIFE = "life"
    SET_LIFE = "set_life"
    POISON = "poison"
    COMMANDER_DAMAGE = "commander_damage"
    NEXT_TURN = "next_turn"


@dataclass(frozen=True)
class MatchAction:
    """Immutable record of the command that produced a snapshot.

    Player numbers are 1-based, as typed by the user.
    """
    action_type: ActionType
    player: int | None = None
    amount: int | None = None
    source: int | None = None
    timestamp: float = field(default_factory=time.time)

    def describe(self) -> str:
        """Short human readable label."""
        t = self.action_type
        if t == ActionType.NEW_MATCH:
            # player holds the player count, amount the starting life
            return f"new match, {self.player} players at {self.amount} life"
        if t == ActionType.LIFE:
            return f"P{self.player} life {self.amount:+d}"
        if t == ActionType.SET_LIFE:
            return f"P{self.player} life = {self.amount}"
        if t == ActionType.POISON:
            return f"P{self.player} poison {self.amount:+d}"
        if t == ActionType.COMMANDER_DAMAGE:
            return f"P{self.player} takes {self.amount:+d} commander damage from P{self.source}"
        return f"turn passes to P{self.player}"

    def to_dict(self) -> dict:
        return {
            "type": self.action_type.value,
            "player": self.player,
            "amount": self.amount,
            "source": self.source,
            "ts": self.timestamp,
            "label": self.describe(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> MatchAction:
        return cls(
            action_type=ActionType(data["type"]),
            player=data.get("player"),
            amount=data.get("amount"),
            source=data.get("source"),
            timestamp=data.get("ts", 0),
        )
