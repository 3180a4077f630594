"""Match state snapshots for undo/redo."""
from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .action import MatchAction

if TYPE_CHECKING:
    from ..state import MatchState


@dataclass(frozen=True)
class StateSnapshot:
    """Complete match state at a point in time.

    Frozen and built from tuples, so a stored snapshot can never be changed
    through a reference held by the caller.
    """
    players: int
    commander: bool
    life: tuple[int, ...]
    poison: tuple[int, ...]
    commander_damage: tuple[tuple[int, ...], ...]
    turn: int
    action: MatchAction | None = None

    @classmethod
    def capture(cls, state: MatchState, action: MatchAction | None = None) -> StateSnapshot:
        """Capture a working copy."""
        return cls(
            players=state.players,
            commander=state.commander,
            life=tuple(state.life),
            poison=tuple(state.poison),
            commander_damage=tuple(tuple(row) for row in state.commander_damage),
            turn=state.turn,
            action=action,
        )

    def restore(self) -> MatchState:
        """Return a fresh mutable working copy of this snapshot."""
        from ..state import MatchState
        return MatchState(
            players=self.players,
            commander=self.commander,
            life=list(self.life),
            poison=list(self.poison),
            commander_damage=[list(row) for row in self.commander_damage],
            turn=self.turn,
        )

    def to_dict(self) -> dict:
        data = self.restore().to_dict()
        data["action"] = self.action.to_dict() if self.action else None
        return data

    @classmethod
    def from_dict(cls, data: dict) -> StateSnapshot:
        from ..state import MatchState
        action = MatchAction.from_dict(data["action"]) if data.get("action") else None
        return cls.capture(MatchState.from_dict(data), action)
