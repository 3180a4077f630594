"""Match orchestrator that applies commands to the history timeline."""
from __future__ import annotations
import logging
import random

from . import dice
from .commands import Command, CommandType
from .config import MAX_HISTORY, MatchConfig
from .history import ActionType, MatchAction, StateSnapshot, Timeline
from .state import MatchState

logger = logging.getLogger(__name__)


class MatchOrchestrator:
    """Owns the single match timeline and turns commands into snapshots.

    Every state-changing command copies the current snapshot into a working
    ``MatchState``, mutates it, and commits it with ``Timeline.append``.
    Public methods take 1-based player numbers and return status dicts:

    - ``{"status": "ok", ...}`` on success
    - ``{"status": "error", "message": ...}`` for rejected input
    - ``{"status": "nothing_to_undo" | "nothing_to_redo", "message": ...}``
      at the ends of the history
    """

    def __init__(self, config: MatchConfig | None = None,
                 capacity: int = MAX_HISTORY,
                 rng: random.Random | None = None):
        self.config = config or MatchConfig()
        self.timeline = Timeline(capacity)
        self.rng = rng or random.Random()

    def initialize(self) -> StateSnapshot:
        """Start the timeline from a fresh match built from config."""
        state = MatchState.new_match(self.config.players, self.config.commander)
        seed = StateSnapshot.capture(state, self._new_match_action(state))
        self.timeline.initialize(seed)
        logger.info("Timeline initialized: %d players, commander=%s",
                    state.players, state.commander)
        return seed

    def reset(self, players: int, commander: bool) -> StateSnapshot:
        """Start over with a new config, discarding all history."""
        self.config = MatchConfig(players=players, commander=commander)
        return self.initialize()

    @property
    def current(self) -> StateSnapshot:
        return self.timeline.current()

    def working_copy(self) -> MatchState:
        """Independent mutable copy of the current snapshot."""
        return self.current.restore()

    @staticmethod
    def _new_match_action(state: MatchState) -> MatchAction:
        return MatchAction(ActionType.NEW_MATCH, player=state.players, amount=state.life[0])

    def _commit(self, state: MatchState, result: dict, action: MatchAction) -> dict:
        if not result["success"]:
            return {"status": "error", "message": result["message"]}
        self.timeline.append(StateSnapshot.capture(state, action))
        logger.debug("Committed %s (cursor=%d, top=%d)", action.describe(),
                     self.timeline.cursor, self.timeline.top)
        return {"status": "ok", "result": result}

    # ==================== State-changing commands ====================

    def new_match(self, players: int, commander: bool) -> dict:
        """Commit a fresh match as a new, undoable entry."""
        state = MatchState.new_match(players, commander)
        logger.info("New match: %d players, commander=%s", state.players, commander)
        return self._commit(state, {"success": True, "players": state.players},
                            self._new_match_action(state))

    def change_life(self, player: int, amount: int) -> dict:
        state = self.working_copy()
        result = state.change_life(player - 1, amount)
        return self._commit(state, result, MatchAction(ActionType.LIFE, player=player, amount=amount))

    def set_life(self, player: int, value: int) -> dict:
        state = self.working_copy()
        result = state.set_life(player - 1, value)
        return self._commit(state, result, MatchAction(ActionType.SET_LIFE, player=player, amount=value))

    def add_poison(self, player: int, amount: int) -> dict:
        state = self.working_copy()
        result = state.add_poison(player - 1, amount)
        return self._commit(state, result, MatchAction(ActionType.POISON, player=player, amount=amount))

    def add_commander_damage(self, target: int, source: int, amount: int) -> dict:
        state = self.working_copy()
        result = state.add_commander_damage(target - 1, source - 1, amount)
        action = MatchAction(ActionType.COMMANDER_DAMAGE, player=target, amount=amount, source=source)
        return self._commit(state, result, action)

    def next_turn(self) -> dict:
        state = self.working_copy()
        result = state.next_turn()
        return self._commit(state, result, MatchAction(ActionType.NEXT_TURN, player=state.turn + 1))

    # ==================== Navigation ====================

    def undo(self) -> dict:
        if not self.timeline.undo():
            return {"status": "nothing_to_undo", "message": "Nothing to undo."}
        return {"status": "ok", "cursor": self.timeline.cursor}

    def redo(self) -> dict:
        if not self.timeline.redo():
            return {"status": "nothing_to_redo", "message": "Nothing to redo."}
        return {"status": "ok", "cursor": self.timeline.cursor}

    # ==================== Randomness (not recorded) ====================

    def roll(self, sides: int) -> dict:
        try:
            value = dice.roll(sides, self.rng)
        except ValueError as e:
            return {"status": "error", "message": str(e)}
        return {"status": "ok", "sides": sides, "value": value}

    def flip_coin(self) -> dict:
        return {"status": "ok", "result": dice.flip_coin(self.rng)}

    # ==================== Dispatch ====================

    def execute(self, command: Command) -> dict:
        """Run a parsed command.

        Display-only commands answer with their own status (``show``,
        ``help``, ``history``, ``quit``) so callers decide how to present them.
        """
        t = command.type
        if t == CommandType.NEW:
            return self.new_match(command.players, command.commander)
        elif t == CommandType.LIFE:
            return self.change_life(command.player, command.amount)
        elif t == CommandType.SET:
            return self.set_life(command.player, command.amount)
        elif t == CommandType.POISON:
            return self.add_poison(command.player, command.amount)
        elif t == CommandType.COMMANDER:
            return self.add_commander_damage(command.player, command.source, command.amount)
        elif t == CommandType.NEXT:
            return self.next_turn()
        elif t == CommandType.UNDO:
            return self.undo()
        elif t == CommandType.REDO:
            return self.redo()
        elif t == CommandType.ROLL:
            return self.roll(command.sides)
        elif t == CommandType.COIN:
            return self.flip_coin()
        elif t == CommandType.HISTORY:
            return {"status": "history", "history": self.get_history()}
        elif t == CommandType.SHOW:
            return {"status": "show"}
        elif t == CommandType.HELP:
            return {"status": "help"}
        elif t == CommandType.QUIT:
            return {"status": "quit"}
        else:
            raise ValueError(f"Unknown command type: {t}")

    # ==================== Queries ====================

    def get_history(self) -> list[dict]:
        """Reachable entries, oldest first."""
        cursor = self.timeline.cursor
        return [
            {
                "index": i,
                "current": i == cursor,
                "action": s.action.to_dict() if s.action else None,
            }
            for i, s in enumerate(self.timeline.entries())
        ]

    def to_dict(self) -> dict:
        return {
            "config": self.config.to_dict(),
            "state": self.current.to_dict(),
            "cursor": self.timeline.cursor,
            "top": self.timeline.top,
            "capacity": self.timeline.capacity,
            "can_undo": self.timeline.can_undo,
            "can_redo": self.timeline.can_redo,
        }
