"""Match history tracking."""
from .action import MatchAction, ActionType
from .snapshot import StateSnapshot
from .timeline import Timeline

__all__ = [
    "MatchAction",
    "ActionType",
    "StateSnapshot",
    "Timeline",
]
