"""Match configuration dataclasses."""
from __future__ import annotations
from dataclasses import dataclass
import json


MIN_PLAYERS = 2
MAX_PLAYERS = 4
MAX_HISTORY = 200

STANDARD_LIFE = 20
COMMANDER_LIFE = 40

# Loss thresholds, used for display only
POISON_LIMIT = 10
COMMANDER_DAMAGE_LIMIT = 21

DEFAULT_DIE = 20


def clamp_players(players: int) -> int:
    """Clamp a requested player count into the supported range."""
    return max(MIN_PLAYERS, min(MAX_PLAYERS, players))


@dataclass
class MatchConfig:
    """Configuration for a single match."""
    players: int = MAX_PLAYERS
    commander: bool = True

    def __post_init__(self):
        self.players = clamp_players(self.players)

    @property
    def starting_life(self) -> int:
        return COMMANDER_LIFE if self.commander else STANDARD_LIFE

    @classmethod
    def standard(cls, players: int = 2) -> MatchConfig:
        """Preset: constructed match, 20 life."""
        return cls(players=players, commander=False)

    @classmethod
    def commander_pod(cls, players: int = MAX_PLAYERS) -> MatchConfig:
        """Preset: commander match, 40 life."""
        return cls(players=players, commander=True)

    def to_dict(self) -> dict:
        return {
            "players": self.players,
            "commander": self.commander,
        }

    @classmethod
    def from_dict(cls, data: dict) -> MatchConfig:
        return cls(
            players=data.get("players", MAX_PLAYERS),
            commander=data.get("commander", True),
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_json(cls, json_str: str) -> MatchConfig:
        return cls.from_dict(json.loads(json_str))
