from .state import MatchState
from .config import MatchConfig
from .history import StateSnapshot, Timeline
from .commands import Command, CommandType, CommandError, parse_command
from .orchestrator import MatchOrchestrator
