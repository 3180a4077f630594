"""Text command parsing for the console and the /api/command endpoint."""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from .config import MAX_PLAYERS
from .dice import parse_die


class CommandType(Enum):
    NEW = "new"
    LIFE = "life"
    SET = "set"
    POISON = "poison"
    COMMANDER = "cmd"
    NEXT = "next"
    SHOW = "show"
    HISTORY = "history"
    ROLL = "roll"
    COIN = "coin"
    UNDO = "undo"
    REDO = "redo"
    HELP = "help"
    QUIT = "quit"


USAGE = {
    CommandType.NEW: "new <players 2-4> [c]",
    CommandType.LIFE: "+<p> <n> / -<p> <n>",
    CommandType.SET: "set <p> <n>",
    CommandType.POISON: "poison <p> <+/-n>",
    CommandType.COMMANDER: "cmd <target> <source> <+n>",
    CommandType.ROLL: "roll [dN]",
}

# Commands that take no arguments
_BARE = {
    "next": CommandType.NEXT,
    "show": CommandType.SHOW,
    "history": CommandType.HISTORY,
    "coin": CommandType.COIN,
    "undo": CommandType.UNDO,
    "redo": CommandType.REDO,
    "help": CommandType.HELP,
    "quit": CommandType.QUIT,
    "exit": CommandType.QUIT,
}


class CommandError(ValueError):
    """Raised for unknown or malformed command input."""


@dataclass(frozen=True)
class Command:
    """A parsed command. Player numbers are 1-based."""
    type: CommandType
    player: int | None = None
    amount: int | None = None
    source: int | None = None
    sides: int | None = None
    players: int | None = None
    commander: bool = False


def _ints(args: list[str], count: int, command_type: CommandType) -> list[int]:
    if len(args) != count:
        raise CommandError(f"Usage: {USAGE[command_type]}")
    try:
        return [int(a) for a in args]
    except ValueError:
        raise CommandError(f"Usage: {USAGE[command_type]}") from None


def parse_command(line: str) -> Command | None:
    """Parse one line of input. Returns None for blank lines.

    Raises CommandError for unknown commands or bad arguments.
    """
    line = line.strip()
    if not line:
        return None

    # "+1 3" adds 3 life to player 1, "-2 5" takes 5 from player 2
    if line[0] in "+-":
        player, amount = _ints(line[1:].split(), 2, CommandType.LIFE)
        if line[0] == "-":
            amount = -amount
        return Command(CommandType.LIFE, player=player, amount=amount)

    word, *args = line.split()
    word = word.lower()

    if word in _BARE:
        return Command(_BARE[word])

    if word == "new":
        players = MAX_PLAYERS
        commander = False
        if args and args[0][0] not in "cC":
            try:
                players = int(args.pop(0))
            except ValueError:
                raise CommandError(f"Usage: {USAGE[CommandType.NEW]}") from None
        if args:
            commander = args[0][0] in "cC"
        if players <= 0:
            players = MAX_PLAYERS
        return Command(CommandType.NEW, players=players, commander=commander)

    if word == "set":
        player, amount = _ints(args, 2, CommandType.SET)
        return Command(CommandType.SET, player=player, amount=amount)

    if word == "poison":
        player, amount = _ints(args, 2, CommandType.POISON)
        return Command(CommandType.POISON, player=player, amount=amount)

    if word == "cmd":
        target, source, amount = _ints(args, 3, CommandType.COMMANDER)
        return Command(CommandType.COMMANDER, player=target, source=source, amount=amount)

    if word == "roll":
        try:
            sides = parse_die(args[0] if args else None)
        except ValueError as e:
            raise CommandError(f"{e}. Usage: {USAGE[CommandType.ROLL]}") from None
        return Command(CommandType.ROLL, sides=sides)

    raise CommandError("Unknown command. Type 'help' for a list of valid inputs.")
