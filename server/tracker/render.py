"""Plain text rendering for the console."""
from __future__ import annotations

from .history import StateSnapshot

RULE = "-" * 50

BANNER = "\n".join([
    "=" * 50,
    "Magic: The Gathering Life / Poison Tracker",
    "=" * 50,
])

HELP_TEXT = "\n".join([
    "",
    "Magic: The Gathering Life Tracker Commands:",
    RULE,
    "  new <players 2-4> [c]        Start new game; add 'c' for Commander (40 life)",
    "  +<p> <n> / -<p> <n>          Add/subtract life for player p  (e.g. +1 3)",
    "  set <p> <n>                  Set life of player p",
    "  poison <p> <+/-n>            Add/remove poison counters",
    "  cmd <target> <source> <+n>   Commander dmg to <target> from <source>",
    "  next                         Pass turn to next player",
    "  show                         Display life totals",
    "  history                      List undo history",
    "  roll [dN]                    Roll a die (default d20, e.g. roll d6)",
    "  coin                         Flip a coin",
    "  undo / redo                  Undo or redo last action",
    "  help                         Show this help text",
    "  quit                         Exit program",
    RULE,
])


def render_state(snapshot: StateSnapshot) -> str:
    """Render the life table for one snapshot."""
    mode = "Commander (40 life)" if snapshot.commander else "Constructed (20 life)"
    lines = [
        "",
        RULE,
        f"Players: {snapshot.players} | Mode: {mode} | Turn: P{snapshot.turn + 1}",
        "Idx  Life  Poison   | Commander Damage (to P_i from P_j)",
    ]
    for i in range(snapshot.players):
        row = f"P{i + 1:<3d} {snapshot.life[i]:<5d} {snapshot.poison[i]:<7d} | "
        if snapshot.commander:
            row += " ".join(
                f"P{j + 1}:{dmg}"
                for j, dmg in enumerate(snapshot.commander_damage[i])
                if j != i and dmg > 0
            )
        lines.append(row.rstrip())
    lines.append(RULE)
    return "\n".join(lines)


def render_history(entries: list[StateSnapshot], cursor: int) -> str:
    """One line per reachable entry, the current one marked with '>'."""
    lines = []
    for i, snapshot in enumerate(entries):
        marker = ">" if i == cursor else " "
        label = snapshot.action.describe() if snapshot.action else "start"
        lines.append(f"{marker} {i:>3d}  {label}")
    return "\n".join(lines)
