"""
Rendering helpers for the terminal driver.

Everything here consumes read-only views (BattleSnapshot, units) and
returns rich renderables or markup strings; nothing mutates game state.
"""

from collections.abc import Sequence

from rich.table import Table

from piosi.combat.engine import BattleSnapshot
from piosi.core.constants import EMPTY_CELL, SOLID_CELL, WALL_CELL, TurnPhase
from piosi.core.utils import make_bar
from piosi.units.unit import Unit

_CELL_STYLES = {
    EMPTY_CELL: "dim white",
    WALL_CELL: "bold yellow",
    SOLID_CELL: "bold white",
}


def render_grid(snapshot: BattleSnapshot, party: Sequence[Unit] = ()) -> str:
    """
    Rich markup for the battlefield grid.

    The active hero's cell is highlighted, in red while it is choosing an
    attack direction. Hero symbols are blue, other units red.
    """
    hero_symbols = {hero.symbol for hero in party}
    lines: list[str] = []
    for y, row in enumerate(snapshot.grid):
        cells: list[str] = []
        for x, marker in enumerate(row):
            if snapshot.active_position == (x, y):
                style = "bold white on red" if snapshot.awaiting_attack_direction else "bold white on blue"
            elif marker in _CELL_STYLES:
                style = _CELL_STYLES[marker]
            elif marker in hero_symbols:
                style = "bold blue"
            else:
                style = "bold red"
            cells.append(f"[{style}]{marker}[/]")
        lines.append(" ".join(cells))
    return "\n".join(lines)


def render_status(snapshot: BattleSnapshot) -> str:
    if snapshot.phase == TurnPhase.GAME_OVER:
        return "[bold red]Game Over[/]"
    if snapshot.phase == TurnPhase.TRANSITIONING:
        return "[bold green]The wall is down![/]"
    mode = "[bold red]attack: pick a direction[/]" if snapshot.awaiting_attack_direction else "move"
    return f"Wall HP: [bold yellow]{snapshot.wall_hp}[/]  Moves: {snapshot.move_points}  Mode: {mode}"


def party_table(party: Sequence[Unit], active: Unit | None = None) -> Table:
    """Party overview: stats, HP bar and special stats."""
    table = Table(title="Party", pad_edge=False)
    table.add_column("#", style="cyan")
    table.add_column("Hero", style="bold")
    table.add_column("HP")
    table.add_column("Atk", justify="right")
    table.add_column("Rng", justify="right")
    table.add_column("Agi", justify="right")
    table.add_column("Stats", style="magenta")
    for i, hero in enumerate(party, 1):
        name = f"> {hero.name}" if hero is active else hero.name
        stats = ", ".join(f"{kind.label} {value}" for kind, value in hero.stats.items())
        table.add_row(
            str(i),
            f"{hero.symbol} {name}",
            f"{make_bar(hero.hp, hero.max_hp or hero.hp, color='green')} {hero.hp}/{hero.max_hp}",
            str(hero.attack),
            str(hero.range),
            str(hero.agility),
            stats,
        )
    return table
