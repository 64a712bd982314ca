"""
Combat resolver module for the combat core.

Resolves a hero's ranged attack along a straight line: the shot travels up
to the attacker's range and stops at the first enemy or wall segment it
meets.
"""

from collections.abc import Sequence

from pydantic import BaseModel, Field

from piosi.core.constants import AttackOutcomeKind, StatKind, UnitKind
from piosi.core.logging import LogSink
from piosi.units.unit import Unit

from .battlefield import Battlefield
from .knockback import KnockbackResult, apply_knockback


class AttackOutcome(BaseModel):
    """What a line-of-fire attack ran into."""

    kind: AttackOutcomeKind = Field(
        description="Enemy hit, wall hit or miss.",
    )
    damage: int = Field(
        0,
        description="Damage dealt to the enemy or the wall.",
    )
    target: Unit | None = Field(
        None,
        description="The enemy that was hit, if any.",
    )
    defeated: bool = Field(
        False,
        description="True if the hit enemy dropped to 0 HP.",
    )
    knockback: KnockbackResult | None = Field(
        None,
        description="Knockback applied to the enemy, if the attacker yeets.",
    )


def find_unit_at(units: Sequence[Unit], x: int, y: int) -> Unit | None:
    """First living unit standing on (x, y)."""
    for unit in units:
        if unit.x == x and unit.y == y and unit.is_alive():
            return unit
    return None


def resolve_line_attack(
    attacker: Unit,
    dx: int,
    dy: int,
    battlefield: Battlefield,
    enemies: Sequence[Unit],
    log: LogSink,
) -> AttackOutcome:
    """
    March from the attacker along (dx, dy) and resolve the first hit.

    Enemies hit are damaged here, pushed back if the attacker carries a yeet
    stat, and cleared from the grid when defeated; filtering them out of the
    enemy list is left to the caller. Wall hits are only reported, the
    caller owns the wall's HP.

    Args:
        attacker (Unit):
            The attacking hero.
        dx (int):
            Horizontal direction of the attack.
        dy (int):
            Vertical direction of the attack.
        battlefield (Battlefield):
            The grid the shot travels on.
        enemies (Sequence[Unit]):
            The living enemies.
        log (LogSink):
            Sink for the narration.

    Returns:
        AttackOutcome:
            The resolved outcome.

    """
    for i in range(1, attacker.range + 1):
        target_x = attacker.x + dx * i
        target_y = attacker.y + dy * i
        if not battlefield.in_bounds(target_x, target_y):
            break
        enemy = find_unit_at(enemies, target_x, target_y)
        if enemy is not None:
            return _hit_enemy(attacker, enemy, dx, dy, battlefield, log)
        if battlefield.is_wall(target_x, target_y):
            return AttackOutcome(kind=AttackOutcomeKind.HIT_WALL, damage=attacker.attack)
        if battlefield.is_blocking(target_x, target_y):
            break
    log(f"{attacker.name} attacks, but there's nothing in range.")
    return AttackOutcome(kind=AttackOutcomeKind.MISS)


def _hit_enemy(
    attacker: Unit,
    enemy: Unit,
    dx: int,
    dy: int,
    battlefield: Battlefield,
    log: LogSink,
) -> AttackOutcome:
    enemy.take_damage(attacker.attack)
    log(
        f"{attacker.name} attacks {enemy.name} for {attacker.attack} damage! "
        f"(HP left: {enemy.hp})"
    )
    outcome = AttackOutcome(
        kind=AttackOutcomeKind.HIT_ENEMY,
        damage=attacker.attack,
        target=enemy,
    )
    yeet = attacker.stat(StatKind.YEET)
    if yeet > 0 and enemy.is_alive() and enemy.kind != UnitKind.WALL:
        outcome.knockback = apply_knockback(
            enemy, dx, dy, yeet, attacker.attack, battlefield, log
        )
    if enemy.is_dead():
        log(f"{enemy.name} is defeated!")
        battlefield.remove(enemy)
        outcome.defeated = True
    return outcome
