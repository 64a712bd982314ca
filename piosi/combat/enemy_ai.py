"""
Enemy AI module for the combat core.

Enemies are greedy: each sub-step they walk one cell toward the closest
hero, and once done moving they strike every hero standing next to them.
"""

from collections.abc import Sequence

from piosi.core.constants import ORTHOGONAL_DIRECTIONS
from piosi.core.logging import LogSink
from piosi.core.utils import sign
from piosi.units.unit import Unit

from .battlefield import Battlefield
from .resolver import find_unit_at


def find_closest_hero(enemy: Unit, party: Sequence[Unit]) -> Unit | None:
    """
    Living hero with the smallest Manhattan distance to the enemy.

    Ties go to the hero found first in party order.
    """
    closest: Unit | None = None
    best = 0
    for hero in party:
        if hero.is_dead():
            continue
        distance = enemy.distance_to(hero)
        if closest is None or distance < best:
            closest, best = hero, distance
    return closest


def move_enemy(enemy: Unit, party: Sequence[Unit], battlefield: Battlefield) -> bool:
    """
    Take one step toward the closest hero.

    The axis with the larger distance is preferred (x on ties). When that
    step is blocked, the perpendicular step toward the hero is tried; when
    both are blocked the enemy stays put.

    Returns:
        bool:
            True if the enemy moved.

    """
    target = find_closest_hero(enemy, party)
    if target is None:
        return False
    dx = target.x - enemy.x
    dy = target.y - enemy.y
    if abs(dx) >= abs(dy):
        step_x, step_y = sign(dx), 0
    else:
        step_x, step_y = 0, sign(dy)

    if not battlefield.is_empty(enemy.x + step_x, enemy.y + step_y):
        if step_x != 0 and dy != 0 and battlefield.is_empty(enemy.x, enemy.y + sign(dy)):
            step_x, step_y = 0, sign(dy)
        elif step_y != 0 and dx != 0 and battlefield.is_empty(enemy.x + sign(dx), enemy.y):
            step_x, step_y = sign(dx), 0

    new_x, new_y = enemy.x + step_x, enemy.y + step_y
    if (step_x or step_y) and battlefield.is_empty(new_x, new_y):
        battlefield.move(enemy, new_x, new_y)
        return True
    return False


def attack_adjacent(
    enemy: Unit,
    party: Sequence[Unit],
    battlefield: Battlefield,
    log: LogSink,
) -> list[Unit]:
    """
    Strike every hero orthogonally adjacent to the enemy.

    Defeated heroes are cleared from the grid; removing them from the party
    is left to the caller.

    Returns:
        list[Unit]:
            The heroes defeated by this enemy.

    """
    defeated: list[Unit] = []
    for dx, dy in ORTHOGONAL_DIRECTIONS:
        hero = find_unit_at(party, enemy.x + dx, enemy.y + dy)
        if hero is None:
            continue
        hero.take_damage(enemy.attack)
        log(
            f"{enemy.name} attacks {hero.name} for {enemy.attack} damage! "
            f"(Hero HP: {hero.hp})"
        )
        if hero.is_dead():
            log(f"{hero.name} is defeated!")
            battlefield.remove(hero)
            defeated.append(hero)
    return defeated
