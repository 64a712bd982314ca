"""
Knockback module for the combat core.

Handles forced linear displacement ("yeet") of a unit along an attack's
direction. The unit slides cell by cell from its original position; hitting
the edge of the grid or a wall hurts it once and ends the slide.
"""

from pydantic import BaseModel, Field

from piosi.core.logging import LogSink
from piosi.units.unit import Unit

from .battlefield import Battlefield


class KnockbackResult(BaseModel):
    """Outcome of a single knockback."""

    cells_moved: int = Field(
        0,
        description="How many cells the unit actually travelled.",
    )
    collided: bool = Field(
        False,
        description="True if the unit hit the grid edge or a wall.",
    )
    damage_taken: int = Field(
        0,
        description="Collision damage applied, at most once per knockback.",
    )


def apply_knockback(
    unit: Unit,
    dx: int,
    dy: int,
    distance: int,
    damage_on_collision: int,
    battlefield: Battlefield,
    log: LogSink,
) -> KnockbackResult:
    """
    Push a unit up to `distance` cells along (dx, dy).

    Every step is computed from the unit's original position. An out of
    bounds step or a wall/solid cell applies the collision damage and stops
    the slide. A cell held by another unit stops the slide without damage.

    Args:
        unit (Unit):
            The unit being pushed.
        dx (int):
            Horizontal direction of the push.
        dy (int):
            Vertical direction of the push.
        distance (int):
            Maximum number of cells to travel.
        damage_on_collision (int):
            Damage dealt if the slide ends against the edge or a wall.
        battlefield (Battlefield):
            The grid the unit moves on.
        log (LogSink):
            Sink for the narration.

    Returns:
        KnockbackResult:
            How far the unit went and whether it collided.

    """
    result = KnockbackResult()
    origin_x, origin_y = unit.x, unit.y
    for i in range(1, distance + 1):
        new_x = origin_x + dx * i
        new_y = origin_y + dy * i
        if not battlefield.in_bounds(new_x, new_y):
            log(f"{unit.name} is knocked back into the wall and takes {damage_on_collision} damage!")
            unit.take_damage(damage_on_collision)
            result.collided = True
            result.damage_taken = damage_on_collision
            break
        if battlefield.is_blocking(new_x, new_y):
            log(
                f"{unit.name} collides with the wall during knockback and takes "
                f"{damage_on_collision} damage!"
            )
            unit.take_damage(damage_on_collision)
            result.collided = True
            result.damage_taken = damage_on_collision
            break
        if not battlefield.is_empty(new_x, new_y):
            break
        battlefield.move(unit, new_x, new_y)
        result.cells_moved += 1
    return result
