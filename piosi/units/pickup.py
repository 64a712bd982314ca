"""
Pickup module for the combat core.

Pickups are collectibles lying on the battlefield. A hero stepping on one
collects it; what happens next depends only on the pickup kind, resolved
through a dispatch table.
"""

import random
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, Field

from piosi.core.constants import PickupKind, StatKind
from piosi.core.logging import LogSink

from .unit import Unit

# Stats a spore-bearing hero may gain from a mushroom.
MUSHROOM_STATS: tuple[str, ...] = ("attack", "range", "agility", "hp")


class Pickup(BaseModel):
    """A collectible resting on a battlefield cell."""

    kind: PickupKind = Field(
        description="Vittle or mushroom.",
    )
    x: int = Field(description="Column of the pickup.")
    y: int = Field(description="Row of the pickup.")
    amount: int = Field(
        1,
        ge=0,
        description="HP restored by a vittle. Mushrooms always restore 1.",
    )
    symbol: str | None = Field(
        None,
        description="Board marker, defaults to the kind's symbol.",
    )

    def model_post_init(self, _: Any) -> None:
        if self.symbol is None:
            self.symbol = self.kind.symbol


def _collect_vittle(pickup: Pickup, hero: Unit, log: LogSink, rng: random.Random) -> None:
    hero.hp += pickup.amount
    log(f"{hero.name} picks up a vittle for {pickup.amount} HP! (New HP: {hero.hp})")


def _collect_mushroom(pickup: Pickup, hero: Unit, log: LogSink, rng: random.Random) -> None:
    if hero.stat(StatKind.SPORE) > 0:
        stat = rng.choice(MUSHROOM_STATS)
        setattr(hero, stat, getattr(hero, stat) + 1)
        log(f"{hero.name} collected a mushroom and gained +1 {stat}!")
        return
    hero.hp += 1
    log(f"{hero.name} picks up a mushroom for 1 HP! (New HP: {hero.hp})")


COLLECT_HANDLERS: dict[PickupKind, Callable[[Pickup, Unit, LogSink, random.Random], None]] = {
    PickupKind.VITTLE: _collect_vittle,
    PickupKind.MUSHROOM: _collect_mushroom,
}


def collect(
    pickup: Pickup,
    hero: Unit,
    log: LogSink,
    rng: random.Random | None = None,
) -> None:
    """
    Apply a pickup's effect to the hero that collected it.

    Args:
        pickup (Pickup):
            The collected pickup.
        hero (Unit):
            The hero stepping on it.
        log (LogSink):
            Sink for the narration.
        rng (random.Random | None):
            Random source for mushroom stat rolls.

    """
    COLLECT_HANDLERS[pickup.kind](pickup, hero, log, rng if rng is not None else random.Random())
