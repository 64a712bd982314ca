"""
Burn effect module for the combat core.

Burn deals a fixed amount of damage on every tick until its duration runs
out, so it always ticks exactly `remaining_duration` times.
"""

from typing import Any

from pydantic import Field

from piosi.core.constants import EffectKind
from piosi.core.logging import LogSink

from .base_effect import StatusEffect


class BurnEffect(StatusEffect):
    """Flat damage every tick for a fixed number of ticks."""

    kind: EffectKind = EffectKind.BURN

    damage_per_tick: int = Field(
        ge=0,
        description="Damage dealt on each tick.",
    )
    remaining_duration: int = Field(
        ge=0,
        description="Number of ticks left before the burn fades.",
    )

    def tick(self, unit: Any, log: LogSink) -> int:
        if self.remaining_duration <= 0:
            return 0
        log(f"{unit.name} is burned and takes {self.damage_per_tick} damage!")
        unit.hp -= self.damage_per_tick
        self.remaining_duration -= 1
        return self.damage_per_tick
