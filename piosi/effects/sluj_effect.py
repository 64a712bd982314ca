"""
Slüj effect module for the combat core.

Slüj counts ticks and only bites on some of them: the higher the level, the
shorter the interval between bites and the harder each bite.

    level 1: 2 damage every 4th tick
    level 2: 4 damage every 3rd tick
    level 3: 6 damage every 2nd tick
    level 4+: level * 2 damage every tick
"""

from typing import Any

from pydantic import Field

from piosi.core.constants import EffectKind
from piosi.core.logging import LogSink

from .base_effect import StatusEffect


def sluj_interval(level: int) -> int:
    """Number of ticks between two slüj bites, never below 1."""
    return max(5 - level, 1)


def sluj_damage(level: int) -> int:
    """Damage of a single slüj bite."""
    return level * 2


class SlujEffect(StatusEffect):
    """Interval-gated damage that scales with its level."""

    kind: EffectKind = EffectKind.SLUJ

    level: int = Field(
        ge=1,
        description="Slüj level, drives both interval and damage.",
    )
    remaining_duration: int = Field(
        description="Number of ticks left before the slüj wears off.",
    )
    tick_counter: int = Field(
        0,
        ge=0,
        description="Ticks elapsed since the effect was applied.",
    )

    def tick(self, unit: Any, log: LogSink) -> int:
        self.tick_counter += 1
        damage = 0
        if self.tick_counter % sluj_interval(self.level) == 0:
            damage = sluj_damage(self.level)
            log(f"{unit.name} takes {damage} slüj damage due to its slüj effect!")
            unit.hp -= damage
        # The duration runs down whether or not this tick did damage.
        self.remaining_duration -= 1
        return damage

    def expiry_message(self, unit: Any) -> str | None:
        return f"{unit.name}'s slüj effect wears off."
