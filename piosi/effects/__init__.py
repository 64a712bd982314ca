"""
Effects system module for the PIOSI combat core.

This module contains the recurring damage effects (burn and slüj) and the
engine that ticks them at every turn boundary.
"""

from typing import Annotated, Any

from pydantic import Discriminator, Tag

from piosi.core.constants import EffectKind

from .base_effect import StatusEffect
from .burn_effect import BurnEffect
from .effect_engine import apply_effect, apply_status_effects, tick_unit
from .sluj_effect import SlujEffect, sluj_damage, sluj_interval


def _effect_tag(value: Any) -> str | None:
    """Returns the effect kind of a model instance or a raw mapping."""
    kind = value.get("kind") if isinstance(value, dict) else getattr(value, "kind", None)
    try:
        return EffectKind(kind).value
    except ValueError:
        return None


# Tagged union used wherever effects are stored or deserialized.
AnyStatusEffect = Annotated[
    Annotated[BurnEffect, Tag(EffectKind.BURN.value)]
    | Annotated[SlujEffect, Tag(EffectKind.SLUJ.value)],
    Discriminator(_effect_tag),
]

__all__ = [
    "AnyStatusEffect",
    "StatusEffect",
    "BurnEffect",
    "SlujEffect",
    "sluj_damage",
    "sluj_interval",
    "apply_effect",
    "apply_status_effects",
    "tick_unit",
]
