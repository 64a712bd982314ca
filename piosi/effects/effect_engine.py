"""
Status effect engine for the combat core.

Runs one tick of every recurring effect on every living unit, then removes
the units those ticks defeated from their collection and from the grid.
"""

from collections.abc import Sequence
from typing import Any

from piosi.combat.battlefield import Battlefield
from piosi.core.constants import EffectKind
from piosi.core.logging import LogSink, log_debug

from .base_effect import StatusEffect


def apply_effect(unit: Any, effect: StatusEffect, log: LogSink | None = None) -> bool:
    """
    Install an effect on a unit, replacing any effect of the same kind.

    Args:
        unit (Unit):
            The unit receiving the effect.
        effect (StatusEffect):
            The effect to install.
        log (LogSink | None):
            Optional sink for the narration.

    Returns:
        bool:
            True if an existing effect of the same kind was refreshed.

    """
    if not unit.is_alive():
        log_debug(f"Cannot apply {effect.display_name}: {unit.name} is defeated.")
        return False
    refreshed = effect.kind in unit.status_effects
    unit.status_effects[effect.kind] = effect
    if log is not None:
        verb = "refreshed on" if refreshed else "afflicts"
        log(f"{effect.display_name} {verb} {unit.name}.")
    return refreshed


def tick_unit(unit: Any, log: LogSink) -> EffectKind | None:
    """
    Tick every effect carried by a unit once, dropping the expired ones.

    Args:
        unit (Unit):
            The unit whose effects are ticked.
        log (LogSink):
            Sink for the narration.

    Returns:
        EffectKind | None:
            The last effect kind that dealt damage, None if nothing did.

    """
    last_damaging: EffectKind | None = None
    for kind, effect in list(unit.status_effects.items()):
        if effect.tick(unit, log) > 0:
            last_damaging = kind
        if effect.expired:
            message = effect.expiry_message(unit)
            if message:
                log(message)
            del unit.status_effects[kind]
    return last_damaging


def _tick_group(units: Sequence[Any], battlefield: Battlefield, log: LogSink) -> list[Any]:
    causes: dict[int, EffectKind] = {}
    for unit in units:
        cause = tick_unit(unit, log)
        if cause is not None:
            causes[id(unit)] = cause
    survivors = []
    for unit in units:
        if unit.is_alive():
            survivors.append(unit)
            continue
        cause = causes.get(id(unit))
        reason = f"{cause.value} damage" if cause else "its wounds"
        log(f"{unit.name} was defeated by {reason}!")
        battlefield.remove(unit)
        unit.status_effects.clear()
    return survivors


def apply_status_effects(
    heroes: Sequence[Any],
    enemies: Sequence[Any],
    battlefield: Battlefield,
    log: LogSink,
) -> tuple[list[Any], list[Any]]:
    """
    Run one tick boundary over the party and the enemies.

    Heroes are processed before enemies. Each effect kind ticks
    independently, and units brought to 0 HP are filtered out afterwards.

    Args:
        heroes (Sequence[Unit]):
            The living party.
        enemies (Sequence[Unit]):
            The living enemies.
        battlefield (Battlefield):
            The grid whose cells are cleared for defeated units.
        log (LogSink):
            Sink for the narration.

    Returns:
        tuple[list[Unit], list[Unit]]:
            The surviving heroes and the surviving enemies, in order.

    """
    return (
        _tick_group(heroes, battlefield, log),
        _tick_group(enemies, battlefield, log),
    )
