"""
Mode-up module for the PIOSI combat core.

After a level is cleared the player picks one hero to "mode up": the chosen
hero's class decides a stat delta, scaled by the level just completed, and
that delta is applied to the whole party.
"""

from collections.abc import Callable, Sequence

from pydantic import BaseModel, Field

from piosi.core.constants import StatKind
from piosi.core.logging import LogSink
from piosi.units.unit import Unit


class StatDelta(BaseModel):
    """A party-wide stat increase."""

    hp: int = Field(0, description="HP added to every living hero.")
    attack: int = Field(0, description="Attack added to every hero.")
    range: int = Field(0, description="Range added to every hero.")
    agility: int = Field(0, description="Agility added to every hero.")
    stats: dict[StatKind, int] = Field(
        default_factory=dict,
        description="Special stats added to every hero.",
    )

    def is_empty(self) -> bool:
        return not (self.hp or self.attack or self.range or self.agility or any(self.stats.values()))

    def scaled(self, factor: int) -> "StatDelta":
        return StatDelta(
            hp=self.hp * factor,
            attack=self.attack * factor,
            range=self.range * factor,
            agility=self.agility * factor,
            stats={kind: value * factor for kind, value in self.stats.items()},
        )


# Per-level buffs of the heroes with a signature mode-up.
HERO_BUFFS: dict[str, StatDelta] = {
    "Knight": StatDelta(attack=1, hp=2),
    "Archer": StatDelta(range=1),
    "Berserker": StatDelta(attack=3),
    "Rogue": StatDelta(agility=2),
    "Torcher": StatDelta(stats={StatKind.BURN: 1}),
    "Slüjier": StatDelta(stats={StatKind.SLUJ: 1}),
    "Cleric": StatDelta(stats={StatKind.HEAL: 2}),
    "Sycophant": StatDelta(
        attack=1,
        hp=1,
        range=1,
        agility=1,
        stats={
            StatKind.BURN: 1,
            StatKind.SLUJ: 1,
            StatKind.HEAL: 1,
            StatKind.GHIS: 1,
        },
    ),
    "Mellitron": StatDelta(stats={StatKind.SWARM: 1}),
}

# Order of the fragments in the mode-up message.
_MESSAGE_ORDER: tuple[tuple[str, Callable[[StatDelta], int]], ...] = (
    ("HP", lambda d: d.hp),
    ("Attack", lambda d: d.attack),
    ("Range", lambda d: d.range),
    ("Agility", lambda d: d.agility),
    (StatKind.BURN.label, lambda d: d.stats.get(StatKind.BURN, 0)),
    (StatKind.SLUJ.label, lambda d: d.stats.get(StatKind.SLUJ, 0)),
    (StatKind.HEAL.label, lambda d: d.stats.get(StatKind.HEAL, 0)),
    (StatKind.GHIS.label, lambda d: d.stats.get(StatKind.GHIS, 0)),
    (StatKind.YEET.label, lambda d: d.stats.get(StatKind.YEET, 0)),
    (StatKind.SWARM.label, lambda d: d.stats.get(StatKind.SWARM, 0)),
)


def compute_buff(hero: Unit, level: int) -> StatDelta:
    """
    Stat delta granted by moding up `hero` after clearing `level`.

    Named heroes use their signature buff. Anyone else gains yeet if they
    carry it, heal if they carry it, and ghïs otherwise.
    """
    base = HERO_BUFFS.get(hero.name)
    if base is None:
        if hero.has_stat(StatKind.YEET):
            base = StatDelta(stats={StatKind.YEET: 1})
        elif hero.has_stat(StatKind.HEAL):
            base = StatDelta(stats={StatKind.HEAL: 1})
        else:
            base = StatDelta(stats={StatKind.GHIS: 1})
    return base.scaled(level)


def apply_buff(delta: StatDelta, party: Sequence[Unit]) -> None:
    """Add the delta to every party member; HP only goes to the living."""
    for hero in party:
        if delta.hp and hero.hp > 0:
            hero.hp += delta.hp
            hero.max_hp = (hero.max_hp or 0) + delta.hp
        hero.attack += delta.attack
        hero.range += delta.range
        hero.agility += delta.agility
        for kind, amount in delta.stats.items():
            hero.add_stat(kind, amount)


def describe_buff(hero: Unit, delta: StatDelta) -> str:
    parts = [f"+{value} {label}" for label, get in _MESSAGE_ORDER if (value := get(delta))]
    if not parts:
        return f"{hero.name} tries to mode up but nothing happens..."
    return f"{hero.name} empowers the party with {', '.join(parts)}!"


def mode_up(hero: Unit, level: int, party: Sequence[Unit], log: LogSink) -> StatDelta:
    """
    Compute, apply and announce the mode-up of `hero`.

    Args:
        hero (Unit):
            The hero chosen by the player.
        level (int):
            The level just completed, used as the buff multiplier.
        party (Sequence[Unit]):
            The party receiving the buff.
        log (LogSink):
            Sink for the announcement.

    Returns:
        StatDelta:
            The applied delta.

    """
    delta = compute_buff(hero, level)
    apply_buff(delta, party)
    log(describe_buff(hero, delta))
    return delta
