"""
Unit model for the combat core.

A single record type represents heroes, enemies and static wall units. The
behavior differences between them come from their kind tag and their stats,
never from subclassing.
"""

from typing import Any

from pydantic import BaseModel, Field

from piosi.core.constants import EffectKind, StatKind, UnitKind
from piosi.core.utils import manhattan
from piosi.effects import AnyStatusEffect


class Unit(BaseModel):
    """
    In-memory representation of a hero, an enemy or a static wall unit.

    Units are mutable and compared by identity by the engines: two units
    with identical stats are still two different units.
    """

    name: str = Field(
        description="The name of the unit.",
    )
    symbol: str = Field(
        description="The marker written on the battlefield grid.",
    )
    kind: UnitKind = Field(
        UnitKind.HERO,
        description="Hero, enemy or static wall.",
    )
    x: int = Field(0, description="Column of the unit.")
    y: int = Field(0, description="Row of the unit.")
    attack: int = Field(
        0,
        ge=0,
        description="Damage dealt by each attack.",
    )
    range: int = Field(
        0,
        ge=0,
        description="How many cells an attack can travel.",
    )
    agility: int = Field(
        0,
        ge=0,
        description="Move points per turn.",
    )
    hp: int = Field(
        description="Current hit points. May dip below 0 until the unit is removed.",
    )
    max_hp: int | None = Field(
        None,
        description="Maximum hit points, defaults to the starting hp.",
    )
    status_effects: dict[EffectKind, AnyStatusEffect] = Field(
        default_factory=dict,
        description="Recurring effects carried by the unit, keyed by kind.",
    )
    stats: dict[StatKind, int] = Field(
        default_factory=dict,
        description="Sparse special stats (burn, heal, yeet, swarm, ...).",
    )
    team: int | None = Field(
        None,
        description="Team index, only used by Summit Mode.",
    )
    defeated_by: str | None = Field(
        None,
        description="Name of the last unit that defeated this one in Summit Mode.",
    )

    def model_post_init(self, _: Any) -> None:
        if self.max_hp is None:
            self.max_hp = self.hp
            # Derived from hp, so it does not count as explicitly set.
            self.model_fields_set.discard("max_hp")

    # === Derived properties ===

    @property
    def colored_name(self) -> str:
        return self.kind.colorize(self.name)

    @property
    def position(self) -> tuple[int, int]:
        return self.x, self.y

    @property
    def is_hero(self) -> bool:
        return self.kind == UnitKind.HERO

    # === Health ===

    def is_alive(self) -> bool:
        return self.hp > 0

    def is_dead(self) -> bool:
        return self.hp <= 0

    def take_damage(self, amount: int) -> int:
        """Subtract damage from hp and return the hp left."""
        self.hp -= amount
        return self.hp

    def restore(self) -> None:
        """Return to full health."""
        self.hp = self.max_hp or self.hp

    # === Special stats ===

    def stat(self, kind: StatKind) -> int:
        """Value of a special stat, 0 when the unit does not carry it."""
        return self.stats.get(kind, 0)

    def has_stat(self, kind: StatKind) -> bool:
        """True if the unit carries the stat at all, even at 0."""
        return kind in self.stats

    def add_stat(self, kind: StatKind, amount: int) -> None:
        self.stats[kind] = self.stats.get(kind, 0) + amount

    # === Geometry ===

    def distance_to(self, other: "Unit") -> int:
        """Manhattan distance to another unit."""
        return manhattan(self.x, self.y, other.x, other.y)

    def __str__(self) -> str:
        return f"{self.name} ({self.symbol}) at ({self.x}, {self.y}) HP {self.hp}/{self.max_hp}"
