"""
Seeded level generator.

Turns an integer seed into a full level layout. Every value comes from a
Mulberry32 stream seeded with the level seed, drawn in a fixed order, so a
seed reproduces the same level on every run and platform.
"""

from pydantic import BaseModel, Field

from piosi.core.constants import UnitKind
from piosi.core.rng import Mulberry32
from piosi.units.unit import Unit

ENEMY_SYMBOLS: tuple[str, ...] = ("*", "!", "X", "O")

SUITE_SIZE = 25


class GeneratedLevel(BaseModel):
    """A level produced from a seed."""

    level: int = Field(description="The seed the level was generated from.")
    title: str
    rows: int = Field(ge=1)
    cols: int = Field(ge=1)
    wall_hp: int = Field(ge=0)
    enemies: list[Unit] = Field(default_factory=list)

    @property
    def seed(self) -> int:
        return self.level


def _generate_enemy(rng: Mulberry32, index: int, rows: int, cols: int) -> Unit:
    # Keyword order below is the draw order.
    symbol = rng.choice(ENEMY_SYMBOLS)
    attack = rng.randrange(1, 10)
    attack_range = rng.randrange(1, 2)
    hp = rng.randrange(10, 50)
    agility = rng.randrange(1, 3)
    x = rng.randrange(0, cols)
    y = rng.randrange(0, rows)
    return Unit(
        name=f"Enemy #{index + 1}",
        symbol=symbol,
        kind=UnitKind.ENEMY,
        attack=attack,
        range=attack_range,
        hp=hp,
        agility=agility,
        x=x,
        y=y,
    )


def generate_level(seed: int) -> GeneratedLevel:
    """
    Generate the level identified by `seed`.

    Args:
        seed (int):
            The level seed.

    Returns:
        GeneratedLevel:
            Grid size between 5 and 15, wall HP between 20 and 219, and one
            to five enemies placed inside the grid.

    """
    rng = Mulberry32(seed)
    rows = rng.randrange(5, 11)
    cols = rng.randrange(5, 11)
    wall_hp = rng.randrange(20, 200)
    count = rng.randrange(1, 5)
    enemies = [_generate_enemy(rng, i, rows, cols) for i in range(count)]
    return GeneratedLevel(
        level=seed,
        title=f"Level Generated from Seed: {seed}",
        rows=rows,
        cols=cols,
        wall_hp=wall_hp,
        enemies=enemies,
    )


def generate_suite(base_seed: int, count: int = SUITE_SIZE) -> list[GeneratedLevel]:
    """Levels for the consecutive seeds base_seed .. base_seed + count - 1."""
    return [generate_level(base_seed + i) for i in range(count)]
