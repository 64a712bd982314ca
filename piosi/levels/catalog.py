"""
Level catalog for the PIOSI campaign.

Hand-authored levels are LevelConfig records. Enemies are either listed as
EnemySpec entries or produced by a generator of (rows, cols, turns_taken);
endless levels also carry a respawn hook run every time their wall falls.
"""

import random
from collections.abc import Callable
from typing import Any

from catchery import log_warning
from pydantic import BaseModel, Field

from piosi.core.constants import PickupKind, UnitKind
from piosi.generation.seed_generator import GeneratedLevel
from piosi.units.pickup import Pickup
from piosi.units.unit import Unit

EnemyGenerator = Callable[[int, int, int], list[Unit]]
WallCollapseHook = Callable[[int], tuple[list[Unit], int]]


class EnemySpec(BaseModel):
    """Static description of an enemy in a level file."""

    name: str
    symbol: str
    kind: UnitKind = UnitKind.ENEMY
    attack: int = Field(0, ge=0)
    range: int = Field(0, ge=0)
    hp: int = Field(gt=0)
    agility: int = Field(0, ge=0)
    x: int | None = Field(None, description="Column, unless x_offset is given.")
    y: int | None = Field(None, description="Row, unless x_offset is given.")
    x_offset: int | None = Field(
        None,
        description="Place the enemy at column cols - x_offset on the middle row.",
    )

    def to_unit(self, rows: int, cols: int) -> Unit:
        if self.x_offset is not None:
            x, y = cols - self.x_offset, rows // 2
        else:
            x, y = self.x or 0, self.y or 0
        return Unit(
            name=self.name,
            symbol=self.symbol,
            kind=self.kind,
            attack=self.attack,
            range=self.range,
            hp=self.hp,
            agility=self.agility,
            x=x,
            y=y,
        )

    @classmethod
    def from_unit(cls, unit: Unit) -> "EnemySpec":
        return cls(
            name=unit.name,
            symbol=unit.symbol,
            kind=unit.kind,
            attack=unit.attack,
            range=unit.range,
            hp=unit.hp,
            agility=unit.agility,
            x=unit.x,
            y=unit.y,
        )


class LevelConfig(BaseModel):
    """A playable level."""

    level: int
    title: str
    rows: int = Field(ge=1)
    cols: int = Field(ge=1)
    wall_hp: int = Field(ge=0)
    enemies: list[EnemySpec] = Field(default_factory=list)
    generate_enemies: bool = Field(
        False,
        description="Build the enemies with enemy_generator instead of the static list.",
    )
    enemy_generator: EnemyGenerator | None = None
    pickups: list[Pickup] = Field(default_factory=list)
    on_wall_collapse: WallCollapseHook | None = Field(
        None,
        description="Respawn hook of endless levels: turns_taken -> (enemies, wall_hp).",
    )

    @property
    def endless(self) -> bool:
        return self.on_wall_collapse is not None

    @classmethod
    def from_generated(cls, generated: GeneratedLevel) -> "LevelConfig":
        return cls(
            level=generated.level,
            title=generated.title,
            rows=generated.rows,
            cols=generated.cols,
            wall_hp=generated.wall_hp,
            enemies=[EnemySpec.from_unit(enemy) for enemy in generated.enemies],
        )


def resolve_enemies(config: LevelConfig, turns_taken: int = 0) -> list[Unit]:
    """
    Fresh enemy units for a level.

    Args:
        config (LevelConfig):
            The level.
        turns_taken (int):
            Rounds played so far, fed to escalating generators.

    Returns:
        list[Unit]:
            The enemies; empty when the level asks for a generator it does
            not have.

    """
    if config.generate_enemies:
        if config.enemy_generator is None:
            log_warning(
                f"Level {config.level} generates its enemies but has no generator",
                {"level": config.level, "title": config.title},
            )
            return []
        return config.enemy_generator(config.rows, config.cols, turns_taken)
    return [entry.to_unit(config.rows, config.cols) for entry in config.enemies]


# ============================================================================
# ENEMY TEMPLATES
# ============================================================================


def _brigand(**position: Any) -> EnemySpec:
    return EnemySpec(name="Brigand", symbol="Җ", attack=3, range=1, hp=12, agility=2, **position)


def _buckleman(**position: Any) -> EnemySpec:
    return EnemySpec(name="Buckleman", symbol="⛨", attack=1, range=1, hp=20, agility=1, **position)


def _static_wall(x: int, y: int) -> EnemySpec:
    return EnemySpec(
        name="Static Wall",
        symbol="█",
        kind=UnitKind.WALL,
        attack=0,
        range=0,
        hp=50,
        agility=0,
        x=x,
        y=y,
    )


def _corridor_guards(rows: int, cols: int, turns_taken: int) -> list[Unit]:
    """One Buckleman per column across the middle row."""
    return [_buckleman(x=col, y=rows // 2).to_unit(rows, cols) for col in range(cols)]


# ============================================================================
# ENDLESS MODE
# ============================================================================

ENDLESS_WAVE_SIZE = 5


def endless_wave(turns_taken: int, rng: random.Random | None = None) -> list[Unit]:
    """Five enemies whose attack, hp and agility grow every ten rounds."""
    rng = rng if rng is not None else random.Random()
    multiplier = 1 + turns_taken // 10
    return [
        Unit(
            name=f"Enemy {i + 1}",
            symbol="⚔",
            kind=UnitKind.ENEMY,
            attack=5 * multiplier,
            range=1,
            hp=20 * multiplier,
            agility=2 * multiplier,
            x=rng.randint(0, 9),
            y=rng.randint(0, 9),
        )
        for i in range(ENDLESS_WAVE_SIZE)
    ]


def endless_respawn(turns_taken: int) -> tuple[list[Unit], int]:
    """A new wave and the raised wall HP after the wall of an endless level falls."""
    return endless_wave(turns_taken), 100 + turns_taken * 10


# ============================================================================
# CHESSBOARD
# ============================================================================

CHESS_PIECES: tuple[EnemySpec, ...] = (
    EnemySpec(name="Chess Pawn", symbol="♙", attack=2, range=1, hp=10, agility=2),
    EnemySpec(name="Chess Knight", symbol="♘", attack=4, range=2, hp=15, agility=3),
    EnemySpec(name="Chess Bishop", symbol="♗", attack=3, range=3, hp=12, agility=2),
)

CHESS_FORMATION_ROWS = 3


def chess_formation(rows: int, cols: int, turns_taken: int) -> list[Unit]:
    """Fill the rows right above the wall with cycling chess pieces."""
    enemies: list[Unit] = []
    for r in range(max(rows - CHESS_FORMATION_ROWS - 1, 0), rows - 1):
        for c in range(cols):
            piece = CHESS_PIECES[(r + c) % len(CHESS_PIECES)]
            enemies.append(piece.model_copy(update={"x": c, "y": r}).to_unit(rows, cols))
    return enemies


# ============================================================================
# CATALOG
# ============================================================================

LEVELS: tuple[LevelConfig, ...] = (
    LevelConfig(
        level=1,
        title="Level 1: The Breaking Wall",
        rows=5,
        cols=10,
        wall_hp=20,
        pickups=[Pickup(kind=PickupKind.VITTLE, x=5, y=2, amount=5)],
    ),
    LevelConfig(
        level=2,
        title="Level 2: The Reinforced Barricade",
        rows=7,
        cols=12,
        wall_hp=40,
        enemies=[_brigand(x_offset=3), _brigand(x_offset=5)],
    ),
    LevelConfig(
        level=3,
        title="Level 3: The Vertical Corridor",
        rows=14,
        cols=3,
        wall_hp=60,
        generate_enemies=True,
        enemy_generator=_corridor_guards,
    ),
    LevelConfig(
        level=4,
        title="Level 4: Outside the Gratt",
        rows=3,
        cols=15,
        wall_hp=70,
        enemies=[
            _brigand(x=12, y=0),
            _brigand(x=11, y=1),
            _buckleman(x=8, y=2),
            _brigand(x=12, y=2),
        ],
    ),
    LevelConfig(
        level=5,
        title="Level 5: Gratt ߁",
        rows=10,
        cols=8,
        wall_hp=50,
        enemies=[
            *(_static_wall(x, 5) for x in range(1, 7)),
            _brigand(x=1, y=4),
            _brigand(x=2, y=4),
            _buckleman(x=3, y=4),
            EnemySpec(name="Getter", symbol="∴", attack=5, range=1, hp=50, agility=5, x=4, y=6),
            EnemySpec(name="Stonch Hogan", symbol="酉", attack=7, range=1, hp=100, agility=3, x=5, y=6),
            EnemySpec(name="Taker", symbol="∵", attack=1, range=5, hp=50, agility=5, x=6, y=6),
        ],
    ),
    LevelConfig(
        level=21,
        title="Level 21: Pseudo Endless Mode",
        rows=10,
        cols=10,
        wall_hp=100,
        generate_enemies=True,
        enemy_generator=lambda rows, cols, turns_taken: endless_wave(turns_taken),
        on_wall_collapse=endless_respawn,
    ),
    LevelConfig(
        level=99,
        title="Level ௧: Further Introspection",
        rows=15,
        cols=15,
        wall_hp=100,
        generate_enemies=True,
        enemy_generator=chess_formation,
    ),
)


def get_level(number: int) -> LevelConfig | None:
    """The catalog level with the given number, or None."""
    for config in LEVELS:
        if config.level == number:
            return config
    return None


def levels_from(number: int) -> list[LevelConfig]:
    """The catalog levels starting at `number`, in catalog order."""
    for index, config in enumerate(LEVELS):
        if config.level == number:
            return list(LEVELS[index:])
    return []
