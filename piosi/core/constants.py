"""
Constants and enumerations for the combat core.

Defines the cell markers of the battlefield grid, the unit and pickup kinds,
the closed set of special hero stats, status effect kinds, turn phases and
the timing defaults used by the battle engine and Summit Mode.
"""

from enum import Enum

# Battlefield cell markers.
EMPTY_CELL = "."
WALL_CELL = "ᚙ"
SOLID_CELL = "█"

# Markers that stop movement and knockback.
BLOCKING_CELLS = frozenset({WALL_CELL, SOLID_CELL})

# Timing defaults, in seconds.
PACING_DELAY = 0.3
COLLAPSE_DELAY = 1.5

# Summit Mode defaults.
SUMMIT_MAP_SIZE = 50
SUMMIT_ROUND_INTERVAL = 0.5
SUMMIT_DEFAULT_HP = 100

# Orthogonal neighbours, in the order enemies check them: up, down, left, right.
ORTHOGONAL_DIRECTIONS: tuple[tuple[int, int], ...] = (
    (0, -1),
    (0, 1),
    (-1, 0),
    (1, 0),
)


class NiceEnum(Enum):
    """An enumeration that provides a nicer string representation."""

    def __str__(self) -> str:
        return self.name

    @property
    def display_name(self) -> str:
        return self.name.lower().capitalize()


class UnitKind(NiceEnum):
    """Defines the kind of a unit on the battlefield."""

    HERO = "HERO"
    ENEMY = "ENEMY"
    WALL = "WALL"

    @property
    def color(self) -> str:
        """Returns the color string associated with this unit kind."""
        return {
            UnitKind.HERO: "bold blue",
            UnitKind.ENEMY: "bold red",
            UnitKind.WALL: "bold white",
        }.get(self, "dim white")

    def colorize(self, message: str) -> str:
        """Applies unit kind color formatting to a message."""
        return f"[{self.color}]{message}[/]"


class PickupKind(NiceEnum):
    """Defines the kind of collectible placed on the battlefield."""

    VITTLE = "VITTLE"
    MUSHROOM = "MUSHROOM"

    @property
    def symbol(self) -> str:
        """Returns the default board symbol of the pickup."""
        return {
            PickupKind.VITTLE: "ౚ",
            PickupKind.MUSHROOM: "ඉ",
        }[self]


class StatKind(NiceEnum):
    """Closed set of sparse special stats a hero may carry."""

    BURN = "burn"
    SLUJ = "sluj"
    HEAL = "heal"
    YEET = "yeet"
    SWARM = "swarm"
    GHIS = "ghis"
    ARMOR = "armor"
    SPORE = "spore"
    CHAIN = "chain"
    RAGE = "rage"

    @property
    def label(self) -> str:
        """Returns the label used in mode-up messages."""
        return {
            StatKind.SLUJ: "Slüj",
            StatKind.GHIS: "Ghïs",
        }.get(self, self.display_name)


class EffectKind(NiceEnum):
    """Defines the recurring damage effects that can tick on a unit."""

    BURN = "burn"
    SLUJ = "sluj"

    @property
    def color(self) -> str:
        """Returns the color string associated with this effect kind."""
        return {
            EffectKind.BURN: "bold red",
            EffectKind.SLUJ: "bold magenta",
        }.get(self, "dim white")

    @property
    def emoji(self) -> str:
        """Returns the emoji associated with this effect kind."""
        return {
            EffectKind.BURN: "🔥",
            EffectKind.SLUJ: "🜜",
        }.get(self, "❔")


class TurnPhase(NiceEnum):
    """States of the battle engine turn machine."""

    PARTY_TURN = "PARTY_TURN"
    AWAITING_ATTACK_DIRECTION = "AWAITING_ATTACK_DIRECTION"
    ENEMY_TURN = "ENEMY_TURN"
    TRANSITIONING = "TRANSITIONING"
    GAME_OVER = "GAME_OVER"


class AttackOutcomeKind(NiceEnum):
    """Result categories of a line-of-fire attack."""

    HIT_ENEMY = "HIT_ENEMY"
    HIT_WALL = "HIT_WALL"
    MISS = "MISS"
