"""
Core system module for the PIOSI combat core.

This module contains the fundamental components shared by every other part
of the package: game constants, logging, console helpers, the deterministic
PRNG and the scheduler abstraction used for timed behavior.
"""

from .constants import (
    BLOCKING_CELLS,
    COLLAPSE_DELAY,
    EMPTY_CELL,
    ORTHOGONAL_DIRECTIONS,
    PACING_DELAY,
    SOLID_CELL,
    SUMMIT_DEFAULT_HP,
    SUMMIT_MAP_SIZE,
    SUMMIT_ROUND_INTERVAL,
    WALL_CELL,
    AttackOutcomeKind,
    EffectKind,
    PickupKind,
    StatKind,
    TurnPhase,
    UnitKind,
)
from .rng import Mulberry32
from .scheduler import AsyncioScheduler, ManualScheduler, Scheduler, TaskHandle
from .utils import ccapture, cprint, crule, make_bar, manhattan, sign

__all__ = [
    # Import from constants.py
    "BLOCKING_CELLS",
    "COLLAPSE_DELAY",
    "EMPTY_CELL",
    "ORTHOGONAL_DIRECTIONS",
    "PACING_DELAY",
    "SOLID_CELL",
    "SUMMIT_DEFAULT_HP",
    "SUMMIT_MAP_SIZE",
    "SUMMIT_ROUND_INTERVAL",
    "WALL_CELL",
    "AttackOutcomeKind",
    "EffectKind",
    "PickupKind",
    "StatKind",
    "TurnPhase",
    "UnitKind",
    # Import from rng.py
    "Mulberry32",
    # Import from scheduler.py
    "AsyncioScheduler",
    "ManualScheduler",
    "Scheduler",
    "TaskHandle",
    # Import from utils.py
    "ccapture",
    "cprint",
    "crule",
    "make_bar",
    "manhattan",
    "sign",
]
