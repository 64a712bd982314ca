"""
Levels module for the PIOSI combat core.

This module contains the hand-authored level catalog and the game session
that plays levels one after the other.
"""

from .catalog import (
    LEVELS,
    EnemySpec,
    LevelConfig,
    chess_formation,
    endless_respawn,
    endless_wave,
    get_level,
    levels_from,
    resolve_enemies,
)
from .session import GameSession

__all__ = [
    "LEVELS",
    "EnemySpec",
    "LevelConfig",
    "chess_formation",
    "endless_respawn",
    "endless_wave",
    "get_level",
    "levels_from",
    "resolve_enemies",
    "GameSession",
]
