"""
Generation module for the PIOSI combat core.

This module contains the deterministic, seed-driven level generator.
"""

from .seed_generator import ENEMY_SYMBOLS, GeneratedLevel, generate_level, generate_suite

__all__ = [
    "ENEMY_SYMBOLS",
    "GeneratedLevel",
    "generate_level",
    "generate_suite",
]
