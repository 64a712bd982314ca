"""
Progression module for the PIOSI combat core.

This module contains the mode-up rules applied to the party between levels.
"""

from .modeup import HERO_BUFFS, StatDelta, apply_buff, compute_buff, describe_buff, mode_up

__all__ = [
    "HERO_BUFFS",
    "StatDelta",
    "apply_buff",
    "compute_buff",
    "describe_buff",
    "mode_up",
]
