"""
Unit module for the PIOSI combat core.

This module contains the Unit record shared by heroes, enemies and walls,
the battlefield pickups, and the hero roster loader.
"""

from .pickup import Pickup, collect
from .roster import HeroRecord, hero_from_dict, load_roster, select_heroes
from .unit import Unit

__all__ = [
    "Unit",
    "Pickup",
    "collect",
    "HeroRecord",
    "hero_from_dict",
    "load_roster",
    "select_heroes",
]
