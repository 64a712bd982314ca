"""
Summit module for the PIOSI combat core.

This module contains the battle royale simulator.
"""

from .summit_mode import SummitMode

__all__ = [
    "SummitMode",
]
