"""
PIOSI combat core.

Grid-based tactics: a party of heroes fights its way to a destructible wall
across hand-authored or seed-generated levels, plus the Summit Mode battle
royale.
"""
