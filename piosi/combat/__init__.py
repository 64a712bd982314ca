"""
Combat system module for the PIOSI combat core.

This module handles the battlefield grid, line-of-fire attack resolution,
knockback, the enemy AI and the turn-based battle engine.
"""
