"""
User interface module for PIOSI.

Provides the rich renderers and the prompt_toolkit driver of the terminal
game.
"""
