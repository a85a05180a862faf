"""
Magic Bakery game module.

Contains the game facade and its collaborators:
- game: the MagicBakery facade
- setup: customer deck composition and the opening deal
- decks: CSV deck loading
- persistence: JSON save/load
"""

from .game import MagicBakery
from .decks import read_customer_file, read_ingredient_file, read_layer_file
from .persistence import GameSnapshot, load_state, save_state

__all__ = [
    "MagicBakery",
    "read_customer_file",
    "read_ingredient_file",
    "read_layer_file",
    "GameSnapshot",
    "load_state",
    "save_state",
]
