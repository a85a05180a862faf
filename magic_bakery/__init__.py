"""
Magic Bakery - A cooperative card game of baking for impatient customers.

Players draw ingredients from a shared pantry, bake them into layers and
serve customers before they give up waiting.
"""

__version__ = "0.1.0"

from .bakery import MagicBakery, load_state, save_state
from .engine_core import Card, CustomerOrder, HELPFUL_DUCK

__all__ = [
    "MagicBakery",
    "load_state",
    "save_state",
    "Card",
    "CustomerOrder",
    "HELPFUL_DUCK",
]
