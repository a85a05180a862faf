"""
Game State - Players and the game phase.

Design principles:
- Each card pool has exactly one owner; a Player owns its hand
- Hand order is insertion order (kept for deterministic display)
- All mutation goes through the owner's methods
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from .cards import Card
from .errors import WrongIngredientsError


class GamePhase(Enum):
    """High-level game phases."""
    SETUP = "setup"
    PLAYING = "playing"
    GAME_OVER = "game_over"


@dataclass
class Player:
    """A seated player and the cards in their hand."""
    name: str
    hand: list[Card] = field(default_factory=list)

    def __str__(self) -> str:
        return self.name

    def add_to_hand(self, cards: Card | Iterable[Card]) -> None:
        """Add one card or several cards to the hand."""
        if isinstance(cards, Card):
            self.hand.append(cards)
        else:
            self.hand.extend(cards)

    def has_ingredient(self, card: Card) -> bool:
        return card in self.hand

    def remove_from_hand(self, card: Card) -> None:
        """Remove one copy of card. Raises WrongIngredientsError if absent."""
        if card not in self.hand:
            raise WrongIngredientsError(f"{self.name} does not hold {card}")
        self.hand.remove(card)

    def hand_description(self) -> str:
        """
        Hand as 'Butter, Eggs (x2), Flour'.

        Names are title-cased on the first letter, sorted, and repeated
        cards are collapsed with a multiplicity.
        """
        names = sorted(card.name[:1].upper() + card.name[1:] for card in self.hand)
        counts = Counter(names)
        parts = []
        for name in dict.fromkeys(names):
            count = counts[name]
            parts.append(name if count == 1 else f"{name} (x{count})")
        return ", ".join(parts)
