"""
Pantry - The face-up ingredient display and the supply behind it.

Three pools, each owned here:
- display: the face-up cards players draw from (unordered, usually 5)
- deck: the draw pile; the top is the end of the list
- discard: spent cards, shuffled back into the deck when it runs out

The game's seeded Random is shared with the rest of the engine so a
reshuffle consumes randomness in a reproducible order.
"""

from __future__ import annotations
import logging
import random
from typing import Iterable

from .cards import Card
from .errors import EmptyPantryError, WrongIngredientsError

logger = logging.getLogger(__name__)

DISPLAY_SIZE = 5


class Pantry:
    """Face-up display, draw deck and discard pile."""

    def __init__(
        self,
        rng: random.Random,
        deck: Iterable[Card] = (),
        display: Iterable[Card] = (),
        discard: Iterable[Card] = (),
    ):
        self.random = rng
        self._deck: list[Card] = list(deck)
        self._display: list[Card] = list(display)
        self._discard: list[Card] = list(discard)

    @property
    def display(self) -> tuple[Card, ...]:
        return tuple(self._display)

    @property
    def deck(self) -> tuple[Card, ...]:
        """Draw deck, bottom to top."""
        return tuple(self._deck)

    @property
    def discard_pile(self) -> tuple[Card, ...]:
        return tuple(self._discard)

    @property
    def supply_size(self) -> int:
        """Cards that a draw could still reach (deck + discard)."""
        return len(self._deck) + len(self._discard)

    def can_draw(self, count: int = 1) -> bool:
        return self.supply_size >= count

    def find_in_display(self, name: str) -> Card | None:
        """Case-insensitive lookup of a face-up card by name."""
        wanted = name.strip().lower()
        for card in self._display:
            if card.name.lower() == wanted:
                return card
        return None

    # =========================================================================
    # Deck operations
    # =========================================================================

    def draw_from_deck(self) -> Card:
        """
        Draw the top card of the deck.

        An empty deck is rebuilt from the shuffled discard pile first.
        Raises EmptyPantryError when both are empty.
        """
        if not self._deck:
            if not self._discard:
                raise EmptyPantryError()
            self._reshuffle()
        return self._deck.pop()

    def deal_from_bottom(self) -> Card:
        """Take the bottom card of the deck (used for the opening deal)."""
        if not self._deck:
            raise EmptyPantryError()
        return self._deck.pop(0)

    def _reshuffle(self) -> None:
        logger.info("Pantry deck exhausted, reshuffling %d discarded cards", len(self._discard))
        self._deck.extend(self._discard)
        self._discard.clear()
        self.random.shuffle(self._deck)

    def discard(self, cards: Card | Iterable[Card]) -> None:
        if isinstance(cards, Card):
            self._discard.append(cards)
        else:
            self._discard.extend(cards)

    # =========================================================================
    # Display operations
    # =========================================================================

    def add_to_display(self, card: Card) -> None:
        self._display.append(card)

    def take_from_display(self, card: Card) -> Card:
        """Remove one face-up copy of card. Raises WrongIngredientsError if absent."""
        if card not in self._display:
            raise WrongIngredientsError(f"{card} is not in the pantry")
        self._display.remove(card)
        return card

    def replenish(self) -> Card:
        """Draw one card from the deck onto the display."""
        card = self.draw_from_deck()
        self._display.append(card)
        return card

    def refresh(self) -> list[Card]:
        """
        Discard the whole display and deal DISPLAY_SIZE fresh cards.

        Raises EmptyPantryError, leaving everything untouched, if fewer than
        DISPLAY_SIZE cards exist across display, deck and discard.
        """
        if self.supply_size + len(self._display) < DISPLAY_SIZE:
            raise EmptyPantryError(
                f"Only {self.supply_size + len(self._display)} cards left to refresh the pantry"
            )
        self._discard.extend(self._display)
        self._display.clear()
        for _ in range(DISPLAY_SIZE):
            self.replenish()
        return list(self._display)
