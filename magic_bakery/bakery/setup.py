"""
Bakery Game Setup - Customer deck composition and the opening deal.

This module handles:
- Stratifying the customer deck by level for the player count
- Shuffling with the game's seeded Random for determinism
- Filling the pantry display
- Dealing the opening hands

The composition follows the tabletop rules for 2-5 players.
"""

from __future__ import annotations
import random
from typing import Iterable

from ..engine_core.customers import CustomerOrder
from ..engine_core.errors import (
    DeckCompositionError,
    EmptyPantryError,
    InvalidPlayerCountError,
)
from ..engine_core.pantry import DISPLAY_SIZE, Pantry
from ..engine_core.state import Player

# Orders of level (1, 2, 3) drawn into the customer deck, by player count
CUSTOMER_LEVEL_COUNTS: dict[int, tuple[int, int, int]] = {
    2: (4, 2, 1),
    3: (1, 2, 4),
    4: (1, 2, 4),
    5: (0, 1, 6),
}

OPENING_HAND_SIZE = 3


def check_customer_levels(
    orders: list[CustomerOrder], num_players: int
) -> tuple[int, int, int]:
    """Return the level counts for num_players, or raise if orders fall short."""
    counts = CUSTOMER_LEVEL_COUNTS.get(num_players)
    if counts is None:
        raise InvalidPlayerCountError(f"No customer deck layout for {num_players} players")

    for level, count in zip((1, 2, 3), counts):
        available = sum(1 for order in orders if order.level == level)
        if available < count:
            raise DeckCompositionError(
                f"Need {count} level {level} orders for {num_players} players, "
                f"deck has {available}"
            )
    return counts


def check_opening_supply(num_cards: int, num_players: int) -> None:
    """The opening display and hands must fit in the ingredient deck."""
    needed = DISPLAY_SIZE + OPENING_HAND_SIZE * num_players
    if num_cards < needed:
        raise EmptyPantryError(
            f"Need {needed} ingredient cards for {num_players} players, deck has {num_cards}"
        )


def compose_customer_deck(
    orders: Iterable[CustomerOrder],
    rng: random.Random,
    num_players: int,
) -> list[CustomerOrder]:
    """
    Build the customer draw pile.

    Shuffle all orders, take the first N of each level (N from
    CUSTOMER_LEVEL_COUNTS), then shuffle the result again. The level
    counts are checked before rng is used.
    """
    shuffled = list(orders)
    counts = check_customer_levels(shuffled, num_players)
    rng.shuffle(shuffled)

    by_level: dict[int, list[CustomerOrder]] = {1: [], 2: [], 3: []}
    for order in shuffled:
        if order.level in by_level:
            by_level[order.level].append(order)

    deck: list[CustomerOrder] = []
    for level, count in zip((1, 2, 3), counts):
        deck.extend(by_level[level][:count])

    rng.shuffle(deck)
    return deck


def opening_customer_count(num_players: int) -> int:
    """Customers admitted before the first turn."""
    return 2 if num_players in (3, 5) else 1


def seed_display(pantry: Pantry) -> None:
    """Lay out the face-up pantry from the bottom of the deck."""
    for _ in range(DISPLAY_SIZE):
        pantry.add_to_display(pantry.deal_from_bottom())


def deal_opening_hands(pantry: Pantry, players: list[Player]) -> None:
    """Deal OPENING_HAND_SIZE cards to each player in turn order."""
    for player in players:
        for _ in range(OPENING_HAND_SIZE):
            player.add_to_hand(pantry.deal_from_bottom())
