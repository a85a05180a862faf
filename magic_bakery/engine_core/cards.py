"""
Cards - The ingredient/layer catalog value types.

A card is an immutable value identified by (kind, name):
- BASE cards are plain ingredients (Flour, Sugar, ...)
- LAYER cards carry a non-empty sub-recipe of base ingredients
- the single WILDCARD card (the helpful duck) substitutes for
  any one missing requirement item during matching

Cards are values, not instances: two Flour cards are equal and
interchangeable. Ordering is by name so reports sort alphabetically.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from .errors import WrongIngredientsError


class CardKind(Enum):
    """Variants of the Card sum type."""
    BASE = "base"
    LAYER = "layer"
    WILDCARD = "wildcard"


@dataclass(frozen=True)
class Card:
    """
    A card in the game.

    Equality and hashing use (kind, name); the recipe is carried
    along but never compared. Use Card.ingredient() and Card.layer()
    rather than the constructor.
    """
    kind: CardKind
    name: str
    recipe: tuple[Card, ...] = field(default=(), compare=False, repr=False)

    def __lt__(self, other: Card) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.name < other.name

    def __str__(self) -> str:
        return self.name

    @classmethod
    def ingredient(cls, name: str) -> Card:
        """Factory for a base ingredient."""
        return cls(kind=CardKind.BASE, name=name)

    @classmethod
    def layer(cls, name: str, recipe: Iterable[Card]) -> Card:
        """Factory for a layer. The recipe must not be empty."""
        items = tuple(recipe)
        if not items:
            raise WrongIngredientsError(f"Layer {name} needs a non-empty recipe")
        return cls(kind=CardKind.LAYER, name=name, recipe=items)

    @property
    def is_layer(self) -> bool:
        return self.kind == CardKind.LAYER

    @property
    def is_wildcard(self) -> bool:
        return self.kind == CardKind.WILDCARD

    @property
    def recipe_description(self) -> str:
        """Comma-separated names of the sub-recipe ('' for non-layers)."""
        return describe(self.recipe)


HELPFUL_DUCK = Card(kind=CardKind.WILDCARD, name="Helpful duck")

# Names under which deck files may spell the wildcard
WILDCARD_NAMES = {"helpful duck", "helpful duck 𓅭"}


def is_wildcard_name(name: str) -> bool:
    return name.strip().lower() in WILDCARD_NAMES


def describe(cards: Iterable[Card]) -> str:
    return ", ".join(card.name for card in cards)
