"""
Order Matcher - Decides whether a pool of cards satisfies a requirement.

Two distinct rules live here and must stay distinct:

1. Greedy consumption (can_satisfy / consume): walk the requirement in
   its declared order and remove one matching card per item, falling
   back to one helpful duck per missing item. A layer item is taken as
   a baked card when the pool holds one, otherwise its sub-recipe is
   matched in its place. This is first-fit, not a search: reordering a
   requirement can change the answer when ducks are scarce.

2. Numeric bake check (can_bake): count the recipe items absent from
   the pool and compare with the number of ducks held. No positional
   consumption happens, so it can accept pools the greedy rule rejects.

All functions are pure: the caller's pool is never mutated.
"""

from __future__ import annotations
from typing import Iterable, Protocol, Sequence

from .cards import Card, HELPFUL_DUCK
from .errors import WrongIngredientsError


class Orderable(Protocol):
    recipe: Sequence[Card]
    garnish: Sequence[Card]


def _take(pool: list[Card], card: Card) -> bool:
    """Remove one copy of card from pool; report whether it was there."""
    try:
        pool.remove(card)
    except ValueError:
        return False
    return True


def _match(requirement: Iterable[Card], pool: list[Card], used: list[Card]) -> bool:
    """
    Greedily consume requirement from pool (mutated in place).

    Appends every card taken to used. Returns False on the first item
    that neither the pool nor a duck can cover.
    """
    for item in requirement:
        if item.is_layer:
            if _take(pool, item):
                used.append(item)
                continue
            needed_items = item.recipe
        else:
            needed_items = (item,)

        for needed in needed_items:
            if _take(pool, needed):
                used.append(needed)
            elif _take(pool, HELPFUL_DUCK):
                used.append(HELPFUL_DUCK)
            else:
                return False
    return True


def can_satisfy(requirement: Iterable[Card], pool: Iterable[Card]) -> bool:
    """True iff consume(requirement, pool) would succeed."""
    return _match(requirement, list(pool), [])


def consume(
    requirement: Iterable[Card], pool: Iterable[Card]
) -> tuple[list[Card], list[Card]]:
    """
    Consume requirement from pool.

    Returns (used cards sorted by name, remaining pool in original order).
    Raises WrongIngredientsError if the pool cannot satisfy it.
    """
    remaining = list(pool)
    used: list[Card] = []
    if not _match(requirement, remaining, used):
        raise WrongIngredientsError("Required ingredients are not available")
    return sorted(used), remaining


def can_fulfil(order: Orderable, pool: Iterable[Card]) -> bool:
    """Can the order's recipe (without garnish) be made from pool?"""
    return can_satisfy(order.recipe, pool)


def can_garnish(order: Orderable, pool: Iterable[Card]) -> bool:
    """Can the recipe and then the garnish be made from pool?"""
    if not order.garnish:
        return False
    remaining = list(pool)
    if not _match(order.recipe, remaining, []):
        return False
    return _match(order.garnish, remaining, [])


def consume_order(
    order: Orderable, pool: Iterable[Card], garnish: bool = False
) -> tuple[list[Card], list[Card], bool]:
    """
    Consume an order's recipe, plus its garnish when requested and possible.

    Returns (used cards sorted by name, remaining pool, garnished).
    Raises WrongIngredientsError if even the plain recipe cannot be made.
    """
    remaining = list(pool)
    used: list[Card] = []
    if not _match(order.recipe, remaining, used):
        raise WrongIngredientsError("Required ingredients are not available")

    garnished = False
    if garnish and order.garnish:
        trial_pool = list(remaining)
        trial_used: list[Card] = []
        if _match(order.garnish, trial_pool, trial_used):
            remaining = trial_pool
            used.extend(trial_used)
            garnished = True

    return sorted(used), remaining, garnished


def can_bake(layer: Card, pool: Iterable[Card]) -> bool:
    """
    Numeric bake check.

    Missing = recipe items not present in the pool at all (membership,
    not multiplicity). Bakeable when missing <= ducks held.
    """
    held = list(pool)
    ducks = sum(1 for card in held if card == HELPFUL_DUCK)
    missing = sum(1 for item in layer.recipe if item not in held)
    return missing <= ducks
