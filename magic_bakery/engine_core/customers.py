"""
Customers - Customer orders and the three-slot customer queue.

The queue is a sliding window of exactly three slots. Left is the
customer about to leave, right is the one who just arrived. Each slot
holds a CustomerOrder or None (empty). Behind the window sits a draw
pile (top = end of the list) and in front of it a history of every
order that left, whatever the reason.

Per-slot state machine:

    Empty -> WAITING <-> IMPATIENT
    WAITING/IMPATIENT -> GIVEN_UP     (evicted by advance)
    WAITING/IMPATIENT -> FULFILLED    (served)
    WAITING/IMPATIENT -> GARNISHED    (served with garnish)

Terminal orders move to history and their slot becomes empty.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence

from .cards import Card, describe
from .errors import EmptyCustomerDeckError, WrongIngredientsError
from . import matcher

logger = logging.getLogger(__name__)

WINDOW_SIZE = 3


class CustomerOrderStatus(Enum):
    """Lifecycle of a customer order."""
    WAITING = "waiting"
    IMPATIENT = "impatient"
    FULFILLED = "fulfilled"
    GARNISHED = "garnished"
    GIVEN_UP = "given_up"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset({
    CustomerOrderStatus.FULFILLED,
    CustomerOrderStatus.GARNISHED,
    CustomerOrderStatus.GIVEN_UP,
})


@dataclass(eq=False)
class CustomerOrder:
    """
    A customer's order: a recipe, an optional garnish and a level.

    Orders compare by identity; the same card can appear twice in a
    deck and each copy is its own customer.
    """
    name: str
    recipe: tuple[Card, ...]
    garnish: tuple[Card, ...] = ()
    level: int = 1
    status: CustomerOrderStatus = CustomerOrderStatus.WAITING

    def __post_init__(self):
        self.recipe = tuple(self.recipe)
        self.garnish = tuple(self.garnish or ())
        if not self.recipe:
            raise WrongIngredientsError(f"Order {self.name} needs a non-empty recipe")

    def __str__(self) -> str:
        return self.name

    @property
    def recipe_description(self) -> str:
        return describe(self.recipe)

    @property
    def garnish_description(self) -> str:
        return describe(self.garnish)

    @property
    def is_active(self) -> bool:
        return not self.status.is_terminal

    def can_fulfill(self, ingredients: Iterable[Card]) -> bool:
        return matcher.can_fulfil(self, ingredients)

    def can_garnish(self, ingredients: Iterable[Card]) -> bool:
        return matcher.can_garnish(self, ingredients)

    def fulfill(
        self, ingredients: Iterable[Card], garnish: bool = False
    ) -> tuple[list[Card], list[Card]]:
        """
        Serve the order from ingredients.

        Returns (used cards sorted by name, remaining cards). The status
        becomes GARNISHED when the garnish was requested and matched,
        FULFILLED otherwise. Nothing changes if the recipe cannot be made.
        """
        self._require_active()
        used, remaining, garnished = matcher.consume_order(self, ingredients, garnish)
        self.status = (
            CustomerOrderStatus.GARNISHED if garnished else CustomerOrderStatus.FULFILLED
        )
        return used, remaining

    def abandon(self) -> None:
        self._require_active()
        self.status = CustomerOrderStatus.GIVEN_UP

    def mark_impatient(self) -> None:
        self._require_active()
        self.status = CustomerOrderStatus.IMPATIENT

    def mark_waiting(self) -> None:
        self._require_active()
        self.status = CustomerOrderStatus.WAITING

    def _require_active(self) -> None:
        if not self.is_active:
            raise WrongIngredientsError(
                f"Order {self.name} has already left ({self.status.value})"
            )


class Customers:
    """
    The customer queue: active window, draw pile and history.

    The draw pile is handed over already composed and shuffled (see
    bakery.setup.compose_customer_deck); the queue only pops from it.
    """

    def __init__(
        self,
        deck: Iterable[CustomerOrder],
        window: Sequence[CustomerOrder | None] | None = None,
        history: Iterable[CustomerOrder] | None = None,
    ):
        self._deck: list[CustomerOrder] = list(deck)
        self._window: list[CustomerOrder | None] = (
            list(window) if window is not None else [None] * WINDOW_SIZE
        )
        if len(self._window) != WINDOW_SIZE:
            raise ValueError(f"Customer window must have {WINDOW_SIZE} slots")
        self._history: list[CustomerOrder] = list(history or [])

    # =========================================================================
    # Views
    # =========================================================================

    @property
    def active_customers(self) -> tuple[CustomerOrder | None, ...]:
        """The three window slots, left to right (None = empty)."""
        return tuple(self._window)

    @property
    def customer_deck(self) -> tuple[CustomerOrder, ...]:
        """The draw pile, bottom to top."""
        return tuple(self._deck)

    @property
    def history(self) -> tuple[CustomerOrder, ...]:
        """Every order that has left the window, oldest first."""
        return tuple(self._history)

    @property
    def active_count(self) -> int:
        return sum(1 for order in self._window if order is not None)

    def is_empty(self) -> bool:
        """True when no customer is waiting in the window."""
        return self.active_count == 0

    def peek(self) -> CustomerOrder | None:
        """The leftmost slot, the next customer to leave."""
        return self._window[0]

    def get_fulfilable(self, hand: Iterable[Card]) -> list[CustomerOrder]:
        cards = list(hand)
        return [o for o in self._window if o is not None and o.can_fulfill(cards)]

    def get_garnishable(self, hand: Iterable[Card]) -> list[CustomerOrder]:
        cards = list(hand)
        return [o for o in self._window if o is not None and o.can_garnish(cards)]

    def inactive_with_status(self, status: CustomerOrderStatus) -> list[CustomerOrder]:
        return [order for order in self._history if order.status == status]

    def is_waiting(self, order: CustomerOrder) -> bool:
        return any(slot is order for slot in self._window)

    # =========================================================================
    # Transitions
    # =========================================================================

    def will_leave_soon(self) -> bool:
        """
        Check whether the leftmost customer is about to leave.

        True (and the leftmost order becomes IMPATIENT) when the window is
        full, or when the pile is empty and only the right end is free.
        """
        if None not in self._window:
            self._window[0].mark_impatient()
            return True
        if not self._deck:
            if self._window[0] is not None and self._window[-1] is None:
                self._window[0].mark_impatient()
                return True
        return False

    def advance(self) -> CustomerOrder | None:
        """
        Time passes.

        Either the leftmost customer gives up (returned), or the window is
        compacted by one empty slot and a fresh empty slot opens on the
        right (returns None).
        """
        if self.will_leave_soon():
            leaving = self._window.pop(0)
            self._window.append(None)
            leaving.abandon()
            self._history.append(leaving)
            logger.info("Customer %s gave up waiting", leaving.name)
            return leaving

        if self._deck:
            # remove the last empty slot
            last_empty = len(self._window) - 1 - self._window[::-1].index(None)
            del self._window[last_empty]
        else:
            self._window.remove(None)
        self._window.append(None)

        if self._window[0] is not None:
            self._window[0].mark_waiting()
        return None

    def add_order(self) -> CustomerOrder | None:
        """
        A new customer arrives.

        Runs advance() first, then draws one order into the rightmost slot.
        Returns whatever advance() evicted, never the new arrival.
        Raises EmptyCustomerDeckError (before any change) if the pile is empty.
        """
        if not self._deck:
            raise EmptyCustomerDeckError()

        leaving = self.advance()
        self._window.pop()
        arriving = self.draw()
        self._window.append(arriving)
        logger.debug("Customer %s arrived", arriving.name)

        if None not in self._window:
            self._window[0].mark_impatient()
        return leaving

    def draw(self) -> CustomerOrder:
        """Pop the top order of the pile."""
        if not self._deck:
            raise EmptyCustomerDeckError()
        return self._deck.pop()

    def remove(self, order: CustomerOrder) -> None:
        """Take a served order out of the window and into history."""
        for idx, slot in enumerate(self._window):
            if slot is order:
                self._window[idx] = None
                self._history.append(order)
                return
        raise WrongIngredientsError(f"Order {order.name} is not waiting in the shop")
