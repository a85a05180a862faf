"""
Magic Bakery - The game facade.

MagicBakery composes the engine pieces into the single entry point a
driver talks to:
- Pantry (display, deck, discard)
- Customers (active window, draw pile, history)
- TurnController (current player, action budget)
- the layer catalog and the players' hands

Every mutating operation validates completely before touching state,
so a rejected call leaves the game exactly as it was.
"""

from __future__ import annotations
import logging
import random
from pathlib import Path
from typing import Iterable

from ..engine_core import matcher
from ..engine_core.cards import Card, CardKind
from ..engine_core.customers import (
    CustomerOrder,
    CustomerOrderStatus,
    Customers,
    TERMINAL_STATUSES,
)
from ..engine_core.errors import (
    EmptyPantryError,
    GamePhaseError,
    InvalidPlayerError,
    WrongIngredientsError,
)
from ..engine_core.pantry import Pantry
from ..engine_core.state import GamePhase, Player
from ..engine_core.turns import TurnController, actions_permitted
from . import decks, setup

logger = logging.getLogger(__name__)


class MagicBakery:
    """
    A game of Magic Bakery.

    Usage:
        bakery = MagicBakery(seed=10, ingredient_deck_file=..., layer_deck_file=...)
        bakery.start_game(["Ann", "Bo"], customer_deck_file)

        bakery.draw_from_pantry("Flour")
        bakery.bake_layer(layer)
        used = bakery.fulfil_order(order, garnish=True)
        bakery.end_turn()
    """

    def __init__(
        self,
        seed: int,
        ingredient_deck_file: str | Path,
        layer_deck_file: str | Path,
    ):
        self.seed = seed
        self.random = random.Random(seed)
        self.ingredient_deck_file = str(ingredient_deck_file)
        self.layer_deck_file = str(layer_deck_file)

        self._ingredients: list[Card] = decks.read_ingredient_file(ingredient_deck_file)
        self._layers: list[Card] = decks.read_layer_file(layer_deck_file)

        self.phase = GamePhase.SETUP
        self._players: list[Player] = []
        self._pantry = Pantry(self.random)
        self._customers = Customers([])
        self._turns: TurnController | None = None

        # Applied actions, appended by the Reducer
        self.action_history: list = []

    @classmethod
    def with_bundled_decks(cls, seed: int, data_dir: str | Path | None = None) -> MagicBakery:
        """Create a game from the ingredient and layer files in data_dir."""
        return cls(
            seed,
            decks.deck_path(decks.INGREDIENTS_FILE, data_dir),
            decks.deck_path(decks.LAYERS_FILE, data_dir),
        )

    # =========================================================================
    # Setup
    # =========================================================================

    def start_game(
        self,
        player_names: Iterable[str],
        customer_deck: str | Path | Iterable[CustomerOrder],
    ) -> None:
        """
        Seat the players and deal the opening position.

        customer_deck is a customer file path or already loaded orders.
        Raises InvalidPlayerCountError outside 2-5 players,
        ResourceNotFoundError for a missing customer file,
        DeckCompositionError when a level is short of orders and
        EmptyPantryError when the ingredients cannot cover the opening deal.
        All of these are raised before the Random is touched.
        """
        if self.phase != GamePhase.SETUP:
            raise GamePhaseError("The game has already started")

        names = [name.strip() for name in player_names]
        num_players = len(names)
        actions_permitted(num_players)
        if len(set(names)) != num_players or not all(names):
            raise InvalidPlayerError("Player names must be non-empty and distinct")

        if isinstance(customer_deck, (str, Path)):
            orders = decks.read_customer_file(customer_deck, self._layers)
        else:
            orders = list(customer_deck)
        setup.check_customer_levels(orders, num_players)
        setup.check_opening_supply(len(self._ingredients), num_players)

        players = [Player(name) for name in names]
        customers = Customers(setup.compose_customer_deck(orders, self.random, num_players))

        pantry_deck = list(self._ingredients)
        self.random.shuffle(pantry_deck)
        pantry = Pantry(self.random, deck=pantry_deck)

        for _ in range(setup.opening_customer_count(num_players)):
            customers.add_order()
        setup.seed_display(pantry)
        setup.deal_opening_hands(pantry, players)

        self._players = players
        self._customers = customers
        self._pantry = pantry
        self._turns = TurnController(num_players)
        self.phase = GamePhase.PLAYING
        logger.info("Game started with %d players: %s", num_players, ", ".join(names))

    # =========================================================================
    # Player actions
    # =========================================================================

    def bake_layer(self, layer: Card) -> None:
        """
        Bake a layer from the current player's hand.

        The numeric bake check must pass and the greedy consumption of the
        layer's recipe picks the cards actually spent. Spent cards go to
        the pantry discard; the baked layer joins the hand.
        """
        self._require_playing()
        self._turns.require_action()

        if layer.kind != CardKind.LAYER or layer not in self._layers:
            raise WrongIngredientsError(f"{layer} is not available to bake")

        player = self.get_current_player()
        if not matcher.can_bake(layer, player.hand):
            raise WrongIngredientsError(
                f"{player.name} does not have the ingredients to bake {layer}"
            )
        used, _ = matcher.consume(layer.recipe, player.hand)

        for card in used:
            player.remove_from_hand(card)
        self._pantry.discard(used)
        player.add_to_hand(layer)
        self._layers.remove(layer)
        self._turns.spend_action()
        logger.debug("%s baked %s using %s", player.name, layer, used)

    def draw_from_pantry(self, ingredient: Card | str) -> Card:
        """
        Take a face-up card into the current player's hand.

        ingredient may be a Card or a name (case-insensitive). The display
        is topped up from the deck. Returns the card taken.
        """
        self._require_playing()
        self._turns.require_action()

        if isinstance(ingredient, str):
            card = self._pantry.find_in_display(ingredient)
        else:
            card = ingredient if ingredient in self._pantry.display else None
        if card is None:
            raise WrongIngredientsError(f"{ingredient} is not in the pantry")
        if not self._pantry.can_draw():
            raise EmptyPantryError()

        player = self.get_current_player()
        self._pantry.take_from_display(card)
        player.add_to_hand(card)
        self._pantry.replenish()
        self._turns.spend_action()
        logger.debug("%s drew %s from the pantry", player.name, card)
        return card

    def pass_card(self, ingredient: Card, recipient: Player | str) -> None:
        """Give one card from the current player's hand to another player."""
        self._require_playing()
        self._turns.require_action()

        giver = self.get_current_player()
        receiver = self._find_player(recipient)
        if receiver is None or receiver is giver:
            raise InvalidPlayerError(f"Cannot pass a card to {recipient}")
        if not giver.has_ingredient(ingredient):
            raise WrongIngredientsError(f"{giver.name} does not hold {ingredient}")

        giver.remove_from_hand(ingredient)
        receiver.add_to_hand(ingredient)
        self._turns.spend_action()
        logger.debug("%s passed %s to %s", giver.name, ingredient, receiver.name)

    def refresh_pantry(self) -> None:
        """Discard the face-up pantry and deal five new cards."""
        self._require_playing()
        self._turns.require_action()
        self._pantry.refresh()
        self._turns.spend_action()

    def fulfil_order(self, order: CustomerOrder, garnish: bool = False) -> list[Card]:
        """
        Serve a waiting customer from the current player's hand.

        With garnish=True the garnish is added when the hand allows it.
        Spent ingredients go to the discard, spent layers return to the
        layer catalog. One customer then arrives (or time passes when
        the customer pile is empty).

        Returns the cards used, sorted by name.
        """
        self._require_playing()
        self._turns.require_action()

        if not self._customers.is_waiting(order):
            raise WrongIngredientsError(f"{order} is not waiting in the shop")

        player = self.get_current_player()
        used, _ = order.fulfill(player.hand, garnish)

        for card in used:
            player.remove_from_hand(card)
        self._pantry.discard(card for card in used if not card.is_layer)
        self._layers.extend(card for card in used if card.is_layer)
        self._customers.remove(order)
        self._turns.spend_action()
        logger.info("%s served %s (%s)", player.name, order, order.status.value)

        self.customer_arrives()
        return used

    def end_turn(self) -> bool:
        """Pass play on. Returns True when a new round started."""
        self._require_playing()
        return self._turns.end_turn()

    def customer_arrives(self) -> CustomerOrder | None:
        """
        The "order arrives" event.

        Draws a customer when the pile has one, otherwise lets time pass.
        Returns any customer who gave up as a result.
        """
        if self._customers.customer_deck:
            leaving = self._customers.add_order()
        else:
            leaving = self._customers.advance()

        if not self._customers.customer_deck and self._customers.is_empty():
            self.phase = GamePhase.GAME_OVER
            logger.info("No customers left, game over")
        return leaving

    # =========================================================================
    # Queries
    # =========================================================================

    def get_actions_permitted(self) -> int:
        self._require_started()
        return self._turns.budget

    def get_actions_remaining(self) -> int:
        self._require_started()
        return self._turns.actions_remaining

    def get_current_player(self) -> Player:
        self._require_started()
        return self._players[self._turns.current_player_idx]

    @property
    def current_player_idx(self) -> int:
        self._require_started()
        return self._turns.current_player_idx

    @property
    def action_counts(self) -> list[int]:
        self._require_started()
        return list(self._turns.action_counts)

    def get_players(self) -> list[Player]:
        return list(self._players)

    def get_pantry(self) -> list[Card]:
        return list(self._pantry.display)

    def get_pantry_supply(self) -> Pantry:
        return self._pantry

    def get_layers(self) -> list[Card]:
        """Layers still available to bake, one per kind."""
        return list(dict.fromkeys(self._layers))

    def get_layer_catalog(self) -> list[Card]:
        """Every unbaked layer copy."""
        return list(self._layers)

    def get_ingredient_deck(self) -> list[Card]:
        """The full ingredient list as loaded, before shuffling."""
        return list(self._ingredients)

    def get_bakeable_layers(self) -> list[Card]:
        hand = self.get_current_player().hand
        return [layer for layer in self.get_layers() if matcher.can_bake(layer, hand)]

    def get_customers(self) -> Customers:
        return self._customers

    def get_fulfilable_customers(self) -> list[CustomerOrder]:
        return self._customers.get_fulfilable(self.get_current_player().hand)

    def get_garnishable_customers(self) -> list[CustomerOrder]:
        return self._customers.get_garnishable(self.get_current_player().hand)

    def get_customer_service_record(self) -> dict[CustomerOrderStatus, int]:
        """How many customers left, by outcome."""
        return {
            status: len(self._customers.inactive_with_status(status))
            for status in CustomerOrderStatus
            if status in TERMINAL_STATUSES
        }

    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    # =========================================================================
    # Internals
    # =========================================================================

    def _find_player(self, player: Player | str) -> Player | None:
        for seated in self._players:
            if seated is player or seated.name == player:
                return seated
        return None

    def _require_started(self) -> None:
        if self._turns is None:
            raise GamePhaseError("The game has not started")

    def _require_playing(self) -> None:
        if self.phase != GamePhase.PLAYING:
            raise GamePhaseError(f"No actions allowed during {self.phase.value}")

    @classmethod
    def restore(
        cls,
        *,
        seed: int,
        rng: random.Random,
        ingredient_deck_file: str,
        layer_deck_file: str,
        ingredients: list[Card],
        layers: list[Card],
        phase: GamePhase,
        players: list[Player],
        pantry: Pantry,
        customers: Customers,
        turns: TurnController | None,
    ) -> MagicBakery:
        """Rebuild a game from saved parts without reading any deck file."""
        game = cls.__new__(cls)
        game.seed = seed
        game.random = rng
        game.ingredient_deck_file = ingredient_deck_file
        game.layer_deck_file = layer_deck_file
        game._ingredients = ingredients
        game._layers = layers
        game.phase = phase
        game._players = players
        game._pantry = pantry
        game._customers = customers
        game._turns = turns
        game.action_history = []
        return game
