"""
Persistence - Save and restore a complete game as JSON.

The snapshot holds every pool (hands, pantry display/deck/discard,
customer window/pile/history, layer catalog), every order status,
the turn state and the internal state of the game's Random. A restored
game therefore makes exactly the same shuffles as the original would.
"""

from __future__ import annotations
import logging
import random
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from ..engine_core.cards import Card, CardKind, HELPFUL_DUCK
from ..engine_core.customers import CustomerOrder, CustomerOrderStatus, Customers
from ..engine_core.errors import BakeryError, CorruptSaveError, ResourceNotFoundError
from ..engine_core.pantry import Pantry
from ..engine_core.state import GamePhase, Player
from ..engine_core.turns import TurnController
from .game import MagicBakery

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1


# =============================================================================
# Snapshot Models
# =============================================================================

class CardModel(BaseModel):
    """A card; layers carry their sub-recipe."""
    kind: CardKind
    name: str
    recipe: list[CardModel] = Field(default_factory=list)


class CustomerOrderModel(BaseModel):
    name: str
    level: int
    status: CustomerOrderStatus
    recipe: list[CardModel]
    garnish: list[CardModel] = Field(default_factory=list)


class PlayerModel(BaseModel):
    name: str
    hand: list[CardModel]


class PantryModel(BaseModel):
    deck: list[CardModel]
    display: list[CardModel]
    discard: list[CardModel]


class CustomersModel(BaseModel):
    deck: list[CustomerOrderModel]
    window: list[Optional[CustomerOrderModel]]
    history: list[CustomerOrderModel]


class TurnModel(BaseModel):
    current_player_idx: int = Field(ge=0)
    action_counts: list[int]


class RandomStateModel(BaseModel):
    """random.Random.getstate() split into JSON-friendly parts."""
    version: int
    internal: list[int]
    gauss_next: Optional[float] = None


class GameSnapshot(BaseModel):
    """Everything needed to rebuild a MagicBakery."""
    format_version: int = SNAPSHOT_VERSION
    seed: int
    phase: GamePhase
    ingredient_deck_file: str
    layer_deck_file: str
    ingredients: list[CardModel]
    layers: list[CardModel]
    players: list[PlayerModel]
    pantry: PantryModel
    customers: CustomersModel
    turn: Optional[TurnModel] = None
    rng: RandomStateModel


# =============================================================================
# Conversion
# =============================================================================

def _card_model(card: Card) -> CardModel:
    return CardModel(
        kind=card.kind,
        name=card.name,
        recipe=[_card_model(item) for item in card.recipe],
    )


def _card(model: CardModel) -> Card:
    if model.kind == CardKind.WILDCARD:
        return HELPFUL_DUCK if model.name == HELPFUL_DUCK.name else Card(model.kind, model.name)
    if model.kind == CardKind.LAYER:
        return Card.layer(model.name, [_card(item) for item in model.recipe])
    return Card.ingredient(model.name)


def _cards(models: list[CardModel]) -> list[Card]:
    return [_card(model) for model in models]


def _order_model(order: CustomerOrder) -> CustomerOrderModel:
    return CustomerOrderModel(
        name=order.name,
        level=order.level,
        status=order.status,
        recipe=[_card_model(card) for card in order.recipe],
        garnish=[_card_model(card) for card in order.garnish],
    )


def _order(model: CustomerOrderModel) -> CustomerOrder:
    return CustomerOrder(
        name=model.name,
        recipe=tuple(_cards(model.recipe)),
        garnish=tuple(_cards(model.garnish)),
        level=model.level,
        status=model.status,
    )


def to_snapshot(game: MagicBakery) -> GameSnapshot:
    """Capture the complete state of game."""
    version, internal, gauss_next = game.random.getstate()
    pantry = game.get_pantry_supply()
    customers = game.get_customers()
    started = game.phase != GamePhase.SETUP

    return GameSnapshot(
        seed=game.seed,
        phase=game.phase,
        ingredient_deck_file=game.ingredient_deck_file,
        layer_deck_file=game.layer_deck_file,
        ingredients=[_card_model(card) for card in game.get_ingredient_deck()],
        layers=[_card_model(card) for card in game.get_layer_catalog()],
        players=[
            PlayerModel(name=p.name, hand=[_card_model(card) for card in p.hand])
            for p in game.get_players()
        ],
        pantry=PantryModel(
            deck=[_card_model(card) for card in pantry.deck],
            display=[_card_model(card) for card in pantry.display],
            discard=[_card_model(card) for card in pantry.discard_pile],
        ),
        customers=CustomersModel(
            deck=[_order_model(order) for order in customers.customer_deck],
            window=[
                _order_model(order) if order is not None else None
                for order in customers.active_customers
            ],
            history=[_order_model(order) for order in customers.history],
        ),
        turn=TurnModel(
            current_player_idx=game.current_player_idx,
            action_counts=game.action_counts,
        ) if started else None,
        rng=RandomStateModel(version=version, internal=list(internal), gauss_next=gauss_next),
    )


def from_snapshot(snapshot: GameSnapshot) -> MagicBakery:
    """Rebuild a game from a snapshot."""
    rng = random.Random()
    rng.setstate((
        snapshot.rng.version,
        tuple(snapshot.rng.internal),
        snapshot.rng.gauss_next,
    ))

    players = [Player(p.name, _cards(p.hand)) for p in snapshot.players]

    turns = None
    if snapshot.turn is not None:
        turns = TurnController(
            num_players=len(players),
            current_player_idx=snapshot.turn.current_player_idx,
            action_counts=list(snapshot.turn.action_counts),
        )
        if turns.current_player_idx >= len(players):
            raise CorruptSaveError("Current player index is out of range")

    return MagicBakery.restore(
        seed=snapshot.seed,
        rng=rng,
        ingredient_deck_file=snapshot.ingredient_deck_file,
        layer_deck_file=snapshot.layer_deck_file,
        ingredients=_cards(snapshot.ingredients),
        layers=_cards(snapshot.layers),
        phase=snapshot.phase,
        players=players,
        pantry=Pantry(
            rng,
            deck=_cards(snapshot.pantry.deck),
            display=_cards(snapshot.pantry.display),
            discard=_cards(snapshot.pantry.discard),
        ),
        customers=Customers(
            deck=[_order(o) for o in snapshot.customers.deck],
            window=[_order(o) if o is not None else None for o in snapshot.customers.window],
            history=[_order(o) for o in snapshot.customers.history],
        ),
        turns=turns,
    )


# =============================================================================
# Files
# =============================================================================

def save_state(game: MagicBakery, path: str | Path) -> Path:
    """Write game to path as JSON. Returns the path written."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(to_snapshot(game).model_dump_json(indent=2), encoding="utf-8")
    logger.info("Saved game to %s", path)
    return path


def load_state(path: str | Path) -> MagicBakery:
    """
    Read a game saved with save_state().

    Raises ResourceNotFoundError for a missing file and CorruptSaveError
    for anything that does not rebuild into a consistent game.
    """
    path = Path(path)
    if not path.is_file():
        raise ResourceNotFoundError(f"Save file not found: {path}")

    try:
        snapshot = GameSnapshot.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as e:
        raise CorruptSaveError(f"Invalid save file {path}: {e.error_count()} error(s)") from e

    try:
        game = from_snapshot(snapshot)
    except CorruptSaveError:
        raise
    except (BakeryError, ValueError, TypeError) as e:
        raise CorruptSaveError(f"Inconsistent save file {path}: {e}") from e

    logger.info("Loaded game from %s", path)
    return game
