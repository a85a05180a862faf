"""
Reducer - Applies actions to a game.

The reducer is the single entry point a driver uses to change a game.
All player moves should go through apply_action().

Design principles:
- Dispatches each ActionType to the matching facade operation
- The facade validates before mutating, so a failure leaves state untouched
- Engine errors become ActionResult failures carrying their error_code
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .action import Action, ActionType, ActionResult
from .cards import describe
from .errors import BakeryError

if TYPE_CHECKING:
    from ..bakery.game import MagicBakery

logger = logging.getLogger(__name__)


@dataclass
class Reducer:
    """
    Reducer applies actions to a MagicBakery game.

    Stateless - all state is in the game.
    """

    def apply(self, game: MagicBakery, action: Action) -> ActionResult:
        """
        Apply an action to the game.

        Returns an ActionResult describing the change or the rejection.
        """
        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code="NO_HANDLER",
            )

        try:
            result = handler(game, action)
        except BakeryError as e:
            logger.debug("Rejected %s: %s", action.action_type.value, e)
            return ActionResult.failure(str(e), error_code=e.error_code)

        game.action_history.append(action)
        return result

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.DRAW_INGREDIENT: self._handle_draw,
            ActionType.PASS_INGREDIENT: self._handle_pass,
            ActionType.BAKE_LAYER: self._handle_bake,
            ActionType.FULFIL_ORDER: self._handle_fulfil,
            ActionType.REFRESH_PANTRY: self._handle_refresh,
            ActionType.END_TURN: self._handle_end_turn,
        }
        return handlers.get(action_type)

    def _handle_draw(self, game: MagicBakery, action: Action) -> ActionResult:
        player = game.get_current_player()
        card = game.draw_from_pantry(action.payload.card)
        return ActionResult.succeeded([f"{player.name} took {card} from the pantry"])

    def _handle_pass(self, game: MagicBakery, action: Action) -> ActionResult:
        player = game.get_current_player()
        p = action.payload
        game.pass_card(p.card, p.recipient)
        return ActionResult.succeeded([f"{player.name} passed {p.card} to {p.recipient}"])

    def _handle_bake(self, game: MagicBakery, action: Action) -> ActionResult:
        player = game.get_current_player()
        layer = action.payload.card
        game.bake_layer(layer)
        return ActionResult.succeeded([f"{player.name} baked {layer}"])

    def _handle_fulfil(self, game: MagicBakery, action: Action) -> ActionResult:
        player = game.get_current_player()
        order = action.payload.order
        history_before = len(game.get_customers().history)

        used = game.fulfil_order(order, action.payload.garnish)

        changes = [
            f"{player.name} served {order} ({order.status.value}) using {describe(used)}"
        ]
        # Anyone besides the served order who entered history just gave up
        for left in game.get_customers().history[history_before:]:
            if left is not order:
                changes.append(f"{left} gave up waiting")
        if game.is_game_over():
            changes.append("All customers have been seen, the game is over")
        return ActionResult.succeeded(changes, used_cards=used)

    def _handle_refresh(self, game: MagicBakery, action: Action) -> ActionResult:
        player = game.get_current_player()
        game.refresh_pantry()
        return ActionResult.succeeded([f"{player.name} refreshed the pantry"])

    def _handle_end_turn(self, game: MagicBakery, action: Action) -> ActionResult:
        player = game.get_current_player()
        new_round = game.end_turn()
        changes = [f"{player.name} ended their turn"]
        if new_round:
            changes.append("A new round begins")
        return ActionResult.succeeded(changes)


def apply_action(game: MagicBakery, action: Action) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer()
    return reducer.apply(game, action)
