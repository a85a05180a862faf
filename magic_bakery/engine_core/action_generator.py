"""
Action Generator - Generates all legal actions for the current player.

The action generator is used by:
1. The console driver to show the action menu
2. Validation (is this action in legal_actions?)

Design: Generates Action objects, not just action types.
This ensures all generated actions are fully specified.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .action import Action, ActionType
from .pantry import DISPLAY_SIZE
from .state import GamePhase

if TYPE_CHECKING:
    from ..bakery.game import MagicBakery


@dataclass
class ActionGenerator:
    """Generates legal actions from the facade's query methods."""

    def generate(self, game: MagicBakery) -> list[Action]:
        """
        Generate all legal actions for the current player.

        Returns a list of fully-specified Action objects.
        """
        if game.phase != GamePhase.PLAYING:
            return []

        if game.get_actions_remaining() <= 0:
            # Only end turn is available
            return [Action.end_turn()]

        actions = []
        actions.extend(self._generate_draw_actions(game))
        actions.extend(self._generate_pass_actions(game))
        actions.extend(self._generate_bake_actions(game))
        actions.extend(self._generate_fulfil_actions(game))

        pantry = game.get_pantry_supply()
        if pantry.supply_size + len(pantry.display) >= DISPLAY_SIZE:
            actions.append(Action.refresh())

        actions.append(Action.end_turn())
        return actions

    def _generate_draw_actions(self, game: MagicBakery) -> list[Action]:
        """One draw per distinct face-up card, while the supply can top up."""
        if not game.get_pantry_supply().can_draw():
            return []
        return [Action.draw(card) for card in dict.fromkeys(game.get_pantry())]

    def _generate_pass_actions(self, game: MagicBakery) -> list[Action]:
        current = game.get_current_player()
        others = [p for p in game.get_players() if p is not current]
        return [
            Action.pass_card(card, other.name)
            for card in dict.fromkeys(current.hand)
            for other in others
        ]

    def _generate_bake_actions(self, game: MagicBakery) -> list[Action]:
        return [Action.bake(layer) for layer in game.get_bakeable_layers()]

    def _generate_fulfil_actions(self, game: MagicBakery) -> list[Action]:
        actions = [Action.fulfil(order) for order in game.get_fulfilable_customers()]
        actions.extend(
            Action.fulfil(order, garnish=True)
            for order in game.get_garnishable_customers()
        )
        return actions

    def is_legal(self, game: MagicBakery, action: Action) -> bool:
        """Check if an action is among the generated legal actions."""
        return action in self.generate(game)


def legal_actions(game: MagicBakery) -> list[Action]:
    """
    Convenience function to get legal actions.

    Creates an ActionGenerator and generates actions.
    """
    generator = ActionGenerator()
    return generator.generate(game)
