"""
Action System - Actions, payloads, and results.

Actions represent the player moves a driver can request:
draw, pass, bake, fulfil, refresh and end turn.

All state changes requested by a driver flow through actions, so a
game can be replayed from its action history.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .cards import Card


class ActionType(Enum):
    """Types of player actions."""
    DRAW_INGREDIENT = "draw_ingredient"
    PASS_INGREDIENT = "pass_ingredient"
    BAKE_LAYER = "bake_layer"
    FULFIL_ORDER = "fulfil_order"
    REFRESH_PANTRY = "refresh_pantry"
    END_TURN = "end_turn"

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title()


@dataclass
class ActionPayload:
    """
    Payload for an action - the action's parameters.

    Different action types use different fields.
    Validation happens in the facade, not here.
    """
    card: Card | None = None
    recipient: str | None = None  # player name
    order: Any | None = None  # CustomerOrder
    garnish: bool = False


@dataclass
class Action:
    """A complete action to be applied to the game."""
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)

    @classmethod
    def draw(cls, card: Card) -> Action:
        return cls(ActionType.DRAW_INGREDIENT, ActionPayload(card=card))

    @classmethod
    def pass_card(cls, card: Card, recipient: str) -> Action:
        return cls(ActionType.PASS_INGREDIENT, ActionPayload(card=card, recipient=recipient))

    @classmethod
    def bake(cls, layer: Card) -> Action:
        return cls(ActionType.BAKE_LAYER, ActionPayload(card=layer))

    @classmethod
    def fulfil(cls, order: Any, garnish: bool = False) -> Action:
        return cls(ActionType.FULFIL_ORDER, ActionPayload(order=order, garnish=garnish))

    @classmethod
    def refresh(cls) -> Action:
        return cls(ActionType.REFRESH_PANTRY)

    @classmethod
    def end_turn(cls) -> Action:
        return cls(ActionType.END_TURN)

    def describe(self) -> str:
        """Menu text for this action."""
        p = self.payload
        if self.action_type == ActionType.DRAW_INGREDIENT:
            return f"Draw {p.card} from the pantry"
        if self.action_type == ActionType.PASS_INGREDIENT:
            return f"Pass {p.card} to {p.recipient}"
        if self.action_type == ActionType.BAKE_LAYER:
            return f"Bake {p.card} ({p.card.recipe_description})"
        if self.action_type == ActionType.FULFIL_ORDER:
            suffix = " with garnish" if p.garnish else ""
            return f"Serve {p.order}{suffix}"
        return self.action_type.label


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether the action succeeded
    - Errors (if failed), with a machine-readable code
    - Human-readable changes (if succeeded)
    """
    success: bool
    error: str | None = None
    error_code: str | None = None

    state_changes: list[str] = field(default_factory=list)
    used_cards: list[Card] = field(default_factory=list)

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def succeeded(
        cls,
        changes: list[str] | None = None,
        used_cards: list[Card] | None = None,
    ) -> ActionResult:
        """Create a success result."""
        return cls(success=True, state_changes=changes or [], used_cards=used_cards or [])
