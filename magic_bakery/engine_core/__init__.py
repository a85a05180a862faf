"""
Engine Core - Deterministic bakery game state management.

The engine is the runtime that:
1. Models cards, customers, the pantry and turns
2. Matches hands against recipes
3. Generates legal actions
4. Applies actions via the reducer
"""

from .cards import Card, CardKind, HELPFUL_DUCK
from .customers import CustomerOrder, CustomerOrderStatus, Customers
from .pantry import Pantry
from .turns import TurnController, actions_permitted
from .state import GamePhase, Player
from .action import Action, ActionType, ActionPayload, ActionResult
from .reducer import Reducer, apply_action
from .action_generator import ActionGenerator, legal_actions
from .errors import BakeryError

__all__ = [
    "Card",
    "CardKind",
    "HELPFUL_DUCK",
    "CustomerOrder",
    "CustomerOrderStatus",
    "Customers",
    "Pantry",
    "TurnController",
    "actions_permitted",
    "GamePhase",
    "Player",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "Reducer",
    "apply_action",
    "ActionGenerator",
    "legal_actions",
    "BakeryError",
]
