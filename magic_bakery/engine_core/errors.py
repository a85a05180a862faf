"""
Engine Errors - The failure taxonomy shared by every engine component.

Every rejection raised by the engine is a BakeryError carrying a
machine-readable error_code. The reducer turns these into
ActionResult.failure(...) values so a driver can show a specific
message and retry with different input.

Kinds:
- Action budget exceeded (TooManyActionsError)
- Invalid ingredients / recipe (WrongIngredientsError)
- Supply exhaustion (EmptyPantryError, EmptyCustomerDeckError)
- Resource not found (ResourceNotFoundError)
"""

from __future__ import annotations


class BakeryError(Exception):
    """Base class for all engine rejections."""
    error_code = "BAKERY_ERROR"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message())

    @classmethod
    def default_message(cls) -> str:
        return cls.__doc__.strip().splitlines()[0] if cls.__doc__ else cls.__name__


class TooManyActionsError(BakeryError):
    """The current player has no actions remaining this turn."""
    error_code = "TOO_MANY_ACTIONS"


class WrongIngredientsError(BakeryError):
    """The ingredients supplied do not satisfy the request."""
    error_code = "WRONG_INGREDIENTS"


class EmptyPantryError(BakeryError):
    """Both the pantry deck and the discard pile are empty."""
    error_code = "EMPTY_PANTRY"


class EmptyCustomerDeckError(BakeryError):
    """No customer orders are left to draw."""
    error_code = "EMPTY_CUSTOMER_DECK"


class ResourceNotFoundError(BakeryError, FileNotFoundError):
    """A required deck or save file does not exist."""
    error_code = "RESOURCE_NOT_FOUND"


class InvalidPlayerCountError(BakeryError, ValueError):
    """The game supports 2-5 players."""
    error_code = "INVALID_PLAYER_COUNT"


class InvalidPlayerError(BakeryError, ValueError):
    """The chosen player cannot take part in this action."""
    error_code = "INVALID_PLAYER"


class DeckCompositionError(BakeryError, ValueError):
    """The customer deck does not hold enough orders of a required level."""
    error_code = "DECK_COMPOSITION"


class GamePhaseError(BakeryError):
    """The action is not allowed in the current game phase."""
    error_code = "INVALID_PHASE"


class CorruptSaveError(BakeryError, ValueError):
    """The save file could not be read back into a game."""
    error_code = "CORRUPT_SAVE"
