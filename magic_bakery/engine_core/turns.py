"""
Turn Controller - Whose turn it is and how many actions they have left.

Budget by player count: 2-3 players get 3 actions per turn, 4-5 get 2.
Counts are reset for every player when the turn wraps back to the
first player (a round boundary), not when each turn starts.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field

from .errors import InvalidPlayerCountError, TooManyActionsError

logger = logging.getLogger(__name__)

MIN_PLAYERS = 2
MAX_PLAYERS = 5


def actions_permitted(num_players: int) -> int:
    """Actions per turn for a table of num_players."""
    if 2 <= num_players <= 3:
        return 3
    if 4 <= num_players <= 5:
        return 2
    raise InvalidPlayerCountError(
        f"The game supports {MIN_PLAYERS}-{MAX_PLAYERS} players, got {num_players}"
    )


@dataclass
class TurnController:
    """Current player index plus per-player action counters."""
    num_players: int
    current_player_idx: int = 0
    action_counts: list[int] = field(default_factory=list)

    def __post_init__(self):
        budget = actions_permitted(self.num_players)
        if not self.action_counts:
            self.action_counts = [budget] * self.num_players
        if len(self.action_counts) != self.num_players:
            raise ValueError("One action counter per player is required")

    @property
    def budget(self) -> int:
        return actions_permitted(self.num_players)

    @property
    def actions_remaining(self) -> int:
        return self.action_counts[self.current_player_idx]

    def require_action(self) -> None:
        """Raise TooManyActionsError unless the current player can act."""
        if self.actions_remaining <= 0:
            raise TooManyActionsError()

    def spend_action(self) -> None:
        self.require_action()
        self.action_counts[self.current_player_idx] -= 1

    def end_turn(self) -> bool:
        """
        Pass play to the next player.

        Returns True when this started a new round (counters were reset).
        """
        if self.current_player_idx == self.num_players - 1:
            self.current_player_idx = 0
            self.action_counts = [self.budget] * self.num_players
            logger.info("New round")
            return True
        self.current_player_idx += 1
        return False
