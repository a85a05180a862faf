"""
Session Module - Drives one play-through of the game.

A session is the console loop around a MagicBakery:
- Created when the user starts or loads a game
- Reads choices and applies them through the reducer
- Can save the game at the action prompt
- Ends when the last customer has been seen
"""

from .game_loop import GameLoop, LoopState, TurnResult

__all__ = [
    "GameLoop",
    "LoopState",
    "TurnResult",
]
