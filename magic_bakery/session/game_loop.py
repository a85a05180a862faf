"""
Game Loop - The console driver for a game of Magic Bakery.

The loop:
1. Ask for the players (unless the game was loaded from a save)
2. Show the shop: customers, pantry, current player's hand
3. List the legal actions and read a choice
4. Apply it through the reducer, report the result
5. End the turn automatically when the player runs out of actions
6. Repeat until the customers are all gone

Input and output are injectable so the loop can be scripted.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable

from ..bakery.game import MagicBakery
from ..bakery.persistence import save_state
from ..engine_core.action import Action, ActionResult
from ..engine_core.action_generator import legal_actions
from ..engine_core.reducer import Reducer
from ..engine_core.state import GamePhase, Player
from ..engine_core.turns import MAX_PLAYERS, MIN_PLAYERS

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


class LoopState(Enum):
    """State of the game loop."""
    SETUP = "setup"
    WAITING_ACTION = "waiting_action"
    GAME_OVER = "game_over"
    QUIT = "quit"


@dataclass
class TurnResult:
    """Result of handling one line of player input."""
    success: bool
    loop_state: LoopState

    # Human-readable changes
    messages: list[str] = field(default_factory=list)

    # Rejections, as "[CODE] message"
    errors: list[str] = field(default_factory=list)


class GameLoop:
    """
    The console game driver.

    Usage:
        loop = GameLoop(MagicBakery.with_bundled_decks(seed=10), customer_deck)
        loop.run()

        # or scripted
        loop = GameLoop(game, customer_deck, input_fn=answers.pop, output_fn=log.append)
    """

    def __init__(
        self,
        game: MagicBakery,
        customer_deck: str | Path | None = None,
        input_fn: InputFn = input,
        output_fn: OutputFn = print,
    ):
        self.game = game
        self.customer_deck = customer_deck
        self.input = input_fn
        self.output = output_fn
        self.reducer = Reducer()
        self.state = LoopState.SETUP if game.phase == GamePhase.SETUP else LoopState.WAITING_ACTION
        if game.phase == GamePhase.GAME_OVER:
            self.state = LoopState.GAME_OVER

    # =========================================================================
    # Running
    # =========================================================================

    def run(self, player_names: Iterable[str] | None = None) -> LoopState:
        """Play until the game ends or the user quits."""
        try:
            if self.state == LoopState.SETUP:
                self.setup(player_names)

            while self.state == LoopState.WAITING_ACTION:
                self.output(self.render_shop())
                actions = legal_actions(self.game)
                self.output(self.render_menu(actions))
                result = self.step(self.input("> "), actions)
                for line in result.messages:
                    self.output(line)
                for line in result.errors:
                    self.output(f"Error {line}")
        except EOFError:
            self.state = LoopState.QUIT

        if self.state == LoopState.GAME_OVER:
            self.output(self.render_service_record())
        return self.state

    def setup(self, player_names: Iterable[str] | None = None) -> None:
        """Seat the players, prompting for them when none are given."""
        names = list(player_names) if player_names else self._prompt_players()
        self.game.start_game(names, self.customer_deck)
        self.state = LoopState.WAITING_ACTION
        self.output(f"Welcome to the Magic Bakery, {', '.join(names)}!")

    def _prompt_players(self) -> list[str]:
        while True:
            answer = self.input(f"How many players ({MIN_PLAYERS}-{MAX_PLAYERS})? ").strip()
            if answer.isdigit() and MIN_PLAYERS <= int(answer) <= MAX_PLAYERS:
                count = int(answer)
                break
            self.output(f"Please enter a number from {MIN_PLAYERS} to {MAX_PLAYERS}.")

        names: list[str] = []
        while len(names) < count:
            name = self.input(f"Name of player {len(names) + 1}? ").strip()
            if not name or name in names:
                self.output("Names must be non-empty and different.")
                continue
            names.append(name)
        return names

    def step(self, line: str, actions: list[Action] | None = None) -> TurnResult:
        """
        Handle one line of input at the action prompt.

        Accepts an action number, 'save <path>' or 'quit'.
        """
        if actions is None:
            actions = legal_actions(self.game)
        words = line.split()

        if not words:
            return TurnResult(False, self.state, errors=["[NO_CHOICE] Choose an action"])

        command = words[0].lower()
        if command == "quit":
            self.state = LoopState.QUIT
            return TurnResult(True, self.state, messages=["Goodbye!"])

        if command == "save":
            return self._save(words[1:])

        if not command.isdigit() or not 1 <= int(command) <= len(actions):
            return TurnResult(
                False, self.state,
                errors=[f"[INVALID_CHOICE] Enter a number from 1 to {len(actions)}"],
            )

        previous = self.game.get_current_player()
        result = self.reducer.apply(self.game, actions[int(command) - 1])
        return self._after_action(result, previous)

    def _after_action(self, result: ActionResult, previous: Player) -> TurnResult:
        if not result.success:
            return TurnResult(False, self.state, errors=[f"[{result.error_code}] {result.error}"])

        messages = list(result.state_changes)
        if self.game.is_game_over():
            self.state = LoopState.GAME_OVER
        elif self.game.get_actions_remaining() == 0:
            ended = self.reducer.apply(self.game, Action.end_turn())
            messages.extend(ended.state_changes)
        if self.state != LoopState.GAME_OVER and self.game.get_current_player() is not previous:
            messages.append(f"It is now {self.game.get_current_player().name}'s turn")
        return TurnResult(True, self.state, messages=messages)

    def _save(self, args: list[str]) -> TurnResult:
        if len(args) != 1:
            return TurnResult(False, self.state, errors=["[INVALID_CHOICE] Usage: save <path>"])
        try:
            path = save_state(self.game, args[0])
        except OSError as e:
            logger.warning("Could not save to %s: %s", args[0], e)
            return TurnResult(False, self.state, errors=[f"[SAVE_FAILED] {e}"])
        return TurnResult(True, self.state, messages=[f"Game saved to {path}"])

    # =========================================================================
    # Rendering
    # =========================================================================

    def render_shop(self) -> str:
        game = self.game
        customers = game.get_customers()
        player = game.get_current_player()

        lines = ["", "Customers waiting:"]
        for slot, order in enumerate(customers.active_customers, start=1):
            if order is None:
                lines.append(f"  {slot}. (empty)")
                continue
            text = f"  {slot}. {order.name} [{order.status.value}]: {order.recipe_description}"
            if order.garnish:
                text += f" + garnish {order.garnish_description}"
            lines.append(text)
        lines.append(f"Customers still to come: {len(customers.customer_deck)}")
        lines.append("Pantry: " + ", ".join(card.name for card in game.get_pantry()))
        lines.append(
            f"{player.name}'s hand: {player.hand_description() or '(empty)'}"
            f" [{game.get_actions_remaining()}/{game.get_actions_permitted()} actions left]"
        )
        return "\n".join(lines)

    @staticmethod
    def render_menu(actions: list[Action]) -> str:
        lines = [f"  {i}. {action.describe()}" for i, action in enumerate(actions, start=1)]
        lines.append("  (or 'save <path>', 'quit')")
        return "\n".join(lines)

    def render_service_record(self) -> str:
        record = self.game.get_customer_service_record()
        lines = ["The bakery is closed. Customer service record:"]
        lines.extend(f"  {status.value}: {count}" for status, count in record.items())
        return "\n".join(lines)

