"""
Tests for the reducer.

Tests:
- Action application through the facade
- Failures carry the engine's error code
- Action history
"""

from ..engine_core.action import Action, ActionType
from ..engine_core.cards import Card
from ..engine_core.reducer import Reducer, apply_action

FLOUR = Card.ingredient("Flour")
SUGAR = Card.ingredient("Sugar")
BUTTER = Card.ingredient("Butter")


def first_order(game):
    return next(o for o in game.get_customers().active_customers if o is not None)


class TestApply:
    """Tests for successful actions."""

    def test_draw(self, two_player_game):
        game = two_player_game
        card = game.get_pantry()[0]

        result = apply_action(game, Action.draw(card))

        assert result.success
        assert result.state_changes == [f"Ann took {card} from the pantry"]
        assert game.get_actions_remaining() == 2
        assert game.action_history == [Action.draw(card)]

    def test_pass(self, two_player_game):
        game = two_player_game
        card = game.get_current_player().hand[0]

        result = apply_action(game, Action.pass_card(card, "Bo"))

        assert result.success
        assert len(game.get_players()[1].hand) == 4

    def test_bake(self, two_player_game):
        game = two_player_game
        game.get_current_player().hand[:] = [Card.ingredient("Fruit"), SUGAR]
        jam = next(layer for layer in game.get_layers() if layer.name == "Jam")

        result = apply_action(game, Action.bake(jam))

        assert result.success
        assert game.get_current_player().hand == [jam]

    def test_fulfil_reports_used_cards(self, scripted_game):
        game = scripted_game
        game.get_current_player().hand[:] = [FLOUR, SUGAR, BUTTER]
        order = first_order(game)

        result = apply_action(game, Action.fulfil(order, garnish=True))

        assert result.success
        assert result.used_cards == [BUTTER, FLOUR, SUGAR]
        assert "garnished" in result.state_changes[0]

    def test_refresh(self, two_player_game):
        result = apply_action(two_player_game, Action.refresh())
        assert result.success
        assert result.state_changes == ["Ann refreshed the pantry"]

    def test_end_turn_reports_new_round(self, two_player_game):
        game = two_player_game
        reducer = Reducer()

        first = reducer.apply(game, Action.end_turn())
        second = reducer.apply(game, Action.end_turn())

        assert first.state_changes == ["Ann ended their turn"]
        assert second.state_changes == ["Bo ended their turn", "A new round begins"]
        assert len(game.action_history) == 2


class TestFailures:
    """Engine errors become failed results."""

    def test_wrong_ingredients(self, two_player_game):
        game = two_player_game
        game.get_current_player().hand[:] = [FLOUR]

        result = apply_action(game, Action.pass_card(SUGAR, "Bo"))

        assert not result.success
        assert result.error_code == "WRONG_INGREDIENTS"
        assert game.action_history == []
        assert game.get_actions_remaining() == 3

    def test_too_many_actions(self, two_player_game):
        game = two_player_game
        for _ in range(3):
            assert apply_action(game, Action.draw(game.get_pantry()[0])).success

        result = apply_action(game, Action.draw(game.get_pantry()[0]))

        assert not result.success
        assert result.error_code == "TOO_MANY_ACTIONS"

    def test_invalid_player(self, two_player_game):
        card = two_player_game.get_current_player().hand[0]
        result = apply_action(two_player_game, Action.pass_card(card, "Nobody"))
        assert result.error_code == "INVALID_PLAYER"

    def test_game_not_started(self, bundled_game):
        result = apply_action(bundled_game, Action.end_turn())
        assert not result.success
        assert result.error_code == "INVALID_PHASE"

    def test_unknown_action_type(self, two_player_game):
        action = Action.end_turn()
        action.action_type = "shout"

        result = apply_action(two_player_game, action)

        assert result.error_code == "NO_HANDLER"


class TestActionDescriptions:
    """Menu text for actions."""

    def test_describe(self):
        sponge = Card.layer("Sponge", [FLOUR, SUGAR])
        assert Action.draw(FLOUR).describe() == "Draw Flour from the pantry"
        assert Action.pass_card(FLOUR, "Bo").describe() == "Pass Flour to Bo"
        assert Action.bake(sponge).describe() == "Bake Sponge (Flour, Sugar)"
        assert Action.end_turn().describe() == "End Turn"
        assert ActionType.REFRESH_PANTRY.label == "Refresh Pantry"
