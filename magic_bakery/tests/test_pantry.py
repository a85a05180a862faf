"""
Tests for the pantry supply.

Tests:
- Drawing from the top of the deck
- Reshuffling the discard pile into an empty deck
- Refreshing the face-up display
- Determinism under a fixed seed
"""

import logging
import random

import pytest

from ..engine_core.cards import Card
from ..engine_core.errors import EmptyPantryError, WrongIngredientsError
from ..engine_core.pantry import DISPLAY_SIZE, Pantry

NAMES = ["Butter", "Eggs", "Flour", "Sugar", "Fruit", "Chocolate", "Milk"]
CARDS = [Card.ingredient(name) for name in NAMES]


class TestDeck:
    """Tests for deck draws."""

    def test_draw_takes_top_card(self, rng):
        pantry = Pantry(rng, deck=CARDS[:3])
        assert pantry.draw_from_deck() == CARDS[2]
        assert pantry.deck == tuple(CARDS[:2])

    def test_deal_from_bottom(self, rng):
        pantry = Pantry(rng, deck=CARDS[:3])
        assert pantry.deal_from_bottom() == CARDS[0]
        assert pantry.deck == tuple(CARDS[1:3])

    def test_empty_deck_reshuffles_discard(self, rng, caplog):
        pantry = Pantry(rng, discard=CARDS[:4])

        with caplog.at_level(logging.INFO):
            card = pantry.draw_from_deck()

        assert card in CARDS[:4]
        assert pantry.discard_pile == ()
        assert sorted(pantry.deck + (card,)) == sorted(CARDS[:4])
        assert "reshuffling" in caplog.text

    def test_no_cards_anywhere(self, rng):
        with pytest.raises(EmptyPantryError):
            Pantry(rng).draw_from_deck()

    def test_deal_from_empty_deck(self, rng):
        with pytest.raises(EmptyPantryError):
            Pantry(rng, discard=CARDS[:1]).deal_from_bottom()

    def test_supply_size(self, rng):
        pantry = Pantry(rng, deck=CARDS[:2], discard=CARDS[2:5])
        assert pantry.supply_size == 5
        assert pantry.can_draw(5)
        assert not pantry.can_draw(6)

    def test_reshuffle_is_deterministic(self):
        a = Pantry(random.Random(3), discard=CARDS)
        b = Pantry(random.Random(3), discard=CARDS)
        assert [a.draw_from_deck() for _ in CARDS] == [b.draw_from_deck() for _ in CARDS]


class TestDisplay:
    """Tests for the face-up display."""

    def test_find_is_case_insensitive(self, rng):
        pantry = Pantry(rng, display=CARDS[:2])
        assert pantry.find_in_display("  eGGs ") == CARDS[1]
        assert pantry.find_in_display("Sugar") is None

    def test_take_missing_card_fails(self, rng):
        pantry = Pantry(rng, display=CARDS[:2])
        with pytest.raises(WrongIngredientsError):
            pantry.take_from_display(CARDS[3])

    def test_replenish_draws_onto_display(self, rng):
        pantry = Pantry(rng, deck=CARDS[:2], display=CARDS[2:4])
        card = pantry.replenish()
        assert card == CARDS[1]
        assert pantry.display == (CARDS[2], CARDS[3], CARDS[1])


class TestRefresh:
    """Tests for refreshing the whole display."""

    def test_refresh_deals_five_new_cards(self, rng):
        old, new = CARDS[:5], [Card.ingredient(f"Card {i}") for i in range(5)]
        pantry = Pantry(rng, deck=new, display=old)

        dealt = pantry.refresh()

        assert dealt == list(reversed(new))
        assert pantry.display == tuple(reversed(new))
        assert pantry.discard_pile == tuple(old)
        assert pantry.deck == ()

    def test_refresh_can_reuse_old_display(self, rng):
        """With nothing else left, the old display is reshuffled back in."""
        pantry = Pantry(rng, display=CARDS[:5])

        pantry.refresh()

        assert sorted(pantry.display) == sorted(CARDS[:5])
        assert len(pantry.display) == DISPLAY_SIZE

    def test_refresh_needs_five_cards(self, rng):
        pantry = Pantry(rng, deck=CARDS[:1], display=CARDS[1:3], discard=CARDS[3:4])

        with pytest.raises(EmptyPantryError):
            pantry.refresh()

        assert pantry.deck == (CARDS[0],)
        assert pantry.display == tuple(CARDS[1:3])
        assert pantry.discard_pile == (CARDS[3],)
