"""
Tests for the CSV deck loader.
"""

import logging

import pytest

from ..bakery import decks
from ..engine_core.cards import Card, CardKind, HELPFUL_DUCK
from ..engine_core.errors import ResourceNotFoundError


class TestIngredientFile:
    """Tests for read_ingredient_file."""

    def test_counts_expand(self, deck_dir):
        cards = decks.read_ingredient_file(deck_dir / "ingredients.csv")

        assert len(cards) == 22
        assert cards.count(Card.ingredient("Flour")) == 10
        assert cards[:10] == [Card.ingredient("Flour")] * 10

    def test_duck_glyph_maps_to_wildcard(self, deck_dir):
        cards = decks.read_ingredient_file(deck_dir / "ingredients.csv")
        assert cards.count(HELPFUL_DUCK) == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(ResourceNotFoundError):
            decks.read_ingredient_file(tmp_path / "missing.csv")

    def test_missing_file_is_file_not_found(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            decks.read_ingredient_file(tmp_path / "missing.csv")

    def test_bad_rows_skipped_with_warning(self, tmp_path, caplog):
        path = tmp_path / "ingredients.csv"
        path.write_text(
            "name,count\n"
            "Flour,2\n"
            "Sugar,lots\n"
            "Eggs,0\n"
            "Butter,1,extra\n"
            "\n"
            "Fruit,1\n",
            encoding="utf-8",
        )

        with caplog.at_level(logging.WARNING):
            cards = decks.read_ingredient_file(path)

        assert [c.name for c in cards] == ["Flour", "Flour", "Fruit"]
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 3
        assert "ingredients.csv" in warnings[0].getMessage()


class TestLayerFile:
    """Tests for read_layer_file."""

    def test_each_layer_four_times(self, deck_dir):
        layers = decks.read_layer_file(deck_dir / "layers.csv")

        assert len(layers) == 2 * decks.LAYER_COPIES
        shortbread = layers[0]
        assert shortbread.kind == CardKind.LAYER
        assert shortbread.recipe == (Card.ingredient("Flour"), Card.ingredient("Sugar"))

    def test_layer_without_recipe_skipped(self, tmp_path, caplog):
        path = tmp_path / "layers.csv"
        path.write_text("name,recipe\nEmpty, ; \nJam,Fruit;Sugar\n", encoding="utf-8")

        with caplog.at_level(logging.WARNING):
            layers = decks.read_layer_file(path)

        assert {layer.name for layer in layers} == {"Jam"}
        assert "Skipping invalid row 2" in caplog.text


class TestCustomerFile:
    """Tests for read_customer_file."""

    def test_orders_resolve_layers(self, deck_dir):
        layers = decks.read_layer_file(deck_dir / "layers.csv")
        orders = decks.read_customer_file(deck_dir / "customers.csv", layers)

        assert len(orders) == 7
        biscuits = orders[2]
        assert biscuits.name == "Biscuits"
        assert biscuits.recipe[0].is_layer
        assert biscuits.recipe[0].recipe_description == "Flour, Sugar"

    def test_levels_and_garnish(self, deck_dir):
        orders = decks.read_customer_file(deck_dir / "customers.csv", [])

        assert [o.level for o in orders] == [1, 1, 1, 1, 2, 2, 3]
        assert orders[0].garnish == ()
        assert orders[1].garnish == (Card.ingredient("Sugar"),)

    def test_unknown_names_are_ingredients(self, deck_dir):
        orders = decks.read_customer_file(deck_dir / "customers.csv", [])
        assert orders[2].recipe == (Card.ingredient("Shortbread"),)
        assert not orders[2].recipe[0].is_layer

    def test_bad_level_skipped(self, tmp_path, caplog):
        path = tmp_path / "customers.csv"
        path.write_text(
            "level,name,recipe,garnish\n"
            "4,Too fancy,Flour\n"
            "1,Plain,Flour\n",
            encoding="utf-8",
        )

        with caplog.at_level(logging.WARNING):
            orders = decks.read_customer_file(path, [])

        assert [o.name for o in orders] == ["Plain"]
        assert "Skipping invalid row 2" in caplog.text


class TestBundledDecks:
    """The decks shipped with the package load cleanly."""

    def test_bundled_files_exist(self):
        for filename in (decks.INGREDIENTS_FILE, decks.LAYERS_FILE, decks.CUSTOMERS_FILE):
            assert decks.deck_path(filename).is_file()

    def test_bundled_customers_reference_layers(self, caplog):
        layers = decks.read_layer_file(decks.deck_path(decks.LAYERS_FILE))

        with caplog.at_level(logging.WARNING):
            orders = decks.read_customer_file(decks.deck_path(decks.CUSTOMERS_FILE), layers)

        assert caplog.records == []
        assert any(card.is_layer for order in orders for card in order.recipe)
