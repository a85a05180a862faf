"""
Pytest fixtures for Magic Bakery tests.
"""

import random

import pytest

from ..bakery.decks import CUSTOMERS_FILE, deck_path
from ..bakery.game import MagicBakery
from ..engine_core.cards import Card
from ..engine_core.customers import CustomerOrder

FLOUR = Card.ingredient("Flour")
SUGAR = Card.ingredient("Sugar")
BUTTER = Card.ingredient("Butter")


@pytest.fixture
def rng() -> random.Random:
    """A seeded Random for pantry and deck tests."""
    return random.Random(42)


@pytest.fixture
def customer_file():
    """Path of the bundled customer deck."""
    return deck_path(CUSTOMERS_FILE)


@pytest.fixture
def bundled_game() -> MagicBakery:
    """A game in SETUP phase over the bundled decks."""
    return MagicBakery.with_bundled_decks(seed=10)


@pytest.fixture
def two_player_game(bundled_game: MagicBakery, customer_file) -> MagicBakery:
    """A started 2-player game over the bundled decks."""
    bundled_game.start_game(["Ann", "Bo"], customer_file)
    return bundled_game


@pytest.fixture
def simple_orders() -> list[CustomerOrder]:
    """
    Enough orders for a 2-player customer deck (4 x L1, 2 x L2, 1 x L3).

    Every order wants Flour and Sugar, garnished with Butter.
    """
    levels = [1, 1, 1, 1, 2, 2, 3]
    return [
        CustomerOrder(
            name=f"Customer {i}",
            recipe=(FLOUR, SUGAR),
            garnish=(BUTTER,),
            level=level,
        )
        for i, level in enumerate(levels, start=1)
    ]


@pytest.fixture
def scripted_game(bundled_game: MagicBakery, simple_orders) -> MagicBakery:
    """A started 2-player game whose customers all want Flour and Sugar."""
    bundled_game.start_game(["Ann", "Bo"], simple_orders)
    return bundled_game


@pytest.fixture
def deck_dir(tmp_path):
    """A directory holding a small, valid set of deck files."""
    (tmp_path / "ingredients.csv").write_text(
        "name,count\n"
        "Flour,10\n"
        "Sugar,10\n"
        "Helpful duck 𓅭,2\n",
        encoding="utf-8",
    )
    (tmp_path / "layers.csv").write_text(
        "name,recipe\n"
        "Shortbread,Flour;Sugar\n"
        "Double dough,Flour;Flour\n",
        encoding="utf-8",
    )
    (tmp_path / "customers.csv").write_text(
        "level,name,recipe,garnish\n"
        "1,Plain,Flour\n"
        "1,Sweet,Sugar,Sugar\n"
        "1,Biscuits,Shortbread\n"
        "1,Crumbs,Flour;Sugar\n"
        "2,Tea time,Shortbread;Sugar,Flour\n"
        "2,Baker's dozen,Flour;Flour;Flour\n"
        "3,Grand,Shortbread;Shortbread,Shortbread\n",
        encoding="utf-8",
    )
    return tmp_path
