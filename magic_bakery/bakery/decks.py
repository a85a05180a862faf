"""
Deck Loader - Reads the ingredient, layer and customer decks from CSV.

File formats (first row is a header and is skipped):

    ingredients.csv   name,count
    layers.csv        name,recipe            recipe is ';'-separated
    customers.csv     level,name,recipe[,garnish]

Every row is validated through a pydantic record model. A malformed row
is skipped with a warning; a missing file is fatal.
"""

from __future__ import annotations
import csv
import logging
from pathlib import Path
from typing import Iterable, Iterator, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from ..engine_core.cards import Card, HELPFUL_DUCK, is_wildcard_name
from ..engine_core.customers import CustomerOrder
from ..engine_core.errors import ResourceNotFoundError

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / "data"
INGREDIENTS_FILE = "ingredients.csv"
LAYERS_FILE = "layers.csv"
CUSTOMERS_FILE = "customers.csv"

# Each layer in the layer file is instantiated this many times
LAYER_COPIES = 4


def _split_items(value):
    if isinstance(value, str):
        return [item.strip() for item in value.split(";") if item.strip()]
    return value


# =============================================================================
# Record Models
# =============================================================================

class IngredientRecord(BaseModel):
    """One row of the ingredient file."""
    name: str = Field(min_length=1)
    count: int = Field(ge=1)


class LayerRecord(BaseModel):
    """One row of the layer file."""
    name: str = Field(min_length=1)
    recipe: list[str] = Field(min_length=1)

    @field_validator("recipe", mode="before")
    @classmethod
    def split_recipe(cls, value):
        return _split_items(value)


class CustomerRecord(BaseModel):
    """One row of the customer file."""
    level: int = Field(ge=1, le=3)
    name: str = Field(min_length=1)
    recipe: list[str] = Field(min_length=1)
    garnish: list[str] = Field(default_factory=list)

    @field_validator("recipe", "garnish", mode="before")
    @classmethod
    def split_items(cls, value):
        return _split_items(value)


# =============================================================================
# Readers
# =============================================================================

def deck_path(filename: str, data_dir: str | Path | None = None) -> Path:
    """Path of a deck file inside data_dir (the bundled decks by default)."""
    return Path(data_dir or DATA_DIR) / filename


def _read_rows(path: str | Path, columns: tuple[str, ...], required: int) -> Iterator[dict]:
    """
    Yield each data row of a CSV file as a dict keyed by columns.

    Rows with the wrong number of cells are skipped with a warning.
    """
    path = Path(path)
    if not path.is_file():
        raise ResourceNotFoundError(f"Deck file not found: {path}")

    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.reader(f)
        next(reader, None)  # header
        for row in reader:
            cells = [cell.strip() for cell in row]
            if not any(cells):
                continue
            if not required <= len(cells) <= len(columns):
                logger.warning(
                    "Skipping malformed row %d in %s: expected %d-%d fields, got %d",
                    reader.line_num, path, required, len(columns), len(cells),
                )
                continue
            record = dict(zip(columns, cells))
            record["_line"] = reader.line_num
            yield record


def _validated(model: type[BaseModel], record: dict, path: str | Path) -> Optional[BaseModel]:
    line = record.pop("_line")
    try:
        return model.model_validate(record)
    except ValidationError as e:
        logger.warning(
            "Skipping invalid row %d in %s: %s",
            line, path, "; ".join(err["msg"] for err in e.errors()),
        )
        return None


def _card_for(name: str, layers_by_name: dict[str, Card] | None = None) -> Card:
    if is_wildcard_name(name):
        return HELPFUL_DUCK
    if layers_by_name and name in layers_by_name:
        return layers_by_name[name]
    return Card.ingredient(name)


def read_ingredient_file(path: str | Path) -> list[Card]:
    """All ingredient cards, each repeated by its count, in file order."""
    cards: list[Card] = []
    for record in _read_rows(path, ("name", "count"), required=2):
        parsed = _validated(IngredientRecord, record, path)
        if parsed is None:
            continue
        cards.extend([_card_for(parsed.name)] * parsed.count)
    logger.debug("Loaded %d ingredient cards from %s", len(cards), path)
    return cards


def read_layer_file(path: str | Path) -> list[Card]:
    """The layer catalog: every layer LAYER_COPIES times, in file order."""
    layers: list[Card] = []
    for record in _read_rows(path, ("name", "recipe"), required=2):
        parsed = _validated(LayerRecord, record, path)
        if parsed is None:
            continue
        layer = Card.layer(parsed.name, [_card_for(item) for item in parsed.recipe])
        layers.extend([layer] * LAYER_COPIES)
    logger.debug("Loaded %d layer cards from %s", len(layers), path)
    return layers


def read_customer_file(path: str | Path, layers: Iterable[Card]) -> list[CustomerOrder]:
    """
    All customer orders in file order.

    Recipe and garnish names that match a layer in the catalog become
    that layer; everything else is a base ingredient.
    """
    layers_by_name = {layer.name: layer for layer in layers}
    orders: list[CustomerOrder] = []
    for record in _read_rows(path, ("level", "name", "recipe", "garnish"), required=3):
        parsed = _validated(CustomerRecord, record, path)
        if parsed is None:
            continue
        orders.append(CustomerOrder(
            name=parsed.name,
            recipe=tuple(_card_for(item, layers_by_name) for item in parsed.recipe),
            garnish=tuple(_card_for(item, layers_by_name) for item in parsed.garnish),
            level=parsed.level,
        ))
    logger.debug("Loaded %d customer orders from %s", len(orders), path)
    return orders
