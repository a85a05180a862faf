"""
Magic Bakery CLI - Command-line interface for the game.

Usage:
    magic-bakery play [--seed N] [--data-dir DIR] [--players A B ...] [--load FILE]
    magic-bakery show-decks [--data-dir DIR]
"""

import argparse
import logging
import sys

from .config import get_settings


def main(argv=None):
    """Main CLI entry point."""
    settings = get_settings()

    parser = argparse.ArgumentParser(
        description="Magic Bakery - a cooperative baking card game",
        prog="magic-bakery",
    )
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a game in the console")
    play_parser.add_argument("--seed", type=int, default=settings.seed, help="Random seed")
    play_parser.add_argument("--data-dir", default=settings.data_dir, help="Directory of deck CSV files")
    play_parser.add_argument("--players", nargs="+", help="Player names (2-5)")
    play_parser.add_argument("--load", help="Resume a saved game")

    # Show decks command
    decks_parser = subparsers.add_parser("show-decks", help="List the loaded decks")
    decks_parser.add_argument("--data-dir", default=settings.data_dir, help="Directory of deck CSV files")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        return cmd_play(args)
    elif args.command == "show-decks":
        return cmd_show_decks(args)
    else:
        parser.print_help()
        return 1


def cmd_play(args):
    """Start or resume a console game."""
    from .bakery import MagicBakery, load_state
    from .bakery.decks import CUSTOMERS_FILE, deck_path
    from .engine_core.errors import BakeryError
    from .session import GameLoop, LoopState

    try:
        if args.load:
            game = load_state(args.load)
        else:
            game = MagicBakery.with_bundled_decks(args.seed, args.data_dir)
        loop = GameLoop(game, deck_path(CUSTOMERS_FILE, args.data_dir))
        state = loop.run(args.players)
    except BakeryError as e:
        print(f"Error [{e.error_code}]: {e}")
        return 1

    return 0 if state in (LoopState.GAME_OVER, LoopState.QUIT) else 1


def cmd_show_decks(args):
    """List the ingredient, layer and customer decks."""
    from collections import Counter

    from .bakery.decks import (
        CUSTOMERS_FILE, INGREDIENTS_FILE, LAYERS_FILE, deck_path,
        read_customer_file, read_ingredient_file, read_layer_file,
    )
    from .engine_core.errors import BakeryError

    try:
        ingredients = read_ingredient_file(deck_path(INGREDIENTS_FILE, args.data_dir))
        layers = read_layer_file(deck_path(LAYERS_FILE, args.data_dir))
        customers = read_customer_file(deck_path(CUSTOMERS_FILE, args.data_dir), layers)
    except BakeryError as e:
        print(f"Error [{e.error_code}]: {e}")
        return 1

    print(f"Ingredients ({len(ingredients)} cards):")
    for card, count in Counter(ingredients).items():
        print(f"  {card.name} x{count}")

    print(f"\nLayers ({len(layers)} cards):")
    for layer, count in Counter(layers).items():
        print(f"  {layer.name} x{count}: {layer.recipe_description}")

    print(f"\nCustomers ({len(customers)} orders):")
    for order in customers:
        line = f"  L{order.level} {order.name}: {order.recipe_description}"
        if order.garnish:
            line += f" + {order.garnish_description}"
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
