#!/usr/bin/env python3

import argparse
import sys
from dataclasses import replace
from typing import Optional

from terminal_royale.clients.fixtures import FixtureLoadError
from terminal_royale.core.config import load_battle_config
from terminal_royale.core.renderer import RendererConfig
from terminal_royale.renderers.terminal_renderer import TerminalRenderer
from terminal_royale.game.game import Game


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play Clash Royale style tower battles in the terminal")
    parser.add_argument("--config", help="Path to the battle YAML config (default: assets/config/battle.yaml)")
    parser.add_argument("--fixture", help="Path to the mock players JSON used in test mode")
    parser.add_argument("--seed", type=int, help="Seed for reproducible battles")
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Skip the mode prompt and play in test mode against mock players",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable ANSI colors and screen clearing")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config = load_battle_config(args.config)
    if args.fixture:
        config = replace(config, fixture_path=args.fixture)
    if args.seed is not None:
        config = replace(config, seed=args.seed)

    renderer = TerminalRenderer(RendererConfig(use_color=not args.no_color))
    game = Game(renderer, config=config, offline=True if args.offline else None)

    try:
        game.run()
    except FixtureLoadError as e:
        print(f"\n{e}. Exiting program.")
        return 1
    except KeyboardInterrupt:
        print("\n\nGame interrupted by user")
    except Exception as e:
        print(f"\n\nError: {e}")
        raise

    return 0


if __name__ == "__main__":
    sys.exit(main())
