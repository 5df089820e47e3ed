from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from memorygame.engine.types import ConfigError
from memorygame.paths import get_paths
from memorygame.services.content import ContentError, ContentService
from memorygame.services.telemetry import TelemetryService

from .app import App, GameContext
from .render import clear_console


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="memorygame")
    parser.add_argument("--settings", type=Path, default=None, help="JSON settings file")
    parser.add_argument("--players", type=int, choices=(0, 1, 2), default=None)
    parser.add_argument("--size", choices=("small", "medium", "large"), default=None)
    parser.add_argument("--difficulty", type=int, choices=(1, 2, 3), default=None)
    parser.add_argument("--match", choices=("full", "symbol", "color"), default=None)
    parser.add_argument("--score", choices=("simple", "penalty", "time"), default=None)
    parser.add_argument("--delay", type=float, default=None, help="computer think delay (seconds)")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--max-turns", type=int, default=None)
    parser.add_argument("--no-clear", action="store_true")
    args = parser.parse_args(argv)

    paths = get_paths()
    content = ContentService(data_dir=paths.data_dir, schema_dir=paths.schema_dir)
    telemetry = TelemetryService(paths.userdata_dir / "telemetry.jsonl")

    try:
        deck = content.load_deck()
        settings = content.load_settings(args.settings)
    except ContentError as e:
        print(e, file=sys.stderr)
        return 2

    overrides = {
        "human_players": args.players,
        "board_size": args.size,
        "difficulty": args.difficulty,
        "match_rule": args.match,
        "score_rule": args.score,
        "think_delay": args.delay,
        "seed": args.seed,
        "max_turns": args.max_turns,
    }
    settings = replace(settings, **{k: v for k, v in overrides.items() if v is not None})

    ctx = GameContext(
        paths=paths,
        content=content,
        telemetry=telemetry,
        clear=None if args.no_clear else clear_console,
        deck=deck,
        settings=settings,
    )
    # command-line setup skips the prompts
    interactive = args.players is None and args.settings is None
    try:
        return App(ctx, interactive_setup=interactive).run()
    except ConfigError as e:
        print(f"Failed to set up game: {e}", file=sys.stderr)
        return 2
    except (KeyboardInterrupt, EOFError):
        print("\nThank you for playing!")
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
