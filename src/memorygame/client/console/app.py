from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Callable, Optional

from memorygame.engine.game import Game, new_game
from memorygame.engine.mediator import GameMediator
from memorygame.engine.types import DeckTemplate
from memorygame.paths import Paths
from memorygame.services.content import ContentService
from memorygame.services.settings import GameSettings
from memorygame.services.telemetry import TelemetryService

from .input import ConsoleMoveSource, ask_play_again, prompt_for_setup
from .render import INSTRUCTIONS, ConsoleView


@dataclass
class GameContext:
    paths: Paths
    content: ContentService
    telemetry: TelemetryService
    read: Callable[[str], str] = input
    out: Callable[[str], None] = print
    clear: Optional[Callable[[], None]] = None

    # Loaded at boot
    deck: Optional[DeckTemplate] = None
    settings: Optional[GameSettings] = None


class GameSession:
    """One game from setup to results. The driver owns it; nothing is global."""

    def __init__(self, ctx: GameContext, settings: GameSettings) -> None:
        self.ctx = ctx
        self.settings = settings
        self.game: Game | None = None

    def setup(self) -> Game:
        ctx = self.ctx
        mediator = GameMediator()
        ctx.telemetry.session_id = uuid.uuid4().hex
        mediator.subscribe(ctx.telemetry.on_event)

        source = ConsoleMoveSource(read=ctx.read, out=ctx.out)
        game = new_game(
            self.settings.to_config(),
            seed=self.settings.seed,
            source=source,
            deck=ctx.deck or ctx.content.load_deck(),
            mediator=mediator,
        )
        pause = None
        if self.settings.human_players > 0:
            pause = lambda: ctx.read("Press Enter to continue...")  # noqa: E731
        view = ConsoleView(game=game, out=ctx.out, clear=ctx.clear, pause=pause)
        mediator.subscribe(view.on_event)
        ctx.telemetry.log("GAME_SETUP", self.settings.to_dict())
        self.game = game
        return game

    def play(self) -> Game:
        game = self.game or self.setup()
        game.start_game()
        game.state.run(max_turns=self.settings.turn_limit())
        return game

    def reset(self) -> None:
        if self.game is not None:
            self.game.reset_game()
        self.game = None


class App:
    def __init__(self, ctx: GameContext, interactive_setup: bool = True) -> None:
        self.ctx = ctx
        self.interactive_setup = interactive_setup
        self.running = True

    def run(self) -> int:
        ctx = self.ctx
        base = ctx.settings or GameSettings()
        ctx.out("Welcome to the Memory Card Game!")
        ctx.out(INSTRUCTIONS)
        while self.running:
            settings = prompt_for_setup(ctx.read, ctx.out, base) if self.interactive_setup else base
            session = GameSession(ctx, settings)
            game = session.play()
            ended_by_player = game.ended
            session.reset()
            if ended_by_player or not ask_play_again(ctx.read):
                self.running = False
        ctx.out("Thank you for playing!")
        return 0
