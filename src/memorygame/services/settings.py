from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from memorygame.engine.game import GameConfig, pairs_for

# turn cap per pair for games without human seats
COMPUTER_TURNS_PER_PAIR = 200


@dataclass
class GameSettings:
    human_players: int = 1
    board_size: str = "large"
    difficulty: int = 1
    match_rule: str = "full"
    score_rule: str = "simple"
    think_delay: float = 1.0
    max_turns: int | None = None
    seed: int | None = None

    @staticmethod
    def from_dict(d: Mapping[str, object]) -> "GameSettings":
        defaults = GameSettings()
        humans = d.get("human_players", defaults.human_players)
        difficulty = d.get("difficulty", defaults.difficulty)
        delay = d.get("think_delay", defaults.think_delay)
        max_turns = d.get("max_turns")
        seed = d.get("seed")
        return GameSettings(
            human_players=humans if isinstance(humans, int) else defaults.human_players,
            board_size=str(d.get("board_size", defaults.board_size)),
            difficulty=difficulty if isinstance(difficulty, int) else defaults.difficulty,
            match_rule=str(d.get("match_rule", defaults.match_rule)),
            score_rule=str(d.get("score_rule", defaults.score_rule)),
            think_delay=float(delay) if isinstance(delay, (int, float)) else defaults.think_delay,
            max_turns=max_turns if isinstance(max_turns, int) else None,
            seed=seed if isinstance(seed, int) else None,
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "human_players": self.human_players,
            "board_size": self.board_size,
            "difficulty": self.difficulty,
            "match_rule": self.match_rule,
            "score_rule": self.score_rule,
            "think_delay": self.think_delay,
            "max_turns": self.max_turns,
            "seed": self.seed,
        }

    def turn_limit(self) -> int | None:
        """Turn cap for one session; a game without human seats always gets one."""
        if self.max_turns is not None or self.human_players > 0:
            return self.max_turns
        return pairs_for(self.board_size) * COMPUTER_TURNS_PER_PAIR

    def to_config(self) -> GameConfig:
        return GameConfig(
            human_players=self.human_players,
            board_size=self.board_size,
            difficulty=self.difficulty,
            match_rule=self.match_rule,
            score_rule=self.score_rule,
            think_delay=self.think_delay,
        )
