from __future__ import annotations

import json
import shutil
from pathlib import Path

import pytest

from memorygame.paths import get_paths
from memorygame.services.content import ContentError, ContentService
from memorygame.services.settings import GameSettings


def _content_copy(tmp_path: Path) -> ContentService:
    paths = get_paths()
    data_dir = tmp_path / "data"
    shutil.copytree(paths.data_dir, data_dir)
    return ContentService(data_dir, data_dir / "schemas")


def test_content_schemas_validate() -> None:
    paths = get_paths()
    content = ContentService(paths.data_dir, paths.schema_dir)
    content.validate_all()


def test_bundled_deck_is_a_standard_deck() -> None:
    paths = get_paths()
    deck = ContentService(paths.data_dir, paths.schema_dir).load_deck()
    assert deck.columns == 13
    assert len(deck.faces()) == 52
    assert {s.color for s in deck.suits} == {"Black", "Red"}


def test_malformed_deck_is_rejected(tmp_path: Path) -> None:
    content = _content_copy(tmp_path)
    deck_path = tmp_path / "data" / "deck.json"
    deck_path.write_text(json.dumps({"columns": 0, "ranks": [], "suits": [{"symbol": "♠", "color": "Green"}]}), encoding="utf-8")
    with pytest.raises(ContentError) as exc:
        content.load_deck()
    assert "Schema validation failed" in str(exc.value)


def test_broken_json_is_rejected(tmp_path: Path) -> None:
    content = _content_copy(tmp_path)
    (tmp_path / "data" / "deck.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(ContentError):
        content.load_deck()


def test_missing_settings_file(tmp_path: Path) -> None:
    content = _content_copy(tmp_path)
    with pytest.raises(ContentError):
        content.load_settings(tmp_path / "nope.json")


def test_settings_file_overrides_defaults(tmp_path: Path) -> None:
    content = _content_copy(tmp_path)
    path = tmp_path / "mine.json"
    path.write_text(json.dumps({"human_players": 2, "score_rule": "penalty", "seed": 5}), encoding="utf-8")
    settings = content.load_settings(path)
    assert settings.human_players == 2
    assert settings.score_rule == "penalty"
    assert settings.seed == 5
    assert settings.board_size == "large"


def test_settings_outside_schema_are_rejected(tmp_path: Path) -> None:
    content = _content_copy(tmp_path)
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"human_players": 3, "match_rule": "rank"}), encoding="utf-8")
    with pytest.raises(ContentError):
        content.load_settings(path)


def test_settings_round_trip_to_config() -> None:
    settings = GameSettings.from_dict({"board_size": "medium", "difficulty": 3, "think_delay": 0})
    assert settings.think_delay == 0.0
    cfg = settings.to_config()
    assert cfg.board_size == "medium"
    assert cfg.difficulty == 3
    assert GameSettings.from_dict(settings.to_dict()) == settings


def test_computer_only_settings_always_have_a_turn_limit() -> None:
    assert GameSettings(human_players=0, board_size="small").turn_limit() == 13 * 200
    assert GameSettings(human_players=0, board_size="large").turn_limit() == 52 * 200
    assert GameSettings(human_players=0, max_turns=40).turn_limit() == 40
    assert GameSettings(human_players=1).turn_limit() is None
    assert GameSettings(human_players=2, max_turns=9).turn_limit() == 9
