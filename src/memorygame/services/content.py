from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping

from jsonschema import Draft202012Validator

from memorygame.engine.types import DeckTemplate, SuitDefinition
from memorygame.services.settings import GameSettings


class ContentError(RuntimeError):
    pass


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ContentError(f"Missing content file: {path}") from e
    except json.JSONDecodeError as e:
        raise ContentError(f"Invalid JSON in {path}: {e}") from e


def validate_json(instance: object, schema: object, *, context: str) -> None:
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: e.path)
    if errors:
        lines = [f"Schema validation failed for {context}:"]
        for err in errors[:10]:
            loc = "/".join(str(p) for p in err.absolute_path)
            lines.append(f"- {loc}: {err.message}")
        raise ContentError("\n".join(lines))


def _require_str(obj: Mapping[str, object], key: str) -> str:
    v = obj.get(key)
    if not isinstance(v, str):
        raise ContentError(f"Expected string for {key}")
    return v


def parse_deck(raw: object) -> DeckTemplate:
    if not isinstance(raw, dict):
        raise ContentError("deck.json must be an object")
    ranks = raw.get("ranks")
    suits_raw = raw.get("suits")
    columns = raw.get("columns", 13)
    if not isinstance(ranks, list) or not isinstance(suits_raw, list):
        raise ContentError("deck.json needs ranks and suits lists")
    if not isinstance(columns, int) or columns <= 0:
        raise ContentError("columns must be a positive int")

    suits: list[SuitDefinition] = []
    for item in suits_raw:
        if not isinstance(item, dict):
            raise ContentError("suit entries must be objects")
        color = _require_str(item, "color")
        if color not in ("Black", "Red"):
            raise ContentError(f"Unknown suit color: {color}")
        suits.append(SuitDefinition(symbol=_require_str(item, "symbol"), color=color))  # type: ignore[arg-type]
    return DeckTemplate(ranks=tuple(str(r) for r in ranks), suits=tuple(suits), columns=columns)


class ContentService:
    def __init__(self, data_dir: Path, schema_dir: Path) -> None:
        self._data_dir = data_dir
        self._schema_dir = schema_dir

    def load_deck(self) -> DeckTemplate:
        path = self._data_dir / "deck.json"
        raw = _load_json(path)
        schema = _load_json(self._schema_dir / "deck.schema.json")
        validate_json(raw, schema, context=str(path))
        return parse_deck(raw)

    def load_settings(self, path: Path | None = None) -> GameSettings:
        """Read game settings; the bundled defaults are used when no path is given."""
        path = path or self._data_dir / "settings.json"
        raw = _load_json(path)
        schema = _load_json(self._schema_dir / "settings.schema.json")
        validate_json(raw, schema, context=str(path))
        if not isinstance(raw, dict):
            raise ContentError(f"{path.name} must be an object")
        return GameSettings.from_dict(raw)

    def validate_all(self) -> None:
        # Load is validation (schema + parse)
        _ = self.load_deck()
        _ = self.load_settings()
