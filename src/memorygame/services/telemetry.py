from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping

# per-flip events are too chatty for the log
_SKIPPED = frozenset({"CARD_FLIPPED"})


@dataclass
class TelemetryService:
    path: Path
    session_id: str = ""

    def log(self, event_type: str, payload: Mapping[str, object]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        rec = {
            "ts": datetime.now(tz=timezone.utc).isoformat(),
            "session": self.session_id,
            "type": event_type,
            "payload": dict(payload),
        }
        with self.path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(rec, ensure_ascii=False) + "\n")

    def on_event(self, event: Mapping[str, object]) -> None:
        """Mediator observer: record every engine event."""
        event_type = str(event.get("type", "UNKNOWN"))
        if event_type in _SKIPPED:
            return
        self.log(event_type, {k: v for k, v in event.items() if k != "type"})
