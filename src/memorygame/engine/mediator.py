from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

Event = dict[str, object]
Observer = Callable[[Event], None]


@dataclass
class GameMediator:
    """Routes engine events to observers (console view, telemetry, tests).

    Nothing here references the Game; players publish through it and the
    engine appends every event to `event_log` before fanning out.
    """

    observers: list[Observer] = field(default_factory=list)
    event_log: list[Event] = field(default_factory=list)

    def subscribe(self, observer: Observer) -> None:
        if observer not in self.observers:
            self.observers.append(observer)

    def unsubscribe(self, observer: Observer) -> None:
        if observer in self.observers:
            self.observers.remove(observer)

    def publish(self, event: Event) -> None:
        self.event_log.append(event)
        for obs in list(self.observers):
            obs(event)

    def clear(self) -> None:
        self.observers.clear()
        self.event_log.clear()
