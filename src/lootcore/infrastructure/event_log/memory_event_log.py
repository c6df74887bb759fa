from __future__ import annotations

from typing import Iterable, List

from lootcore.core.events.models import EventRecord
from lootcore.infrastructure.event_log.port import EventLogPort


class InMemoryEventLog(EventLogPort):
    """Unbounded in-memory event log (useful for tests)."""

    def __init__(self) -> None:
        self.events: List[dict] = []

    def append(self, record: EventRecord) -> None:
        self.events.append(record.to_dict())

    def stream(self, name: str) -> Iterable[dict]:
        return (e for e in self.events if e.get("name") == name)

    def close(self) -> None:
        return None
