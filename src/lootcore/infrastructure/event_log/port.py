from __future__ import annotations

from typing import Iterable, Protocol, runtime_checkable

from lootcore.core.events.models import EventRecord


@runtime_checkable
class EventLogPort(Protocol):
    """
    Minimal sink for emitted events.

    The bus keeps its own bounded history; a sink receives every record as it is
    emitted. Implementations may log, buffer for tests, or forward elsewhere.
    """

    def append(self, record: EventRecord) -> None:
        """Append one emitted event record."""

    def stream(self, name: str) -> Iterable[dict]:
        """Stream records for an event name (may be empty for write-only sinks)."""

    def close(self) -> None:
        """Close underlying resources (optional)."""
