from __future__ import annotations

from collections import deque
from typing import Deque, List

from .models import EventRecord

DEFAULT_HISTORY_SIZE = 100


class EventHistory:
    """Bounded ring buffer of emitted events; the oldest record is evicted first."""

    def __init__(self, capacity: int = DEFAULT_HISTORY_SIZE) -> None:
        if capacity <= 0:
            raise ValueError("history capacity must be > 0")
        self._records: Deque[EventRecord] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._records.maxlen or 0

    def append(self, record: EventRecord) -> None:
        self._records.append(record)

    def snapshot(self) -> List[EventRecord]:
        return list(self._records)

    def clear(self) -> None:
        self._records.clear()

    def __len__(self) -> int:
        return len(self._records)
