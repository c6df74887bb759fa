from __future__ import annotations

import json
import logging
from typing import Iterable, Optional

from lootcore.core.events.models import EventRecord
from lootcore.infrastructure.event_log.port import EventLogPort


class LoggingEventLog(EventLogPort):
    """
    Emit event records as JSON lines to a standard-library logger.

    Gives an audit trail of bus traffic without adding storage.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.INFO):
        self._logger = logger or logging.getLogger("lootcore.eventlog")
        self._level = level

    def append(self, record: EventRecord) -> None:
        try:
            payload = json.dumps(record.to_dict(), ensure_ascii=False, default=str)
        except (TypeError, ValueError):
            payload = f"{record.name} {record.id}"
        self._logger.log(self._level, payload)

    def stream(self, name: str) -> Iterable[dict]:
        # Logging backend cannot stream retrospectively.
        return iter(())

    def close(self) -> None:
        return None
