from .port import EventLogPort
from .memory_event_log import InMemoryEventLog
from .logging_event_log import LoggingEventLog

__all__ = ["EventLogPort", "InMemoryEventLog", "LoggingEventLog"]
