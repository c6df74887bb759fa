"""
事件记录 sink 单元测试
"""

import json
import logging

from lootcore.core.events import EventBus
from lootcore.infrastructure.event_log import EventLogPort, InMemoryEventLog, LoggingEventLog


class TestInMemoryEventLog:
    """InMemoryEventLog 测试"""

    def test_receives_every_emit(self):
        event_log = InMemoryEventLog()
        bus = EventBus(history_size=1, event_log=event_log)

        bus.emit("a", 1)
        bus.emit("b", 2)
        bus.emit("a", 3)

        assert len(bus.get_history()) == 1
        assert [e["payload"] for e in event_log.stream("a")] == [1, 3]
        assert event_log.events[1]["name"] == "b"

    def test_satisfies_port(self):
        assert isinstance(InMemoryEventLog(), EventLogPort)
        assert isinstance(LoggingEventLog(), EventLogPort)


class TestLoggingEventLog:
    """LoggingEventLog 测试"""

    def test_writes_json(self, caplog):
        bus = EventBus(event_log=LoggingEventLog())

        with caplog.at_level(logging.INFO, logger="lootcore.eventlog"):
            bus.emit("user:login", {"user": "alice"})

        record = json.loads(caplog.records[-1].getMessage())
        assert record["name"] == "user:login"
        assert record["payload"] == {"user": "alice"}

    def test_unserializable_payload_falls_back_to_str(self, caplog):
        bus = EventBus(event_log=LoggingEventLog())

        with caplog.at_level(logging.INFO, logger="lootcore.eventlog"):
            bus.emit("blob", object())

        assert "blob" in caplog.records[-1].getMessage()

    def test_stream_is_empty(self):
        assert list(LoggingEventLog().stream("a")) == []
