"""
事件总线数据结构：订阅、事件记录、监听器执行结果。
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Optional, Union

from lootcore.core.errors import ListenerTimeoutError

Listener = Callable[..., Any]
Condition = Callable[["EventRecord"], bool]
Unsubscribe = Callable[[], bool]


def _new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def new_subscription_id() -> str:
    return _new_id("sub")


def new_event_id() -> str:
    return _new_id("evt")


@dataclass(frozen=True)
class EventRecord:
    """一次 emit 的不可变记录，写入历史环形缓冲区。"""

    name: str
    payload: Any = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id: str = field(default_factory=new_event_id)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "payload": self.payload,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class Subscription:
    callback: Listener
    priority: float = 0
    once: bool = False
    namespace: Optional[str] = None
    condition: Optional[Condition] = None
    event_name: str = ""
    id: str = field(default_factory=new_subscription_id)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    sequence: int = 0

    def accepts(self, record: EventRecord) -> bool:
        return self.condition is None or bool(self.condition(record))

    def matches(self, callback_or_id: Union[str, Listener]) -> bool:
        if isinstance(callback_or_id, str):
            return self.id == callback_or_id
        # 绑定方法每次取属性都是新对象，按 == 比较
        return self.callback == callback_or_id


@dataclass(frozen=True)
class ListenerOutcome:
    """单个监听器的执行结果；失败不会让 emit 抛出。"""

    listener_id: str
    success: bool
    result: Any = None
    error: Optional[BaseException] = None

    @classmethod
    def ok(cls, listener_id: str, result: Any = None) -> "ListenerOutcome":
        return cls(listener_id=listener_id, success=True, result=result)

    @classmethod
    def fail(cls, listener_id: str, error: BaseException) -> "ListenerOutcome":
        return cls(listener_id=listener_id, success=False, error=error)

    @property
    def timed_out(self) -> bool:
        return isinstance(self.error, ListenerTimeoutError)
