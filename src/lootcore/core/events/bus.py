"""
事件总线：按优先级排序的订阅列表，同步/并发派发，命名空间、通配符订阅、中间件与有界历史。

- 同步派发：严格按优先级依次调用，可选 stop_on_error
- 并发派发：所有监听器同时启动，可选逐个超时，结果按原优先级顺序返回
- 监听器失败只体现在返回的 ListenerOutcome 和日志中，emit 本身不会抛出
"""

from __future__ import annotations

import asyncio
import inspect
import itertools
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Set, Union

from loguru import logger

from lootcore.core.errors import ListenerError, ListenerTimeoutError

from .history import DEFAULT_HISTORY_SIZE, EventHistory
from .models import (
    Condition,
    EventRecord,
    Listener,
    ListenerOutcome,
    Subscription,
    Unsubscribe,
)
from .patterns import WILDCARD_CHANNEL, pattern_to_regex

if TYPE_CHECKING:
    from lootcore.config.models import EventBusConfig
    from lootcore.infrastructure.event_log.port import EventLogPort

    from .namespace import NamespacedBus

Middleware = Callable[[str, Any, "EventBus"], Any]


class _Vetoed:
    def __repr__(self) -> str:
        return "VETOED"

    def __bool__(self) -> bool:
        return False


# apply_middleware 的否决哨兵；调用方需在派发前检查
VETOED = _Vetoed()


class EventBus:
    """进程内发布/订阅总线。"""

    VETOED = VETOED

    def __init__(
        self,
        history_size: int = DEFAULT_HISTORY_SIZE,
        *,
        debug: bool = False,
        default_timeout: Optional[float] = None,
        event_log: Optional["EventLogPort"] = None,
    ) -> None:
        self._events: Dict[str, List[Subscription]] = {}
        self._history = EventHistory(history_size)
        self._middleware: List[Middleware] = []
        self._sequence = itertools.count()
        # 超时后仍在运行的监听器任务，保留引用直到其结束
        self._pending: Set[asyncio.Task] = set()
        self.debug_mode = debug
        self.default_timeout = default_timeout
        self.event_log = event_log

    @classmethod
    def from_config(cls, config: "EventBusConfig", event_log: Optional["EventLogPort"] = None) -> "EventBus":
        return cls(
            history_size=config.history_size,
            debug=config.debug,
            default_timeout=config.default_timeout,
            event_log=event_log,
        )

    # ------------------ 订阅 ------------------
    def on(
        self,
        event_name: str,
        callback: Listener,
        *,
        once: bool = False,
        priority: float = 0,
        namespace: Optional[str] = None,
        condition: Optional[Condition] = None,
    ) -> Unsubscribe:
        """
        订阅事件，返回取消订阅的闭包。

        callback 以 ``callback(payload, record)`` 调用；priority 越大越先执行，
        同优先级保持订阅顺序。
        """
        subscription = Subscription(
            callback=callback,
            priority=priority,
            once=once,
            namespace=namespace,
            condition=condition,
            event_name=event_name,
            sequence=next(self._sequence),
        )

        listeners = self._events.setdefault(event_name, [])
        insert_at = len(listeners)
        for index, existing in enumerate(listeners):
            if existing.priority < priority:
                insert_at = index
                break
        listeners.insert(insert_at, subscription)

        self._log("Event listener added: {} ({})", event_name, subscription.id)
        return lambda: self.off(event_name, subscription.id)

    def once(self, event_name: str, callback: Listener, **options: Any) -> Unsubscribe:
        options["once"] = True
        return self.on(event_name, callback, **options)

    def off(self, event_name: str, callback_or_id: Union[str, Listener]) -> bool:
        """按订阅 id 或回调对象移除一个订阅。"""
        listeners = self._events.get(event_name)
        if listeners is None:
            return False

        removed = False
        for index, subscription in enumerate(listeners):
            if subscription.matches(callback_or_id):
                del listeners[index]
                removed = True
                break

        if not listeners:
            del self._events[event_name]

        if removed:
            self._log("Event listener removed: {}", event_name)
        return removed

    def on_pattern(self, pattern: str, callback: Listener, **options: Any) -> Unsubscribe:
        """订阅所有名称匹配通配符模式的事件（``*`` 任意序列，``?`` 单个字符）。"""
        regex = pattern_to_regex(pattern)
        user_condition: Optional[Condition] = options.pop("condition", None)

        def condition(record: EventRecord) -> bool:
            if regex.fullmatch(record.name) is None:
                return False
            return user_condition is None or bool(user_condition(record))

        return self.on(WILDCARD_CHANNEL, callback, condition=condition, **options)

    # ------------------ 命名空间 ------------------
    def namespace(self, name: str) -> "NamespacedBus":
        from .namespace import NamespacedBus

        return NamespacedBus(self, name)

    def clear_namespace(self, name: str) -> int:
        cleared = 0
        for event_name in list(self._events):
            listeners = self._events[event_name]
            kept = [s for s in listeners if s.namespace != name]
            if len(kept) == len(listeners):
                continue
            cleared += len(listeners) - len(kept)
            if kept:
                self._events[event_name] = kept
            else:
                del self._events[event_name]

        self._log("Cleared namespace: {} ({} listeners removed)", name, cleared)
        return cleared

    # ------------------ 派发 ------------------
    def emit(self, event_name: str, payload: Any = None, *, stop_on_error: bool = False) -> List[ListenerOutcome]:
        """同步派发，按优先级依次调用监听器并返回每个监听器的结果。"""
        record = self._record(event_name, payload)
        listeners = self._snapshot(event_name)
        if not listeners:
            self._log("No listeners for event: {}", event_name)
            return []

        outcomes: List[ListenerOutcome] = []
        for subscription in listeners:
            invoked = False
            try:
                if not subscription.accepts(record):
                    continue
                invoked = True
                result = subscription.callback(record.payload, record)
                if inspect.isawaitable(result):
                    if inspect.iscoroutine(result):
                        result.close()
                    raise ListenerError(
                        f"Listener {subscription.id} returned an awaitable; use emit_async()",
                        subscription.id,
                    )
                outcomes.append(ListenerOutcome.ok(subscription.id, result))
            except Exception as exc:  # noqa: BLE001
                outcomes.append(ListenerOutcome.fail(subscription.id, exc))
                logger.warning("Error in event listener {} for {}: {!r}", subscription.id, event_name, exc)
                if stop_on_error:
                    self._discard_once(subscription, invoked)
                    break
            self._discard_once(subscription, invoked)

        return outcomes

    async def emit_async(
        self,
        event_name: str,
        payload: Any = None,
        *,
        timeout: Optional[float] = None,
    ) -> List[ListenerOutcome]:
        """
        并发派发：所有监听器同时启动，全部结束（或超时）后按原优先级顺序返回结果。

        超时只影响结果的上报，不会取消监听器本身的执行。
        """
        record = self._record(event_name, payload)
        listeners = self._snapshot(event_name)
        if not listeners:
            self._log("No listeners for event: {}", event_name)
            return []

        effective_timeout = timeout if timeout is not None else self.default_timeout
        waiters = []
        started: List[tuple] = []
        for subscription in listeners:
            try:
                if not subscription.accepts(record):
                    continue
            except Exception as exc:  # noqa: BLE001
                logger.warning("Error in listener condition {} for {}: {!r}", subscription.id, event_name, exc)
                waiters.append(self._resolved(ListenerOutcome.fail(subscription.id, exc)))
                continue
            task = asyncio.ensure_future(self._invoke(subscription, record))
            started.append((task, subscription))
            waiters.append(self._await_outcome(subscription, task, effective_timeout))

        try:
            return list(await asyncio.gather(*waiters))
        except asyncio.CancelledError:
            # 调用方取消了 emit_async：监听器继续运行，转为后台跟踪
            for task, subscription in started:
                if not task.done() and task not in self._pending:
                    self._track_pending(task, subscription)
                self._discard_once(subscription, True)
            raise

    async def _invoke(self, subscription: Subscription, record: EventRecord) -> Any:
        result = subscription.callback(record.payload, record)
        if inspect.isawaitable(result):
            result = await result
        return result

    async def _await_outcome(
        self,
        subscription: Subscription,
        task: asyncio.Future,
        timeout: Optional[float],
    ) -> ListenerOutcome:
        done, _ = await asyncio.wait({task}, timeout=timeout)
        try:
            if task not in done:
                self._track_pending(task, subscription)
                error = ListenerTimeoutError(subscription.id, timeout or 0)
                logger.warning("Listener {} timed out for {}", subscription.id, subscription.event_name)
                return ListenerOutcome.fail(subscription.id, error)
            if task.cancelled():
                return ListenerOutcome.fail(
                    subscription.id, ListenerError(f"Listener {subscription.id} was cancelled", subscription.id)
                )
            exc = task.exception()
            if exc is not None:
                logger.warning(
                    "Error in async event listener {} for {}: {!r}", subscription.id, subscription.event_name, exc
                )
                return ListenerOutcome.fail(subscription.id, exc)
            return ListenerOutcome.ok(subscription.id, task.result())
        finally:
            self._discard_once(subscription, True)

    @staticmethod
    async def _resolved(outcome: ListenerOutcome) -> ListenerOutcome:
        return outcome

    def _track_pending(self, task: asyncio.Future, subscription: Subscription) -> None:
        self._pending.add(task)

        def _done(t: asyncio.Future) -> None:
            self._pending.discard(t)
            if t.cancelled():
                return
            exc = t.exception()
            if exc is not None:
                logger.warning("Detached listener {} finished with error: {!r}", subscription.id, exc)

        task.add_done_callback(_done)

    # ------------------ 中间件 ------------------
    def use(self, middleware: Middleware) -> None:
        self._middleware.append(middleware)

    def apply_middleware(self, event_name: str, payload: Any) -> Any:
        """
        依次执行中间件：返回 None 保持原 payload，返回 False 否决（得到 VETOED），
        其他返回值替换 payload。中间件抛出的异常记录后跳过。
        """
        processed = payload
        for middleware in self._middleware:
            try:
                result = middleware(event_name, processed, self)
            except Exception as exc:  # noqa: BLE001
                logger.warning("Middleware error for {}: {!r}", event_name, exc)
                continue
            if result is False:
                self._log("Middleware vetoed event: {}", event_name)
                return VETOED
            if result is not None:
                processed = result
        return processed

    def publish(self, event_name: str, payload: Any = None, **emit_options: Any) -> Optional[List[ListenerOutcome]]:
        """先过中间件再同步派发；被否决时返回 None。"""
        processed = self.apply_middleware(event_name, payload)
        if processed is VETOED:
            return None
        return self.emit(event_name, processed, **emit_options)

    # ------------------ 查询 ------------------
    def has_listeners(self, event_name: str) -> bool:
        return bool(self._events.get(event_name))

    def get_listener_count(self, event_name: str) -> int:
        return len(self._events.get(event_name, ()))

    def get_all_events(self) -> List[str]:
        return list(self._events)

    def get_history(self) -> List[EventRecord]:
        return self._history.snapshot()

    def clear_history(self) -> None:
        self._history.clear()

    def get_stats(self) -> Dict[str, Any]:
        event_counts = {name: len(listeners) for name, listeners in self._events.items()}
        return {
            "total_events": len(self._events),
            "total_listeners": sum(event_counts.values()),
            "event_counts": event_counts,
            "history_size": len(self._history),
            "debug_mode": self.debug_mode,
            "pending_tasks": len(self._pending),
        }

    def clear(self) -> int:
        event_count = len(self._events)
        self._events.clear()
        self._log("All events cleared ({} events)", event_count)
        return event_count

    # ------------------ 调试 ------------------
    def enable_debug(self) -> None:
        self.debug_mode = True

    def disable_debug(self) -> None:
        self.debug_mode = False

    # ------------------ 内部 ------------------
    def _log(self, message: str, *args: Any) -> None:
        if self.debug_mode:
            logger.debug("[EventBus] " + message, *args)

    def _record(self, event_name: str, payload: Any) -> EventRecord:
        record = EventRecord(name=event_name, payload=payload)
        self._history.append(record)
        if self.event_log is not None:
            self.event_log.append(record)
        self._log("Event emitted: {} ({})", event_name, record.id)
        return record

    def _snapshot(self, event_name: str) -> List[Subscription]:
        exact = list(self._events.get(event_name, ()))
        if event_name == WILDCARD_CHANNEL:
            return exact
        wildcard = self._events.get(WILDCARD_CHANNEL)
        if not wildcard:
            return exact
        # 稳定排序：同优先级时精确订阅先于通配订阅
        return sorted(exact + list(wildcard), key=lambda s: -s.priority)

    def _discard_once(self, subscription: Subscription, invoked: bool) -> None:
        if invoked and subscription.once:
            self.off(subscription.event_name, subscription.id)
