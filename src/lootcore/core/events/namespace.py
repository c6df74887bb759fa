from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional, Union

from .models import Listener, ListenerOutcome, Unsubscribe

if TYPE_CHECKING:
    from .bus import EventBus


class NamespacedBus:
    """
    Bound view over an EventBus for one feature area.

    Subscriptions made through the view are tagged with the namespace so that
    ``clear()`` can drop exactly those; emitted names are prefixed with
    ``"<namespace>:"``.
    """

    def __init__(self, bus: "EventBus", name: str) -> None:
        self.bus = bus
        self.name = name

    def qualify(self, event_name: str) -> str:
        return f"{self.name}:{event_name}"

    def on(self, event_name: str, callback: Listener, **options: Any) -> Unsubscribe:
        options["namespace"] = self.name
        return self.bus.on(event_name, callback, **options)

    def once(self, event_name: str, callback: Listener, **options: Any) -> Unsubscribe:
        options["namespace"] = self.name
        return self.bus.once(event_name, callback, **options)

    def off(self, event_name: str, callback_or_id: Union[str, Listener]) -> bool:
        return self.bus.off(event_name, callback_or_id)

    def emit(self, event_name: str, payload: Any = None, **options: Any) -> List[ListenerOutcome]:
        return self.bus.emit(self.qualify(event_name), payload, **options)

    async def emit_async(
        self, event_name: str, payload: Any = None, *, timeout: Optional[float] = None
    ) -> List[ListenerOutcome]:
        return await self.bus.emit_async(self.qualify(event_name), payload, timeout=timeout)

    def clear(self) -> int:
        return self.bus.clear_namespace(self.name)
