"""
组件基类：统一构造签名，并在销毁时自动退订事件。
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional

if TYPE_CHECKING:
    from lootcore.core.events import EventBus

    from .registry import ComponentRegistry


class BaseComponent:
    """
    注册表创建组件时以 ``factory(context, dependencies=..., registry=..., **options)``
    调用；继承本类即可获得一致的构造参数处理。

    子类可实现 ``render()`` 以在 initialize() 时被自动调用；``destroy()`` 已提供，
    覆盖 ``on_destroy()`` 做额外清理。
    """

    def __init__(
        self,
        context: Any = None,
        *,
        dependencies: Optional[Dict[str, Any]] = None,
        registry: Optional["ComponentRegistry"] = None,
        **options: Any,
    ) -> None:
        self.context = context
        self.dependencies: Dict[str, Any] = dict(dependencies or {})
        self.registry = registry
        self.options: Dict[str, Any] = {**self.get_default_options(), **options}
        self.is_destroyed = False
        self._unsubscribers: List[Callable[[], bool]] = []

    def get_default_options(self) -> Dict[str, Any]:
        return {}

    def dependency(self, name: str) -> Optional[Any]:
        return self.dependencies.get(name)

    def listen(self, bus: "EventBus", event_name: str, callback: Callable[..., Any], **options: Any) -> Callable[[], bool]:
        """订阅事件并记录退订闭包，destroy() 时统一退订。"""
        unsubscribe = bus.on(event_name, callback, **options)
        self._unsubscribers.append(unsubscribe)
        return unsubscribe

    def destroy(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        self.on_destroy()
        self.is_destroyed = True

    def on_destroy(self) -> None:
        # 子类覆盖
        pass
