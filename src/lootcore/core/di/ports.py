"""
注册表依赖的外部能力：定位器（组件名 -> 绑定上下文）与可选生命周期钩子。
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional, Protocol, runtime_checkable


@runtime_checkable
class ComponentLocator(Protocol):
    """Maps a component name to the context it binds to; ``None`` means not found."""

    def locate(self, name: str) -> Optional[Any]:
        ...


@runtime_checkable
class Renderable(Protocol):
    def render(self) -> Any:
        ...


@runtime_checkable
class Destroyable(Protocol):
    def destroy(self) -> Any:
        ...


class MappingLocator:
    """Static name -> context table."""

    def __init__(self, contexts: Optional[Mapping[str, Any]] = None) -> None:
        self._contexts = dict(contexts or {})

    def bind(self, name: str, context: Any) -> None:
        self._contexts[name] = context

    def unbind(self, name: str) -> None:
        self._contexts.pop(name, None)

    def locate(self, name: str) -> Optional[Any]:
        return self._contexts.get(name)


class CallableLocator:
    """Adapts a plain ``fn(name) -> context | None`` to the locator protocol."""

    def __init__(self, fn: Callable[[str], Optional[Any]]) -> None:
        self._fn = fn

    def locate(self, name: str) -> Optional[Any]:
        return self._fn(name)
