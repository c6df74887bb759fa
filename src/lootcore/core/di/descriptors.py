from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, Optional, Set, Tuple

from lootcore.core.errors import InvalidStateTransitionError

from .ports import Destroyable, Renderable


class ComponentState(str, Enum):
    registered = "registered"
    initialized = "initialized"
    destroyed = "destroyed"


_TRANSITIONS: Dict[ComponentState, Set[ComponentState]] = {
    ComponentState.registered: {ComponentState.initialized},
    # 非单例组件每次 create 都会再次标记为 initialized
    ComponentState.initialized: {ComponentState.initialized, ComponentState.destroyed},
    ComponentState.destroyed: {ComponentState.registered},
}


class Capability(str, Enum):
    render = "render"
    destroy = "destroy"


def detect_capabilities(target: Any) -> FrozenSet[Capability]:
    """Inspect a class or an instance for the optional lifecycle hooks."""
    caps: Set[Capability] = set()
    if inspect.isclass(target):
        if issubclass(target, Renderable):
            caps.add(Capability.render)
        if issubclass(target, Destroyable):
            caps.add(Capability.destroy)
    else:
        if isinstance(target, Renderable):
            caps.add(Capability.render)
        if isinstance(target, Destroyable):
            caps.add(Capability.destroy)
    return frozenset(caps)


@dataclass
class ComponentDescriptor:
    name: str
    factory: Callable[..., Any]
    dependencies: Tuple[str, ...] = ()
    singleton: bool = True
    state: ComponentState = ComponentState.registered
    # 类工厂在注册时确定；普通可调用工厂在首个实例创建时确定一次
    capabilities: Optional[FrozenSet[Capability]] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.dependencies = tuple(self.dependencies)
        if self.capabilities is None and inspect.isclass(self.factory):
            self.capabilities = detect_capabilities(self.factory)

    @property
    def initialized(self) -> bool:
        return self.state == ComponentState.initialized

    def transition(self, target: ComponentState) -> None:
        if target not in _TRANSITIONS[self.state]:
            raise InvalidStateTransitionError(self.name, self.state.value, target.value)
        self.state = target

    def learn_capabilities(self, instance: Any) -> FrozenSet[Capability]:
        if self.capabilities is None:
            self.capabilities = detect_capabilities(instance)
        return self.capabilities

    def supports(self, capability: Capability) -> bool:
        return capability in (self.capabilities or frozenset())
