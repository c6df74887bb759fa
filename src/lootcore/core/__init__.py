"""
核心层：组件注册表、事件总线、错误处理。
"""

from .errors import (
    ErrorSeverity,
    LootCoreError,
    CircularDependencyError,
    ComponentNotRegisteredError,
    RegistryAlreadyInitializedError,
    InvalidStateTransitionError,
    ListenerError,
    ListenerTimeoutError,
)
from .events import EventBus, EventRecord, Events, ListenerOutcome, NamespacedBus, VETOED
from .di import (
    BaseComponent,
    ComponentManifest,
    ComponentRegistry,
    ComponentSpec,
    CoreContext,
    MappingLocator,
    bootstrap,
)

__all__ = [
    # 事件总线
    "EventBus",
    "EventRecord",
    "Events",
    "ListenerOutcome",
    "NamespacedBus",
    "VETOED",
    # 组件注册
    "BaseComponent",
    "ComponentManifest",
    "ComponentRegistry",
    "ComponentSpec",
    "CoreContext",
    "MappingLocator",
    "bootstrap",
    # 错误
    "ErrorSeverity",
    "LootCoreError",
    "CircularDependencyError",
    "ComponentNotRegisteredError",
    "RegistryAlreadyInitializedError",
    "InvalidStateTransitionError",
    "ListenerError",
    "ListenerTimeoutError",
]
