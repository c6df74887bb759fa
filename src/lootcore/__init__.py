# lootcore/__init__.py
"""
lootcore - 应用内部协调基座

- 组件注册表：依赖优先的初始化顺序、环检测、单例实例管理
- 事件总线：优先级订阅、同步/并发派发、命名空间、通配符订阅、中间件、有界历史
"""

from __future__ import annotations

__version__ = "1.0.0"
__author__ = "Lootbox Team"


# 延迟导入，import lootcore 时不加载 pydantic/yaml 等依赖
def __getattr__(name: str):
    """延迟导入模块"""

    if name == "EventBus":
        from lootcore.core.events import EventBus
        return EventBus
    if name == "Events":
        from lootcore.core.events import Events
        return Events
    if name == "ComponentRegistry":
        from lootcore.core.di import ComponentRegistry
        return ComponentRegistry
    if name == "ComponentManifest":
        from lootcore.core.di import ComponentManifest
        return ComponentManifest
    if name == "BaseComponent":
        from lootcore.core.di import BaseComponent
        return BaseComponent
    if name == "MappingLocator":
        from lootcore.core.di import MappingLocator
        return MappingLocator
    if name == "bootstrap":
        from lootcore.core.di import bootstrap
        return bootstrap
    if name == "CoreConfig":
        from lootcore.config import CoreConfig
        return CoreConfig
    if name == "load_config":
        from lootcore.config import load_config
        return load_config

    raise AttributeError(f"module 'lootcore' has no attribute '{name}'")


__all__ = [
    "__version__",
    "EventBus",
    "Events",
    "ComponentRegistry",
    "ComponentManifest",
    "BaseComponent",
    "MappingLocator",
    "bootstrap",
    "CoreConfig",
    "load_config",
]
