"""
组件注册与依赖注入模块。
"""

from .bootstrap import CoreContext, bootstrap
from .component import BaseComponent
from .descriptors import Capability, ComponentDescriptor, ComponentState
from .manifest import ComponentManifest, ComponentSpec
from .ordering import compute_load_order
from .ports import CallableLocator, ComponentLocator, Destroyable, MappingLocator, Renderable
from .registry import ComponentRegistry

__all__ = [
    "ComponentRegistry",
    "ComponentDescriptor",
    "ComponentState",
    "Capability",
    "ComponentManifest",
    "ComponentSpec",
    "BaseComponent",
    "compute_load_order",
    "ComponentLocator",
    "MappingLocator",
    "CallableLocator",
    "Renderable",
    "Destroyable",
    "CoreContext",
    "bootstrap",
]
