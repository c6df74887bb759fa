"""
组件注册表：管理组件描述、依赖优先的加载顺序与单例实例的创建/销毁。
"""

from __future__ import annotations

import inspect
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Set, Union

from loguru import logger

from lootcore.core.errors import ComponentNotRegisteredError, RegistryAlreadyInitializedError
from lootcore.core.events.names import Events

from .descriptors import Capability, ComponentDescriptor, ComponentState
from .manifest import ComponentManifest, ComponentSpec
from .ordering import compute_load_order
from .ports import ComponentLocator

RegistryEntry = Union[Callable[..., Any], ComponentSpec, Mapping[str, Any]]


class ComponentRegistry:
    """
    依赖感知的组件注册表。

    - register() 后立即重算加载顺序，存在环时抛出 CircularDependencyError
    - create() 先解析依赖（已有实例或经定位器递归创建），无法解析的依赖只记警告
    - initialize() 按加载顺序创建并渲染组件，任何异常立即中止整个流程
    """

    def __init__(
        self,
        locator: Optional[ComponentLocator] = None,
        *,
        bus: Optional[Any] = None,
        emit_lifecycle_events: bool = True,
    ) -> None:
        self.locator = locator
        self.bus = bus
        self.emit_lifecycle_events = emit_lifecycle_events
        self.is_initialized = False
        self._descriptors: Dict[str, ComponentDescriptor] = {}
        self._instances: Dict[str, Any] = {}
        self._load_order: List[str] = []
        self._creating: Set[str] = set()

    # ------------------ 注册 ------------------
    def register(
        self,
        name: str,
        factory: Callable[..., Any],
        dependencies: Sequence[str] = (),
        *,
        singleton: bool = True,
    ) -> ComponentDescriptor:
        """注册（或覆盖）组件描述并重算加载顺序。"""
        descriptor = ComponentDescriptor(
            name=name,
            factory=factory,
            dependencies=tuple(dependencies),
            singleton=singleton,
        )
        if name in self._instances:
            # 覆盖注册时沿用仍存活的实例
            descriptor.state = ComponentState.initialized
        self._descriptors[name] = descriptor
        logger.debug("Registered component {} (deps={})", name, list(descriptor.dependencies))

        self.update_load_order()
        return descriptor

    def register_many(self, entries: Mapping[str, RegistryEntry]) -> List[str]:
        names: List[str] = []
        for name, entry in entries.items():
            if isinstance(entry, ComponentSpec):
                self.register(name, entry.factory, entry.dependencies, singleton=entry.singleton)
            elif isinstance(entry, Mapping):
                spec = ComponentSpec.from_mapping(name, dict(entry))
                self.register(name, spec.factory, spec.dependencies, singleton=spec.singleton)
            else:
                self.register(name, entry)
            names.append(name)
        return names

    def register_manifest(self, manifest: ComponentManifest, available: Optional[Iterable[str]] = None) -> List[str]:
        """按清单注册组件；available 给定时只注册其中列出的变体。"""
        selected = manifest.select(available)
        skipped = len(manifest) - len(selected)
        if skipped:
            logger.debug("Manifest: skipped {} component(s) of unavailable variants", skipped)

        names: List[str] = []
        for spec in selected:
            self.register(spec.name, spec.factory, spec.dependencies, singleton=spec.singleton)
            self._descriptors[spec.name].metadata.update(spec.metadata, variant=spec.variant)
            names.append(spec.name)
        return names

    def update_load_order(self) -> List[str]:
        graph = {name: d.dependencies for name, d in self._descriptors.items()}
        # 出现环时保留旧顺序并向上抛出
        self._load_order = compute_load_order(graph)
        return list(self._load_order)

    @property
    def load_order(self) -> List[str]:
        return list(self._load_order)

    # ------------------ 实例 ------------------
    def create(self, name: str, context: Any = None, /, **options: Any) -> Any:
        descriptor = self._descriptors.get(name)
        if descriptor is None:
            raise ComponentNotRegisteredError(name)

        if descriptor.singleton and name in self._instances:
            return self._instances[name]

        self._creating.add(name)
        try:
            resolved = self._resolve_dependencies(descriptor)
            # 注册表提供的 dependencies/registry 覆盖调用方同名选项
            instance = descriptor.factory(context, **{**options, "dependencies": resolved, "registry": self})
        finally:
            self._creating.discard(name)

        descriptor.learn_capabilities(instance)
        if descriptor.singleton:
            self._instances[name] = instance
        descriptor.transition(ComponentState.initialized)

        self._emit(Events.COMPONENT_CREATED, {"name": name})
        return instance

    def get(self, name: str) -> Optional[Any]:
        return self._instances.get(name)

    def has(self, name: str) -> bool:
        return name in self._descriptors

    def descriptor(self, name: str) -> Optional[ComponentDescriptor]:
        return self._descriptors.get(name)

    def _resolve_dependencies(self, descriptor: ComponentDescriptor) -> Dict[str, Any]:
        resolved: Dict[str, Any] = {}
        for dep in descriptor.dependencies:
            if dep in self._instances:
                resolved[dep] = self._instances[dep]
                continue

            if dep not in self._descriptors:
                logger.warning("Dependency '{}' not found for component '{}'", dep, descriptor.name)
                continue

            if dep in self._creating:
                logger.warning("Dependency '{}' of '{}' is already being created (cycle)", dep, descriptor.name)
                continue

            context = self._locate(dep)
            if context is None:
                logger.warning("Dependency '{}' for component '{}' has no binding context", dep, descriptor.name)
                continue
            resolved[dep] = self.create(dep, context)
        return resolved

    def _locate(self, name: str) -> Optional[Any]:
        if self.locator is None:
            return None
        return self.locator.locate(name)

    # ------------------ 生命周期 ------------------
    async def initialize(self) -> None:
        """按加载顺序初始化所有组件；不可重复调用。"""
        if self.is_initialized:
            raise RegistryAlreadyInitializedError()

        logger.info("Initializing component registry ({} components)", len(self._descriptors))
        try:
            for name in list(self._load_order):
                await self._initialize_component(name)
        except Exception as exc:
            logger.error("Component registry initialization failed: {!r}", exc)
            raise

        self.is_initialized = True
        logger.info("Component registry initialized")
        self._emit(Events.REGISTRY_INITIALIZED, self.get_stats())

    async def _initialize_component(self, name: str) -> None:
        descriptor = self._descriptors.get(name)
        if descriptor is None or descriptor.initialized:
            return

        context = self._locate(name)
        if context is None:
            logger.warning("No binding context found for component: {}", name)
            return

        instance = self.create(name, context)
        if descriptor.supports(Capability.render):
            result = instance.render()
            if inspect.isawaitable(result):
                await result

        logger.debug("Component initialized: {}", name)

    def destroy(self, name: str) -> bool:
        # 工厂可能返回 None，按键判断是否存在实例
        if name not in self._instances:
            return False

        instance = self._instances[name]
        descriptor = self._descriptors.get(name)
        try:
            if descriptor is not None and descriptor.supports(Capability.destroy):
                instance.destroy()
        finally:
            del self._instances[name]
            if descriptor is not None and descriptor.initialized:
                descriptor.transition(ComponentState.destroyed)
                descriptor.transition(ComponentState.registered)
            logger.debug("Component destroyed: {}", name)
            self._emit(Events.COMPONENT_DESTROYED, {"name": name})
        return True

    def destroy_all(self) -> int:
        """销毁全部实例；单个钩子失败不影响其余组件，结束后抛出第一个异常。"""
        errors: List[Exception] = []
        destroyed = 0
        for name in list(self._instances):
            try:
                if self.destroy(name):
                    destroyed += 1
            except Exception as exc:  # noqa: BLE001
                logger.error("Failed to destroy component {}: {!r}", name, exc)
                errors.append(exc)

        self.is_initialized = False
        self._emit(Events.REGISTRY_DESTROYED, {"destroyed": destroyed})
        if errors:
            raise errors[0]
        return destroyed

    # ------------------ 查询 ------------------
    def get_info(self, name: str) -> Dict[str, Any]:
        descriptor = self._descriptors.get(name)
        return {
            "registered": descriptor is not None,
            "initialized": descriptor.initialized if descriptor else False,
            "has_instance": name in self._instances,
            "dependencies": list(descriptor.dependencies) if descriptor else [],
            "singleton": descriptor.singleton if descriptor else False,
            "state": descriptor.state.value if descriptor else None,
        }

    def get_stats(self) -> Dict[str, Any]:
        return {
            "registered": len(self._descriptors),
            "initialized": sum(1 for d in self._descriptors.values() if d.initialized),
            "instances": len(self._instances),
            "load_order": list(self._load_order),
            "is_initialized": self.is_initialized,
        }

    def list_components(self) -> List[Dict[str, Any]]:
        return [
            {
                "name": name,
                "initialized": d.initialized,
                "has_instance": name in self._instances,
                "dependencies": list(d.dependencies),
            }
            for name, d in self._descriptors.items()
        ]

    def _emit(self, event_name: str, payload: Dict[str, Any]) -> None:
        if self.bus is None or not self.emit_lifecycle_events:
            return
        self.bus.emit(event_name, payload)
