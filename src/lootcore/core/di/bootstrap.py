"""
启动入口：进程启动时构建唯一的事件总线与组件注册表，并显式传递给协作方。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Optional

from loguru import logger

from lootcore.config.models import CoreConfig
from lootcore.core.events import EventBus
from lootcore.infrastructure.logging import setup_logging

from .manifest import ComponentManifest
from .ports import ComponentLocator
from .registry import ComponentRegistry

if TYPE_CHECKING:
    from lootcore.infrastructure.event_log.port import EventLogPort


@dataclass
class CoreContext:
    config: CoreConfig
    bus: EventBus
    registry: ComponentRegistry

    async def start(self) -> None:
        await self.registry.initialize()

    def shutdown(self) -> int:
        try:
            return self.registry.destroy_all()
        finally:
            self.bus.clear()


def bootstrap(
    config: Optional[CoreConfig] = None,
    *,
    locator: Optional[ComponentLocator] = None,
    manifest: Optional[ComponentManifest] = None,
    available_variants: Optional[Iterable[str]] = None,
    event_log: Optional["EventLogPort"] = None,
    configure_logging: bool = False,
) -> CoreContext:
    """
    构建核心对象。

    Args:
        config: 核心配置，缺省使用默认值
        locator: 组件定位器，initialize() 时为每个组件提供绑定上下文
        manifest: 组件清单，给定时立即注册
        available_variants: 只注册清单中这些变体的组件
        event_log: 事件记录 sink
        configure_logging: 是否按配置安装 loguru sink
    """
    cfg = config or CoreConfig()
    if configure_logging:
        setup_logging(cfg.logging)

    bus = EventBus.from_config(cfg.event_bus, event_log=event_log)
    registry = ComponentRegistry(
        locator,
        bus=bus,
        emit_lifecycle_events=cfg.registry.emit_lifecycle_events,
    )

    if manifest is not None:
        names = registry.register_manifest(manifest, available_variants)
        logger.info("Registered {} component(s) from manifest", len(names))

    return CoreContext(config=cfg, bus=bus, registry=registry)
