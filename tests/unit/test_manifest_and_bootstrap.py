"""
组件清单与启动入口单元测试
"""

import pytest

from lootcore.config import CoreConfig
from lootcore.core.di import (
    BaseComponent,
    CallableLocator,
    ComponentManifest,
    ComponentRegistry,
    ComponentSpec,
    CoreContext,
    MappingLocator,
    bootstrap,
)
from lootcore.core.events import Events
from lootcore.infrastructure.event_log import InMemoryEventLog


class Panel(BaseComponent):
    def render(self):
        self.rendered = True


def build_manifest():
    return (
        ComponentManifest()
        .component("store", Panel)
        .component("header", Panel, ["store"])
        .component("admin", Panel, ["store"], variant="admin")
        .component("debug", Panel, variant="dev")
    )


class TestComponentManifest:
    """ComponentManifest 测试"""

    def test_variants_in_declaration_order(self):
        assert build_manifest().variants() == ["core", "admin", "dev"]

    def test_select_by_variant(self):
        manifest = build_manifest()

        assert [s.name for s in manifest.select()] == ["store", "header", "admin", "debug"]
        assert [s.name for s in manifest.select(["core", "admin"])] == ["store", "header", "admin"]
        assert manifest.select([]) == []

    def test_last_add_wins(self):
        manifest = ComponentManifest([ComponentSpec("a", Panel), ComponentSpec("a", Panel, ("b",))])

        assert len(manifest) == 1
        assert manifest.get("a").dependencies == ("b",)
        assert "a" in manifest
        assert "b" not in manifest

    def test_iteration_follows_declaration_order(self):
        manifest = build_manifest()
        specs = list(manifest)

        assert [s.name for s in specs] == ["store", "header", "admin", "debug"]
        assert manifest.get("admin").dependencies == ("store",)
        assert manifest.get("missing") is None

    def test_spec_from_mapping(self):
        spec = ComponentSpec.from_mapping("a", {"factory": Panel, "dependencies": ["b"], "variant": "admin"})
        assert spec.dependencies == ("b",)
        assert spec.variant == "admin"
        assert spec.singleton is True

    def test_register_manifest_records_variant(self):
        registry = ComponentRegistry()
        names = registry.register_manifest(build_manifest(), available=["core"])

        assert names == ["store", "header"]
        assert registry.has("admin") is False
        assert registry.descriptor("header").metadata["variant"] == "core"


class TestBaseComponent:
    """BaseComponent 测试"""

    def test_default_options_merged(self):
        class Card(BaseComponent):
            def get_default_options(self):
                return {"size": "md", "animated": True}

        card = Card("ctx", size="lg")
        assert card.options == {"size": "lg", "animated": True}

    def test_destroy_unsubscribes_listeners(self, bus):
        received = []
        panel = Panel("ctx")
        panel.listen(bus, Events.SCREEN_CHANGE, lambda p, e: received.append(p))
        panel.listen(bus, Events.USER_LOGIN, lambda p, e: received.append(p), priority=3)

        bus.emit(Events.SCREEN_CHANGE, "home")
        panel.destroy()
        bus.emit(Events.SCREEN_CHANGE, "admin")

        assert received == ["home"]
        assert panel.is_destroyed is True
        assert bus.get_all_events() == []


class TestBootstrap:
    """bootstrap 测试"""

    def test_builds_shared_bus_and_registry(self):
        ctx = bootstrap()

        assert isinstance(ctx, CoreContext)
        assert ctx.registry.bus is ctx.bus
        assert ctx.config == CoreConfig()

    def test_config_is_applied(self):
        cfg = CoreConfig(event_bus={"history_size": 1}, registry={"emit_lifecycle_events": False})
        ctx = bootstrap(cfg)

        assert ctx.bus.get_stats()["history_size"] == 0
        assert ctx.registry.emit_lifecycle_events is False

    @pytest.mark.asyncio
    async def test_start_and_shutdown(self):
        event_log = InMemoryEventLog()
        locator = MappingLocator({"store": "#store", "header": "#header", "admin": "#admin"})
        ctx = bootstrap(
            locator=locator,
            manifest=build_manifest(),
            available_variants=["core"],
            event_log=event_log,
        )
        ctx.bus.on(Events.USER_LOGIN, lambda p, e: None)

        await ctx.start()

        assert ctx.registry.load_order == ["store", "header"]
        assert ctx.registry.get("header").rendered is True
        assert ctx.registry.get_stats()["initialized"] == 2

        assert ctx.shutdown() == 2
        assert ctx.bus.get_all_events() == []
        names = [e["name"] for e in event_log.events]
        assert names[-1] == Events.REGISTRY_DESTROYED
        assert Events.REGISTRY_INITIALIZED in names

    def test_shutdown_clears_bus_when_destroy_fails(self):
        class Sticky(BaseComponent):
            def on_destroy(self):
                raise RuntimeError("teardown failed")

        ctx = bootstrap(manifest=ComponentManifest().component("sticky", Sticky))
        ctx.registry.create("sticky", "#sticky")
        ctx.bus.on(Events.USER_LOGIN, lambda p, e: None)

        with pytest.raises(RuntimeError, match="teardown failed"):
            ctx.shutdown()

        assert ctx.bus.get_all_events() == []
        assert ctx.registry.get_stats()["instances"] == 0


class TestLocators:
    """定位器测试"""

    def test_mapping_locator_bind_and_unbind(self):
        locator = MappingLocator({"header": "#header"})
        locator.bind("footer", "#footer")

        assert locator.locate("footer") == "#footer"
        locator.unbind("header")
        locator.unbind("missing")
        assert locator.locate("header") is None

    @pytest.mark.asyncio
    async def test_callable_locator_drives_initialize(self):
        registry = ComponentRegistry(CallableLocator(lambda name: f"#{name}" if name != "hidden" else None))
        registry.register("header", Panel)
        registry.register("hidden", Panel)

        await registry.initialize()

        assert registry.get("header").context == "#header"
        assert registry.get("hidden") is None


class TestEventNames:
    """事件名常量测试"""

    def test_all_lists_constants(self):
        names = Events.all()

        assert names["USER_LOGIN"] == "user:login"
        assert names["REGISTRY_DESTROYED"] == "registry:destroyed"
        assert "all" not in names
        assert len(set(names.values())) == len(names)
