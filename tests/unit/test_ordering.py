"""
加载顺序与组件状态单元测试
"""

import pytest

from lootcore.core.di import Capability, ComponentDescriptor, ComponentState, compute_load_order
from lootcore.core.errors import CircularDependencyError, InvalidStateTransitionError


class TestComputeLoadOrder:
    """compute_load_order 测试"""

    def test_unknown_dependencies_ignored(self):
        assert compute_load_order({"a": ["ghost"], "b": ["a"]}) == ["a", "b"]

    def test_diamond(self):
        graph = {"app": ["left", "right"], "left": ["base"], "right": ["base"], "base": []}
        order = compute_load_order(graph)

        assert order == ["base", "left", "right", "app"]

    def test_deep_chain_does_not_hit_recursion_limit(self):
        size = 5000
        graph = {f"n{i}": [f"n{i + 1}"] for i in range(size)}
        graph[f"n{size}"] = []

        order = compute_load_order(graph)
        assert order[0] == f"n{size}"
        assert order[-1] == "n0"

    def test_cycle_path(self):
        with pytest.raises(CircularDependencyError) as exc_info:
            compute_load_order({"a": ["b"], "b": ["c"], "c": ["b"]})
        assert exc_info.value.cycle == ["b", "c", "b"]


class Widget:
    def render(self):
        return None


class TestComponentDescriptor:
    """ComponentDescriptor 测试"""

    def test_capabilities_detected_for_classes(self):
        descriptor = ComponentDescriptor("w", Widget)
        assert descriptor.supports(Capability.render)
        assert not descriptor.supports(Capability.destroy)

    def test_capabilities_learned_once_for_callables(self):
        descriptor = ComponentDescriptor("w", lambda ctx, **kw: Widget())
        assert descriptor.capabilities is None

        descriptor.learn_capabilities(Widget())
        descriptor.learn_capabilities(object())
        assert descriptor.capabilities == frozenset({Capability.render})

    def test_valid_cycle_of_states(self):
        descriptor = ComponentDescriptor("w", Widget)
        descriptor.transition(ComponentState.initialized)
        descriptor.transition(ComponentState.destroyed)
        descriptor.transition(ComponentState.registered)
        assert descriptor.state == ComponentState.registered

    def test_invalid_transition(self):
        descriptor = ComponentDescriptor("w", Widget)
        with pytest.raises(InvalidStateTransitionError):
            descriptor.transition(ComponentState.destroyed)
