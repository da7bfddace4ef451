"""Tests for agentops_mcp.registry module."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock

import pytest

from agentops_mcp.coercion import ParamKind
from agentops_mcp.exceptions import DuplicateToolError
from agentops_mcp.registry import NO_DESCRIPTION, ToolRegistry

if TYPE_CHECKING:
    from _pytest.monkeypatch import MonkeyPatch


def _by_name(registry: ToolRegistry) -> dict:
    return {descriptor.name: descriptor for descriptor in registry.scan()}


@pytest.mark.unit
class TestRegisterComponent:
    """Tests for ToolRegistry.register_component."""

    def test_registers_only_marked_methods(self, sample_component) -> None:
        registry = ToolRegistry()

        names = registry.register_component("sampleComponent", sample_component)

        assert names == ["ping", "add", "choose", "flag", "scale", "noop"]
        assert "helper" not in _by_name(registry)
        assert registry.components() == ["sampleComponent"]
        assert registry.get_component("sampleComponent") is sample_component

    def test_duplicate_component_id_rejected(self, sample_component) -> None:
        registry = ToolRegistry()
        registry.register_component("sampleComponent", sample_component)

        with pytest.raises(DuplicateToolError, match="Component id already registered"):
            registry.register_component("sampleComponent", object())

    def test_duplicate_tool_name_rejected(self, sample_component) -> None:
        registry = ToolRegistry()
        registry.register_component("first", sample_component)

        with pytest.raises(DuplicateToolError, match="Tool ping of second is already registered by first"):
            registry.register_component("second", type(sample_component)())

        assert registry.components() == ["first"]

    def test_unresolvable_annotation_registers_no_tools(self, broken_component, sample_component) -> None:
        registry = ToolRegistry()

        assert registry.register_component("brokenComponent", broken_component) == []
        registry.register_component("sampleComponent", sample_component)

        assert registry.components() == ["brokenComponent", "sampleComponent"]
        assert "broken" not in _by_name(registry)
        assert "ping" in _by_name(registry)

    def test_unregister_component(self, registry: ToolRegistry) -> None:
        registry.unregister_component("sampleComponent")
        registry.unregister_component("unknown")

        assert "ping" not in _by_name(registry)
        assert registry.resolve("sampleComponent", "ping") is None


@pytest.mark.unit
class TestScan:
    """Tests for ToolRegistry.scan."""

    def test_empty_registry(self) -> None:
        assert ToolRegistry().scan() == []

    def test_parameters_match_arity_and_order(self, registry: ToolRegistry) -> None:
        add = _by_name(registry)["add"]

        assert [p.position for p in add.parameters] == [0, 1]
        assert [p.name for p in add.parameters] == ["param0", "param1"]
        assert [p.arg_name for p in add.parameters] == ["a", "b"]
        assert [p.description for p in add.parameters] == ["First addend", NO_DESCRIPTION]
        assert all(p.kind is ParamKind.INTEGER for p in add.parameters)
        assert len(add.parameters) == registry.resolve("sampleComponent", "add").arity

    def test_descriptor_fields(self, registry: ToolRegistry, sample_component) -> None:
        ping = _by_name(registry)["ping"]

        assert ping.description == "Reply with pong"
        assert ping.component_id == "sampleComponent"
        assert ping.component_type == "SampleComponent"
        assert ping.component is sample_component
        assert ping.parameters == ()

    def test_nullable_parameter(self, registry: ToolRegistry) -> None:
        factor = _by_name(registry)["scale"].parameters[1]

        assert factor.nullable is True
        assert factor.type_name == "int"
        assert factor.description == "Multiplier"

    def test_scan_is_idempotent(self, registry: ToolRegistry) -> None:
        assert registry.scan() == registry.scan()

    def test_scan_reflects_live_table(self, registry: ToolRegistry) -> None:
        before = len(registry.scan())
        registry.unregister_component("asyncComponent")
        assert len(registry.scan()) == before - 1

    def test_failing_component_is_skipped(self, registry: ToolRegistry, monkeypatch: MonkeyPatch) -> None:
        describe = registry._describe_component

        def flaky(entry):
            if entry.component_id == "failingComponent":
                raise RuntimeError("metadata unavailable")
            return describe(entry)

        monkeypatch.setattr(registry, "_describe_component", flaky)

        names = {descriptor.name for descriptor in registry.scan()}
        assert "explode" not in names
        assert {"ping", "fetch"} <= names

    def test_to_dict(self, registry: ToolRegistry) -> None:
        assert _by_name(registry)["add"].to_dict() == {
            "name": "add",
            "description": "Add two integers",
            "component": "SampleComponent",
            "parameters": [
                {"name": "param0", "type": "int", "description": "First addend"},
                {"name": "param1", "type": "int", "description": NO_DESCRIPTION},
            ],
        }


@pytest.mark.unit
class TestMount:
    """Tests for ToolRegistry.mount."""

    def test_mount_registers_bound_methods(self, registry: ToolRegistry, sample_component) -> None:
        mcp = Mock()
        registered = {}
        mcp.tool = Mock(side_effect=lambda **kwargs: lambda fn: registered.setdefault(kwargs["name"], fn))

        registry.mount(mcp)

        assert set(registered) == {"ping", "add", "choose", "flag", "scale", "noop", "explode", "crash", "fetch"}
        assert registered["add"](2, 3) == 5
        mcp.tool.assert_any_call(name="ping", description="Reply with pong")
