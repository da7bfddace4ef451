"""Tests for agentops_mcp.dispatcher module."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from agentops_mcp.dispatcher import InvocationOutcome, ToolDispatcher
from agentops_mcp.registry import ToolRegistry

if TYPE_CHECKING:
    from _pytest.monkeypatch import MonkeyPatch


@pytest.fixture
def dispatcher(registry: ToolRegistry) -> ToolDispatcher:
    return ToolDispatcher(registry)


@pytest.mark.unit
class TestInvokeSuccess:
    """Tests for successful invocations."""

    @pytest.mark.asyncio
    async def test_zero_parameter_tool(self, dispatcher: ToolDispatcher) -> None:
        outcome = await dispatcher.invoke("ping", {})
        assert outcome == InvocationOutcome(success=True, message="ping invocation result: pong")

    @pytest.mark.asyncio
    async def test_positional_arguments(self, dispatcher: ToolDispatcher) -> None:
        outcome = await dispatcher.invoke("add", {"param0": "2", "param1": "3"})
        assert outcome.success is True
        assert outcome.message == "add invocation result: 5"

    @pytest.mark.asyncio
    async def test_missing_arguments_get_defaults(self, dispatcher: ToolDispatcher) -> None:
        outcome = await dispatcher.invoke("add")
        assert outcome.message == "add invocation result: 0"

    @pytest.mark.asyncio
    async def test_empty_values_get_defaults(self, dispatcher: ToolDispatcher) -> None:
        outcome = await dispatcher.invoke("add", {"param0": "", "param1": "4"})
        assert outcome.message == "add invocation result: 4"

    @pytest.mark.asyncio
    async def test_tool_qualified_keys(self, dispatcher: ToolDispatcher) -> None:
        outcome = await dispatcher.invoke("add", {"add.param0": "10", "add.param1": "5"})
        assert outcome.message == "add invocation result: 15"

    @pytest.mark.asyncio
    async def test_argument_name_keys(self, dispatcher: ToolDispatcher) -> None:
        outcome = await dispatcher.invoke("add", {"a": "1", "add.b": "1"})
        assert outcome.message == "add invocation result: 2"

    @pytest.mark.asyncio
    async def test_external_name_wins_over_argument_name(self, dispatcher: ToolDispatcher) -> None:
        outcome = await dispatcher.invoke("add", {"param0": "7", "a": "100"})
        assert outcome.message == "add invocation result: 7"

    @pytest.mark.asyncio
    async def test_enum_member_name(self, dispatcher: ToolDispatcher) -> None:
        outcome = await dispatcher.invoke("choose", {"param0": "B"})
        assert outcome == InvocationOutcome(success=True, message="choose invocation result: B")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(("raw", "expected"), [("TRUE", "True"), ("yes", "False")])
    async def test_boolean_argument(self, dispatcher: ToolDispatcher, raw: str, expected: str) -> None:
        outcome = await dispatcher.invoke("flag", {"param0": raw})
        assert outcome.message == f"flag invocation result: {expected}"

    @pytest.mark.asyncio
    async def test_nullable_argument_defaults_to_none(self, dispatcher: ToolDispatcher) -> None:
        outcome = await dispatcher.invoke("scale", {"param0": "2.5"})
        assert outcome.message == "scale invocation result: 2.5"

    @pytest.mark.asyncio
    async def test_none_result_renders_null(self, dispatcher: ToolDispatcher) -> None:
        outcome = await dispatcher.invoke("noop", {})
        assert outcome.message == "noop invocation result: null"

    @pytest.mark.asyncio
    async def test_coroutine_tool_is_awaited(self, dispatcher: ToolDispatcher) -> None:
        outcome = await dispatcher.invoke("fetch", {"param0": "k"})
        assert outcome.message == "fetch invocation result: value-of-k"


@pytest.mark.unit
class TestInvokeFailure:
    """Tests for failed invocations; none of them raise."""

    @pytest.mark.asyncio
    async def test_unknown_tool(self, dispatcher: ToolDispatcher) -> None:
        outcome = await dispatcher.invoke("nope", {})
        assert outcome == InvocationOutcome(success=False, message="Tool not found: nope")

    @pytest.mark.asyncio
    async def test_unknown_tool_on_empty_registry(self) -> None:
        outcome = await ToolDispatcher(ToolRegistry()).invoke("ping")
        assert outcome.message == "Tool not found: ping"

    @pytest.mark.asyncio
    async def test_method_missing_on_component(self, dispatcher: ToolDispatcher, monkeypatch: MonkeyPatch) -> None:
        monkeypatch.setattr(dispatcher.registry, "resolve", lambda component_id, tool_name: None)

        outcome = await dispatcher.invoke("ping", {})

        assert outcome.success is False
        assert outcome.message == "Method ping not found on component sampleComponent"

    @pytest.mark.asyncio
    async def test_unparseable_number(self, dispatcher: ToolDispatcher) -> None:
        outcome = await dispatcher.invoke("add", {"param0": "abc", "param1": "1"})

        assert outcome.success is False
        assert outcome.message.startswith("Invalid arguments for add: ")
        assert "'abc'" in outcome.message

    @pytest.mark.asyncio
    async def test_padded_number_is_rejected(self, dispatcher: ToolDispatcher) -> None:
        outcome = await dispatcher.invoke("add", {"param0": " 2 ", "param1": "1"})

        assert outcome.success is False
        assert outcome.message == "Invalid arguments for add: Cannot parse ' 2 ' as int"

    @pytest.mark.asyncio
    async def test_unknown_enum_member(self, dispatcher: ToolDispatcher) -> None:
        outcome = await dispatcher.invoke("choose", {"param0": "Z"})

        assert outcome.success is False
        assert outcome.message.startswith("Invalid arguments for choose: ")
        assert "A, B" in outcome.message

    @pytest.mark.asyncio
    async def test_chained_failure_reports_raised_exception(self, dispatcher: ToolDispatcher) -> None:
        outcome = await dispatcher.invoke("explode", {"param0": "disk full"})
        assert outcome == InvocationOutcome(success=False, message="Tool explode failed: wrapped failure")

    @pytest.mark.asyncio
    async def test_chained_cause_is_logged(self, dispatcher: ToolDispatcher, caplog: pytest.LogCaptureFixture) -> None:
        await dispatcher.invoke("explode", {"param0": "disk full"})

        record = next(r for r in caplog.records if r.name == "agentops_mcp.dispatcher" and r.exc_info)
        assert str(record.exc_info[1].__cause__) == "disk full"

    @pytest.mark.asyncio
    async def test_failure_without_cause(self, dispatcher: ToolDispatcher) -> None:
        outcome = await dispatcher.invoke("crash", {})
        assert outcome == InvocationOutcome(success=False, message="Tool crash failed: crashed")

    @pytest.mark.asyncio
    async def test_failure_is_logged(self, dispatcher: ToolDispatcher, caplog: pytest.LogCaptureFixture) -> None:
        await dispatcher.invoke("crash", {})
        assert any(record.exc_info for record in caplog.records if record.name == "agentops_mcp.dispatcher")


@pytest.mark.unit
def test_outcome_to_dict() -> None:
    assert InvocationOutcome(success=True, message="ok").to_dict() == {"success": True, "message": "ok"}
