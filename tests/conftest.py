"""Shared test fixtures for agentops_mcp tests."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Annotated

import pytest
from pydantic import Field

from agentops_mcp.config import Settings
from agentops_mcp.registry import ToolRegistry
from agentops_mcp.store import CreditStore
from agentops_mcp.tools.base import tool

if TYPE_CHECKING:
    from _pytest.monkeypatch import MonkeyPatch


class Mode(Enum):
    A = "a"
    B = "b"


class SampleComponent:
    """Component covering every parameter kind the dispatcher converts."""

    @tool(description="Reply with pong")
    def ping(self) -> str:
        return "pong"

    @tool(description="Add two integers")
    def add(self, a: Annotated[int, Field(description="First addend")], b: int) -> int:
        return a + b

    @tool(description="Pick a mode")
    def choose(self, mode: Mode) -> str:
        return mode.name

    @tool(description="Echo a flag")
    def flag(self, enabled: bool) -> bool:
        return enabled

    @tool(description="Scale a number")
    def scale(self, value: float, factor: Annotated[int | None, Field(description="Multiplier")] = None) -> float:
        return value * (factor if factor is not None else 1)

    @tool(description="Return nothing")
    def noop(self) -> None:
        return None

    def helper(self) -> str:
        return "not a tool"


class FailingComponent:
    @tool(description="Always fails")
    def explode(self, reason: str) -> str:
        raise RuntimeError("wrapped failure") from ValueError(reason)

    @tool(description="Fails without a cause")
    def crash(self) -> str:
        raise RuntimeError("crashed")


class AsyncComponent:
    @tool(description="Look up a value asynchronously")
    async def fetch(self, key: str) -> str:
        return f"value-of-{key}"


class BrokenComponent:
    @tool(description="Declares an annotation that cannot be resolved")
    def broken(self, value: Missing) -> str:  # noqa: F821
        return value


@pytest.fixture
def sample_component() -> SampleComponent:
    return SampleComponent()


@pytest.fixture
def registry(sample_component: SampleComponent) -> ToolRegistry:
    """Registry with the sample, failing and async components."""
    registry = ToolRegistry()
    registry.register_component("sampleComponent", sample_component)
    registry.register_component("failingComponent", FailingComponent())
    registry.register_component("asyncComponent", AsyncComponent())
    return registry


@pytest.fixture
def broken_component() -> BrokenComponent:
    return BrokenComponent()


@pytest.fixture
def store() -> CreditStore:
    """Credit store loaded from the packaged seed data."""
    return CreditStore.from_yaml()


@pytest.fixture
def settings() -> Settings:
    return Settings(application_name="agentops-test", server_port=9090, mcp_server_version="9.9.9")


@pytest.fixture
def clean_env(monkeypatch: MonkeyPatch) -> None:
    """Remove every AGENTOPS_* variable so defaults apply."""
    for name in (
        "AGENTOPS_APP_NAME",
        "AGENTOPS_HOST",
        "AGENTOPS_PORT",
        "AGENTOPS_MCP_NAME",
        "AGENTOPS_MCP_VERSION",
        "AGENTOPS_MCP_PROTOCOL",
        "AGENTOPS_LOG_LEVEL",
        "AGENTOPS_LOG_FILE",
        "AGENTOPS_DATA_FILE",
    ):
        monkeypatch.delenv(name, raising=False)
