"""Status view model for the diagnostic dashboard."""

from __future__ import annotations

import logging
import platform
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from agentops_mcp.config import Settings
    from agentops_mcp.dispatcher import InvocationOutcome, ToolDispatcher
    from agentops_mcp.registry import ToolDescriptor, ToolRegistry

logger = logging.getLogger(__name__)

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class ServerInfo:
    """Configured identity of the running server."""

    application_name: str
    server_port: int
    mcp_server_name: str
    mcp_server_version: str
    mcp_server_protocol: str

    @classmethod
    def from_settings(cls, settings: Settings) -> ServerInfo:
        return cls(
            application_name=settings.application_name,
            server_port=settings.server_port,
            mcp_server_name=settings.mcp_server_name,
            mcp_server_version=settings.mcp_server_version,
            mcp_server_protocol=settings.mcp_server_protocol,
        )


@dataclass
class StatusView:
    """Everything the status page renders."""

    server: ServerInfo
    current_time: str
    python_version: str
    os_name: str
    os_version: str
    tools_by_component: dict[str, list[ToolDescriptor]] = field(default_factory=dict)

    @property
    def tool_count(self) -> int:
        return sum(len(tools) for tools in self.tools_by_component.values())

    @property
    def component_names(self) -> list[str]:
        return list(self.tools_by_component)


class DiagnosticPresenter:
    """Build the status view and run test invocations for the dashboard."""

    def __init__(
        self,
        registry: ToolRegistry,
        dispatcher: ToolDispatcher,
        server_info: ServerInfo,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.registry = registry
        self.dispatcher = dispatcher
        self.server_info = server_info
        self.now = now

    def present(self) -> StatusView:
        """Scan the registry and group the catalog by declaring component, in first-seen order."""
        tools_by_component: dict[str, list[ToolDescriptor]] = {}
        for descriptor in self.registry.scan():
            tools_by_component.setdefault(descriptor.component_type, []).append(descriptor)

        view = StatusView(
            server=self.server_info,
            current_time=self.now().strftime(TIME_FORMAT),
            python_version=platform.python_version(),
            os_name=platform.system(),
            os_version=platform.release(),
            tools_by_component=tools_by_component,
        )
        logger.debug(f"Status view built with {view.tool_count} tools in {len(tools_by_component)} components")
        return view

    async def test_invoke(self, tool_name: str, raw_args: Mapping[str, str] | None = None) -> InvocationOutcome:
        return await self.dispatcher.invoke(tool_name, raw_args)
