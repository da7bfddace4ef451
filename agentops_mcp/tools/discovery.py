"""Discovery tool listing the registered tool catalog.

Clients call this to find out which tools the server exposes and how their
positional parameters are named and typed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fastmcp import FastMCP

    from agentops_mcp.registry import ToolRegistry


def register_discovery_tools(mcp: FastMCP, registry: ToolRegistry) -> None:
    """Register discovery tools with the FastMCP server."""

    @mcp.tool(
        description="List all registered tools with their descriptions, declaring component and parameters. "
        "Parameters are positional and named param0, param1, ... in declaration order."
    )
    async def list_tool_catalog() -> dict:
        tools = [descriptor.to_dict() for descriptor in registry.scan()]
        return {"tool_count": len(tools), "tools": tools}
