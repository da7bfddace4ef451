"""Base utilities for AgentOps MCP tools."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable

F = TypeVar("F", bound="Callable[..., Any]")

TOOL_MARKER = "__agentops_tool__"
DATE_FORMAT = "%Y-%m-%d"


@dataclass(frozen=True)
class ToolMeta:
    """Metadata attached to a method by the :func:`tool` marker."""

    description: str


def tool(description: str) -> Callable[[F], F]:
    """Mark a component method as an externally invokable tool.

    The method itself is returned unchanged; registration happens when the
    owning component is handed to ``ToolRegistry.register_component``.
    """

    def decorator(fn: F) -> F:
        setattr(fn, TOOL_MARKER, ToolMeta(description=description))
        return fn

    return decorator


def get_tool_meta(obj: Any) -> ToolMeta | None:
    """Return the tool marker of a function, or None if it is not a tool."""
    meta = getattr(obj, TOOL_MARKER, None)
    return meta if isinstance(meta, ToolMeta) else None


def format_amount(amount: Decimal | float) -> str:
    """Render a money amount with two decimals, rounding half up."""
    return str(Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def error_response(message: str) -> dict:
    """Build the failure payload returned by query tools."""
    return {"success": False, "message": message}
