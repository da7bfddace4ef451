"""Invoke registered tools by name with string-typed arguments."""

from __future__ import annotations

import inspect
import logging
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any

from agentops_mcp.coercion import coerce, default_for
from agentops_mcp.exceptions import ArgumentParseError, InvalidArgumentError, ToolNotFoundError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from agentops_mcp.registry import RegisteredTool, ToolDescriptor, ToolRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InvocationOutcome:
    """Result of one dispatch attempt."""

    success: bool
    message: str

    def to_dict(self) -> dict:
        return asdict(self)


def _lookup_raw(raw_args: Mapping[str, str], tool_name: str, keys: tuple[str, ...]) -> str | None:
    for key in keys:
        for candidate in (key, f"{tool_name}.{key}"):
            if candidate in raw_args:
                return raw_args[candidate]
    return None


class ToolDispatcher:
    """Resolve a tool by name, coerce its arguments and invoke it."""

    def __init__(self, registry: ToolRegistry) -> None:
        self.registry = registry

    def _find_descriptor(self, tool_name: str) -> ToolDescriptor:
        for descriptor in self.registry.scan():
            if descriptor.name == tool_name:
                return descriptor
        raise ToolNotFoundError(f"Tool not found: {tool_name}")

    def _resolve(self, descriptor: ToolDescriptor) -> RegisteredTool:
        registered = self.registry.resolve(descriptor.component_id, descriptor.name)
        if registered is None:
            raise ToolNotFoundError(f"Method {descriptor.name} not found on component {descriptor.component_id}")
        return registered

    def build_arguments(
        self, descriptor: ToolDescriptor, registered: RegisteredTool, raw_args: Mapping[str, str]
    ) -> list[Any]:
        """Assemble the positional argument list for a tool call.

        Each slot is looked up under its external name (``param<i>``), then the
        tool-qualified ``<tool>.param<i>``, then the Python argument name (bare
        and qualified). Missing or empty values get the type's default.

        Raises:
            ArgumentParseError: A numeric value is malformed
            InvalidArgumentError: An enum value names no member
        """
        args: list[Any] = []
        for position, param in enumerate(registered.parameters):
            name = descriptor.parameters[position].name if position < len(descriptor.parameters) else f"param{position}"
            raw = _lookup_raw(raw_args, descriptor.name, (name, param.arg_name))
            if raw:
                args.append(coerce(param.declared_type, raw))
            else:
                args.append(default_for(param.declared_type))
        return args

    async def invoke(self, tool_name: str, raw_args: Mapping[str, str] | None = None) -> InvocationOutcome:
        """Invoke a tool and report the outcome; never raises."""
        raw_args = raw_args or {}
        try:
            descriptor = self._find_descriptor(tool_name)
            registered = self._resolve(descriptor)
            args = self.build_arguments(descriptor, registered, raw_args) if registered.arity else []
        except ToolNotFoundError as e:
            logger.warning(f"Tool test failed: {e}")
            return InvocationOutcome(success=False, message=str(e))
        except (ArgumentParseError, InvalidArgumentError) as e:
            logger.warning(f"Tool test failed for {tool_name}: {e}")
            return InvocationOutcome(success=False, message=f"Invalid arguments for {tool_name}: {e}")
        except Exception as e:
            logger.exception(f"Unexpected error while preparing tool {tool_name}")
            return InvocationOutcome(success=False, message=f"Tool test error: {e}")

        try:
            result = registered.function(*args)
            if inspect.isawaitable(result):
                result = await result
        except Exception as e:
            logger.exception(f"Tool {tool_name} raised during invocation")
            return InvocationOutcome(success=False, message=f"Tool {tool_name} failed: {e}")

        logger.info(f"Tool test succeeded: {tool_name}, result: {result}")
        text = "null" if result is None else str(result)
        return InvocationOutcome(success=True, message=f"{tool_name} invocation result: {text}")
