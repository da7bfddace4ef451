"""Tool registration table.

Components (plain service objects) are registered once at startup under a
component id. Every method declared on the component's class and marked with
:func:`agentops_mcp.tools.base.tool` becomes a :class:`RegisteredTool`: its
descriptor plus the bound method used to invoke it. :meth:`ToolRegistry.scan`
builds a fresh catalog from the live table on every call.
"""

from __future__ import annotations

import inspect
import logging
import typing
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from agentops_mcp.coercion import DeclaredType, ParamKind, resolve_annotation
from agentops_mcp.exceptions import DuplicateToolError, ToolScanError
from agentops_mcp.tools.base import get_tool_meta

if TYPE_CHECKING:
    from collections.abc import Callable

    from fastmcp import FastMCP

logger = logging.getLogger(__name__)

NO_DESCRIPTION = "no description provided"


@dataclass(frozen=True)
class ParameterDescriptor:
    """One formal parameter of a tool, in declaration order."""

    position: int
    name: str
    arg_name: str
    declared_type: DeclaredType
    description: str = NO_DESCRIPTION

    @property
    def type_name(self) -> str:
        return self.declared_type.name

    @property
    def kind(self) -> ParamKind:
        return self.declared_type.kind

    @property
    def nullable(self) -> bool:
        return self.declared_type.nullable

    def to_dict(self) -> dict:
        return {"name": self.name, "type": self.type_name, "description": self.description}


@dataclass(frozen=True)
class ToolDescriptor:
    """Catalog entry for one registered tool."""

    name: str
    description: str
    component_id: str
    component_type: str
    parameters: tuple[ParameterDescriptor, ...] = ()
    component: Any = field(default=None, compare=False, repr=False)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "component": self.component_type,
            "parameters": [param.to_dict() for param in self.parameters],
        }


@dataclass(frozen=True)
class RegisteredTool:
    """Registration table entry: tool metadata plus its invocation closure."""

    name: str
    description: str
    function: Callable[..., Any]
    parameters: tuple[ParameterDescriptor, ...] = ()

    @property
    def arity(self) -> int:
        return len(self.parameters)


@dataclass
class _Component:
    component_id: str
    instance: Any
    tools: dict[str, RegisteredTool]


def _describe_parameters(
    owner: str, function: Callable[..., Any], bound: Callable[..., Any]
) -> tuple[ParameterDescriptor, ...]:
    try:
        hints = typing.get_type_hints(function, include_extras=True)
    except Exception as e:
        raise ToolScanError(f"Cannot resolve annotations of {owner}: {e}") from e

    parameters = []
    for position, parameter in enumerate(inspect.signature(bound).parameters.values()):
        if parameter.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            raise ToolScanError(f"{owner} uses *args/**kwargs, which tools cannot declare")
        declared, description = resolve_annotation(hints.get(parameter.name, Any))
        parameters.append(
            ParameterDescriptor(
                position=position,
                name=f"param{position}",
                arg_name=parameter.name,
                declared_type=declared,
                description=description or NO_DESCRIPTION,
            )
        )
    return tuple(parameters)


def collect_tools(component: Any) -> dict[str, RegisteredTool]:
    """Collect the marked methods declared directly on the component's class.

    Raises:
        ToolScanError: If the metadata of one of the marked methods cannot be read
    """
    cls = type(component)
    tools: dict[str, RegisteredTool] = {}
    for attr_name, member in vars(cls).items():
        function = member.__func__ if isinstance(member, staticmethod | classmethod) else member
        meta = get_tool_meta(function)
        if meta is None:
            continue
        bound = getattr(component, attr_name)
        tools[attr_name] = RegisteredTool(
            name=attr_name,
            description=meta.description,
            function=bound,
            parameters=_describe_parameters(f"{cls.__name__}.{attr_name}", function, bound),
        )
    return tools


class ToolRegistry:
    """Live table of registered components and the tools they declare."""

    def __init__(self) -> None:
        self._components: dict[str, _Component] = {}

    def register_component(self, component_id: str, component: Any) -> list[str]:
        """Register a component and all of its marked methods.

        A component whose tool metadata cannot be read is still registered but
        contributes no tools; the failure is logged.

        Args:
            component_id: Registry lookup key (distinct from the class name)
            component: Service instance declaring ``@tool`` methods

        Returns:
            Names of the tools registered for the component

        Raises:
            DuplicateToolError: If the component id or one of its tool names is already registered
        """
        if component_id in self._components:
            raise DuplicateToolError(f"Component id already registered: {component_id}")

        try:
            tools = collect_tools(component)
        except ToolScanError:
            logger.exception(f"Failed to read tools of component {component_id}, skipping its tools")
            tools = {}

        for name in tools:
            owner = self._owner_of(name)
            if owner is not None:
                raise DuplicateToolError(f"Tool {name} of {component_id} is already registered by {owner}")

        self._components[component_id] = _Component(component_id=component_id, instance=component, tools=tools)
        logger.info(f"Registered component {component_id} ({type(component).__name__}) with {len(tools)} tools")
        return list(tools)

    def unregister_component(self, component_id: str) -> None:
        """Remove a component and its tools; unknown ids are ignored."""
        if self._components.pop(component_id, None) is not None:
            logger.info(f"Unregistered component {component_id}")

    def components(self) -> list[str]:
        return list(self._components)

    def get_component(self, component_id: str) -> Any | None:
        entry = self._components.get(component_id)
        return entry.instance if entry is not None else None

    def _owner_of(self, tool_name: str) -> str | None:
        for entry in self._components.values():
            if tool_name in entry.tools:
                return entry.component_id
        return None

    def _describe_component(self, entry: _Component) -> list[ToolDescriptor]:
        component_type = type(entry.instance).__name__
        return [
            ToolDescriptor(
                name=registered.name,
                description=registered.description,
                component_id=entry.component_id,
                component_type=component_type,
                parameters=registered.parameters,
                component=entry.instance,
            )
            for registered in entry.tools.values()
        ]

    def scan(self) -> list[ToolDescriptor]:
        """Build the catalog of every registered tool.

        Best effort: a component that fails to describe itself is logged and
        skipped, so this never raises.
        """
        descriptors: list[ToolDescriptor] = []
        for entry in list(self._components.values()):
            try:
                descriptors.extend(self._describe_component(entry))
            except Exception:
                logger.exception(f"Failed to scan tools of component {entry.component_id}")
        logger.info(f"Scanned {len(descriptors)} tools across {len(self._components)} components")
        return descriptors

    def resolve(self, component_id: str, tool_name: str) -> RegisteredTool | None:
        """Look up the live table entry of a tool on a given component."""
        entry = self._components.get(component_id)
        if entry is None:
            return None
        return entry.tools.get(tool_name)

    def mount(self, mcp: FastMCP) -> None:
        """Expose every registered tool on a FastMCP server."""
        for entry in self._components.values():
            for registered in entry.tools.values():
                mcp.tool(name=registered.name, description=registered.description)(registered.function)
                logger.debug(f"Mounted tool {registered.name} from {entry.component_id}")
