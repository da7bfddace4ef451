"""Exceptions raised by the tool registry and dispatcher."""

from __future__ import annotations


class ToolError(Exception):
    """Base class for tool registry and dispatch errors."""


class ToolNotFoundError(ToolError):
    """No registered tool (or component method) matches the requested name."""


class ToolScanError(ToolError):
    """Reading the tool metadata of a single component failed."""


class DuplicateToolError(ToolError, ValueError):
    """A tool name or component id is already taken in the registry."""


class ArgumentParseError(ToolError, ValueError):
    """A raw argument could not be parsed into its declared numeric type."""


class InvalidArgumentError(ToolError, ValueError):
    """A raw argument does not name a member of the declared enumeration."""
