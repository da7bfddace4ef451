"""Conversion of raw string arguments into the native types tools declare.

Tool arguments reach the dispatcher as strings (HTML form fields, loosely
typed client payloads). Each parameter's annotation is resolved once into a
:class:`DeclaredType`, which then drives :func:`coerce` and :func:`default_for`.
"""

from __future__ import annotations

import re
import types
import typing
from dataclasses import dataclass
from enum import Enum, StrEnum
from typing import Annotated, Any, Union

from pydantic.fields import FieldInfo

from agentops_mcp.exceptions import ArgumentParseError, InvalidArgumentError

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


class ParamKind(StrEnum):
    """Semantic type of a tool parameter."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    ENUM = "enum"
    OTHER = "other"


@dataclass(frozen=True)
class DeclaredType:
    """Resolved annotation of a single tool parameter."""

    base: Any
    kind: ParamKind
    nullable: bool = False

    @property
    def name(self) -> str:
        if isinstance(self.base, type):
            return self.base.__name__
        return str(self.base).replace("typing.", "")


def _classify(base: Any) -> ParamKind:
    # bool is a subclass of int, so it has to be checked first
    if base is str:
        return ParamKind.STRING
    if base is bool:
        return ParamKind.BOOLEAN
    if base is int:
        return ParamKind.INTEGER
    if base is float:
        return ParamKind.FLOAT
    if isinstance(base, type) and issubclass(base, Enum):
        return ParamKind.ENUM
    return ParamKind.OTHER


def resolve_annotation(annotation: Any) -> tuple[DeclaredType, str | None]:
    """Resolve a parameter annotation into its declared type and description.

    Unwraps ``Annotated[...]`` (picking up a pydantic ``Field(description=...)``)
    and ``X | None`` in any nesting order.

    Args:
        annotation: Evaluated annotation, as returned by ``typing.get_type_hints(include_extras=True)``

    Returns:
        Tuple of the declared type and the parameter description (None when absent)
    """
    description: str | None = None
    nullable = False
    base = annotation

    while True:
        origin = typing.get_origin(base)
        if origin is Annotated:
            base, *metadata = typing.get_args(base)
            for item in metadata:
                if isinstance(item, FieldInfo) and item.description and description is None:
                    description = item.description
            continue
        if origin in (Union, types.UnionType):
            members = [arg for arg in typing.get_args(base) if arg is not type(None)]
            if len(members) < len(typing.get_args(base)):
                nullable = True
            if len(members) == 1:
                base = members[0]
                continue
        break

    if base is None or base is type(None):
        base = Any

    return DeclaredType(base=base, kind=_classify(base), nullable=nullable), description


def coerce(declared: DeclaredType, raw: str) -> Any:
    """Convert a raw string into the native value of the declared type.

    Raises:
        ArgumentParseError: Numeric parameter with malformed text
        InvalidArgumentError: Enum parameter with a value naming no member
    """
    kind = declared.kind
    if kind is ParamKind.STRING:
        return raw
    if kind is ParamKind.INTEGER:
        if not _INTEGER_RE.fullmatch(raw):
            raise ArgumentParseError(f"Cannot parse {raw!r} as {declared.name}")
        return int(raw)
    if kind is ParamKind.FLOAT:
        # float() also takes padding, digit separators and non-ASCII digits
        if not raw.isascii() or "_" in raw or raw != raw.strip():
            raise ArgumentParseError(f"Cannot parse {raw!r} as {declared.name}")
        try:
            return float(raw)
        except ValueError as e:
            raise ArgumentParseError(f"Cannot parse {raw!r} as {declared.name}") from e
    if kind is ParamKind.BOOLEAN:
        return raw.lower() == "true"
    if kind is ParamKind.ENUM:
        try:
            return declared.base[raw]
        except KeyError as e:
            members = ", ".join(declared.base.__members__)
            raise InvalidArgumentError(
                f"Cannot convert {raw!r} to enum {declared.name} (expected one of: {members})"
            ) from e
    return raw


def default_for(declared: DeclaredType) -> Any:
    """Value used when a parameter is missing or empty.

    Non-nullable numbers and booleans get their zero value; everything else
    (strings, enums, nullable parameters, other objects) gets ``None``.
    """
    if declared.nullable:
        return None
    if declared.kind is ParamKind.INTEGER:
        return 0
    if declared.kind is ParamKind.FLOAT:
        return 0.0
    if declared.kind is ParamKind.BOOLEAN:
        return False
    return None
