"""Pydantic models for dashboard API responses."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ParameterInfo(BaseModel):
    name: str
    type: str
    description: str


class ToolInfo(BaseModel):
    """Catalog entry of one registered tool."""

    name: str
    description: str
    component: str
    parameters: list[ParameterInfo] = Field(default_factory=list)


class CatalogResponse(BaseModel):
    tool_count: int
    tools: list[ToolInfo]


class ToolTestResponse(BaseModel):
    """Outcome of a test invocation from the dashboard."""

    success: bool
    message: str


class HealthResponse(BaseModel):
    status: str
    tool_count: int
    version: str
