"""AgentOps MCP Server - retail credit, marketing and loan-planning tools."""

from __future__ import annotations

__version__ = "0.1.0"
