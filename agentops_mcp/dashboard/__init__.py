"""Diagnostic dashboard: status page, tool catalog and test invocations."""

from __future__ import annotations

from agentops_mcp.dashboard.app import create_app
from agentops_mcp.dashboard.presenter import DiagnosticPresenter, ServerInfo, StatusView

__all__ = ["DiagnosticPresenter", "ServerInfo", "StatusView", "create_app"]
