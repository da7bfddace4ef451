#!/usr/bin/env python3
"""AgentOps MCP Server

Exposes retail credit, marketing and loan-planning tools over MCP, next to a
diagnostic dashboard that lists the registered tools and test-invokes them.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from typing import TYPE_CHECKING

import uvicorn
from fastmcp import FastMCP

from agentops_mcp.config import PROTOCOLS, Settings
from agentops_mcp.dashboard import create_app
from agentops_mcp.logging_config import setup_logging
from agentops_mcp.registry import ToolRegistry
from agentops_mcp.store import CreditStore
from agentops_mcp.tools import (
    LoanCreditProvider,
    LoanProductPlanProvider,
    MarketingProvider,
    PlanningRules,
    register_discovery_tools,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

LOAN_CREDIT_PROVIDER = "loanCreditProvider"
LOAN_PRODUCT_PLAN_PROVIDER = "loanProductPlanProvider"
MARKETING_PROVIDER = "marketingProvider"


def build_registry(
    store: CreditStore, rules: PlanningRules | None = None, marketing: MarketingProvider | None = None
) -> ToolRegistry:
    """Register the domain providers in a fresh registration table."""
    registry = ToolRegistry()
    registry.register_component(LOAN_CREDIT_PROVIDER, LoanCreditProvider(store))
    registry.register_component(LOAN_PRODUCT_PLAN_PROVIDER, LoanProductPlanProvider(rules or PlanningRules.default()))
    registry.register_component(MARKETING_PROVIDER, marketing or MarketingProvider())
    return registry


def build_mcp(settings: Settings, registry: ToolRegistry) -> FastMCP:
    """Create the FastMCP server exposing every registered tool plus the catalog tool."""
    mcp = FastMCP(settings.mcp_server_name)
    registry.mount(mcp)
    register_discovery_tools(mcp, registry)
    return mcp


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the AgentOps MCP server")
    parser.add_argument("--host", help="Host to bind to (default: AGENTOPS_HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, help="Port to listen on (default: AGENTOPS_PORT or 8080)")
    parser.add_argument("--protocol", choices=PROTOCOLS, help="MCP transport (default: AGENTOPS_MCP_PROTOCOL)")
    parser.add_argument("--data-file", help="YAML file with the credit records (default: packaged seed data)")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    """Main entry point for console script."""
    args = parse_args(argv)
    settings = Settings.from_env()
    overrides = {
        field: value
        for field, value in (
            ("host", args.host),
            ("server_port", args.port),
            ("mcp_server_protocol", args.protocol),
            ("data_file", args.data_file),
        )
        if value is not None
    }
    settings = replace(settings, **overrides)

    stdio = settings.mcp_server_protocol == "stdio"
    setup_logging(
        app_name=settings.application_name,
        log_level=settings.log_level,
        log_file=settings.log_file,
        console_stream=sys.stderr if stdio else sys.stdout,
    )
    logger.info(
        f"{settings.mcp_server_name} {settings.mcp_server_version} starting with {settings.mcp_server_protocol} transport"
    )

    registry = build_registry(CreditStore.from_yaml(settings.data_file))
    mcp = build_mcp(settings, registry)

    if settings.mcp_server_protocol == "streamable-http":
        app = create_app(settings, registry, mcp)
        uvicorn.run(app, host=settings.host, port=settings.server_port)
    elif stdio:
        mcp.run(transport="stdio")
    else:
        mcp.run(transport="sse", host=settings.host, port=settings.server_port)


if __name__ == "__main__":
    main()
