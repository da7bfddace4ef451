"""AgentOps MCP tools package."""

from __future__ import annotations

from agentops_mcp.tools.base import tool
from agentops_mcp.tools.discovery import register_discovery_tools
from agentops_mcp.tools.loan_credit import LoanCreditProvider
from agentops_mcp.tools.loan_product_plan import LoanProductPlanProvider, PlanningRules
from agentops_mcp.tools.marketing import ActivityStatus, MarketingProvider

__all__ = [
    "ActivityStatus",
    "LoanCreditProvider",
    "LoanProductPlanProvider",
    "MarketingProvider",
    "PlanningRules",
    "register_discovery_tools",
    "tool",
]
