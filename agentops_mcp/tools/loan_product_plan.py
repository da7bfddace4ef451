"""Rule-based checks for credit product planning: compliance, risk, resources and system dependencies."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Annotated

from pydantic import Field

from agentops_mcp.tools.base import DATE_FORMAT, tool

logger = logging.getLogger(__name__)

DEFAULT_REGULATION = "Small and Micro Enterprise Loan Management Measures"
CORE_SYSTEM_UPGRADE = "Core system upgrade"
FLASH_LOAN = "Flash Loan"
FLASH_LOAN_VALIDATED_AMOUNT = 30_000_000.0
TECHNICAL_TEAM = "Technical Team"

PlanStep = Annotated[str, Field(description="Description of the planning step to check")]


@dataclass(frozen=True)
class PlanningRules:
    """Read-only rule configuration, built once at startup."""

    dependency_graph: dict[str, tuple[str, ...]]
    conflict_end_date: date
    default_regulation: str = DEFAULT_REGULATION

    @classmethod
    def default(cls) -> PlanningRules:
        return cls(
            dependency_graph={
                CORE_SYSTEM_UPGRADE: ("Risk model integration", "Channel interface development"),
                "Credit bureau interface": ("Anti-fraud system integration",),
                "Risk model integration": ("Data platform integration",),
            },
            conflict_end_date=date(2023, 11, 10),
        )


@dataclass
class ComplianceCheckResult:
    success: bool
    issues: list[str] = field(default_factory=list)
    suggested_fix: str = ""


@dataclass
class RiskAssessmentResult:
    success: bool
    issues: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)


@dataclass
class ResourceSchedulerResult:
    success: bool
    available_date: str | None = None
    conflicts: list[str] = field(default_factory=list)


@dataclass
class SystemDependencyResult:
    success: bool
    critical_path: list[str] = field(default_factory=list)
    historical_issues: list[str] = field(default_factory=list)


class LoanProductPlanProvider:
    """Planning checks for new credit products."""

    def __init__(self, rules: PlanningRules) -> None:
        self.rules = rules

    @tool(description="Check whether a credit product planning step complies with regulations")
    def compliance_check(
        self,
        plan_step: PlanStep,
        regulation: Annotated[str | None, Field(description="Applicable regulation")] = None,
    ) -> ComplianceCheckResult:
        regulation = regulation or self.rules.default_regulation
        step = (plan_step or "").lower()

        if "approval time limit" in step and "5 working days" not in step:
            return ComplianceCheckResult(
                success=False,
                issues=[f"Approval time limit does not comply with Article 15 of the {regulation}"],
                suggested_fix="Limit the approval time to no more than 5 working days",
            )
        if "interest rate" in step and "lpr+150bp" not in step:
            return ComplianceCheckResult(
                success=False,
                issues=["Interest rate setting exceeds the regulatory cap"],
                suggested_fix="Keep the interest rate at or below LPR+150BP",
            )

        logger.debug(f"Compliance check passed under {regulation}")
        return ComplianceCheckResult(success=True)

    @tool(description="Check whether a credit product planning step complies with the default regulation")
    def default_compliance_check(self, plan_step: PlanStep) -> ComplianceCheckResult:
        return self.compliance_check(plan_step, self.rules.default_regulation)

    @tool(description="Assess the risk of a credit product")
    def risk_assessment(
        self,
        product_type: Annotated[str, Field(description="Product type")],
        target_amount: Annotated[float, Field(description="Target lending amount")],
    ) -> RiskAssessmentResult:
        if product_type == FLASH_LOAN and target_amount > FLASH_LOAN_VALIDATED_AMOUNT:
            return RiskAssessmentResult(
                success=False,
                issues=["Target lending amount exceeds the validated range of the risk model"],
                suggestions=["Roll out in phases with a first-phase target of 30 million"],
            )
        return RiskAssessmentResult(success=True)

    @tool(description="Check the availability of technical resources")
    def resource_scheduler(
        self,
        team: Annotated[str, Field(description="Team to coordinate")],
        required_tasks: Annotated[str, Field(description="Tasks to complete")],
        start_date: Annotated[str, Field(description="Planned start date (YYYY-MM-DD)")],
    ) -> ResourceSchedulerResult:
        if not team:
            raise ValueError("team must not be empty")
        if not required_tasks:
            raise ValueError("required_tasks must not be empty")
        if not start_date:
            raise ValueError("start_date must not be empty")

        try:
            start = datetime.strptime(start_date, DATE_FORMAT).date()
        except ValueError as e:
            raise ValueError("start_date must use the YYYY-MM-DD format") from e

        if team == TECHNICAL_TEAM and "system upgrade" in required_tasks.lower() and start < self.rules.conflict_end_date:
            return ResourceSchedulerResult(
                success=False,
                available_date=self.rules.conflict_end_date.strftime(DATE_FORMAT),
                conflicts=["Core system upgrade project occupies the resources"],
            )
        return ResourceSchedulerResult(success=True)

    @tool(description="Analyse the dependencies of planned system changes")
    def system_dependency(
        self,
        system_changes: Annotated[list[str], Field(description="Planned system changes")],
    ) -> SystemDependencyResult:
        if system_changes is None:
            raise ValueError("system_changes must not be empty")
        if isinstance(system_changes, str):
            # raw comma separated text from the dashboard test form
            system_changes = [change.strip() for change in system_changes.split(",") if change.strip()]

        critical_path: list[str] = []
        for change in system_changes:
            for dependency in self.rules.dependency_graph.get(change, ()):
                if dependency not in critical_path:
                    critical_path.append(dependency)

        historical_issues = []
        if CORE_SYSTEM_UPGRADE in system_changes:
            historical_issues.append("Core system upgrades often break other modules through table structure changes")

        return SystemDependencyResult(success=True, critical_path=critical_path, historical_issues=historical_issues)
