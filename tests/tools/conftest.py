"""Shared fixtures for tools tests."""

from __future__ import annotations

import random
from datetime import date

import pytest

from agentops_mcp.store import CreditStore
from agentops_mcp.tools import LoanCreditProvider, LoanProductPlanProvider, MarketingProvider, PlanningRules

TODAY = date(2026, 10, 18)

_ZHANG_SAN = {"name": "Zhang San", "id_type": "ID Card", "id_number": "110101199001011234"}


@pytest.fixture
def loan_credit(store: CreditStore) -> LoanCreditProvider:
    return LoanCreditProvider(store, clock=lambda: TODAY)


@pytest.fixture
def planner() -> LoanProductPlanProvider:
    return LoanProductPlanProvider(PlanningRules.default())


@pytest.fixture
def marketing() -> MarketingProvider:
    return MarketingProvider(rng=random.Random(42), clock=lambda: TODAY)


@pytest.fixture
def zhang_san() -> dict[str, str]:
    """Identity fields of the seeded customer with the most records."""
    return dict(_ZHANG_SAN)
