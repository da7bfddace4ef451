"""In-memory query service over the retail credit records.

Records are loaded from a YAML document (the packaged ``data/seed.yaml`` by
default) and are read-only afterwards.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from importlib import resources
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

ACTIVE = "ACTIVE"


@dataclass(frozen=True)
class Customer:
    id: int
    name: str
    id_type: str
    id_number: str


@dataclass(frozen=True)
class LoanProduct:
    id: int
    product_name: str


@dataclass(frozen=True)
class CustomerCredit:
    id: int
    customer_id: int
    product_id: int
    credit_limit: Decimal
    available_limit: Decimal
    status: str = ACTIVE


@dataclass(frozen=True)
class LoanContract:
    id: int
    customer_id: int
    product_id: int
    loan_balance: Decimal
    status: str = ACTIVE


@dataclass(frozen=True)
class RepaymentPlan:
    id: int
    contract_id: int
    repayment_date: date
    repayment_amount: Decimal
    interest_amount: Decimal
    principal_amount: Decimal
    remaining_balance: Decimal
    status: str


@dataclass(frozen=True)
class OverdueRecord:
    id: int
    contract_id: int
    overdue_date: date
    due_amount: Decimal
    paid_amount: Decimal
    overdue_amount: Decimal
    penalty_amount: Decimal


_AMOUNT_FIELDS = {
    "credit_limit",
    "available_limit",
    "loan_balance",
    "repayment_amount",
    "interest_amount",
    "principal_amount",
    "remaining_balance",
    "due_amount",
    "paid_amount",
    "overdue_amount",
    "penalty_amount",
}
_DATE_FIELDS = {"repayment_date", "overdue_date"}


def _convert(row: dict[str, Any]) -> dict[str, Any]:
    converted = {}
    for key, value in row.items():
        if key in _AMOUNT_FIELDS:
            value = Decimal(str(value))
        elif key in _DATE_FIELDS and not isinstance(value, date):
            value = date.fromisoformat(str(value))
        converted[key] = value
    return converted


@dataclass
class CreditStore:
    """Read-only lookups over customers, products, credits, contracts, plans and overdue records."""

    customers: list[Customer] = field(default_factory=list)
    products: list[LoanProduct] = field(default_factory=list)
    credits: list[CustomerCredit] = field(default_factory=list)
    contracts: list[LoanContract] = field(default_factory=list)
    repayment_plans: list[RepaymentPlan] = field(default_factory=list)
    overdue_records: list[OverdueRecord] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CreditStore:
        """Build a store from the parsed seed document."""
        return cls(
            customers=[Customer(**_convert(row)) for row in data.get("customers") or []],
            products=[LoanProduct(**_convert(row)) for row in data.get("products") or []],
            credits=[CustomerCredit(**_convert(row)) for row in data.get("credits") or []],
            contracts=[LoanContract(**_convert(row)) for row in data.get("contracts") or []],
            repayment_plans=[RepaymentPlan(**_convert(row)) for row in data.get("repayment_plans") or []],
            overdue_records=[OverdueRecord(**_convert(row)) for row in data.get("overdue_records") or []],
        )

    @classmethod
    def from_yaml(cls, path: str | Path | None = None) -> CreditStore:
        """Load a store from a YAML file; the packaged seed data when no path is given."""
        if path is None:
            text = resources.files("agentops_mcp").joinpath("data/seed.yaml").read_text(encoding="utf-8")
            source = "packaged seed data"
        else:
            text = Path(path).read_text(encoding="utf-8")
            source = str(path)

        store = cls.from_dict(yaml.safe_load(text) or {})
        logger.info(
            f"Loaded credit store from {source}: {len(store.customers)} customers, "
            f"{len(store.products)} products, {len(store.contracts)} contracts"
        )
        return store

    def find_customer(self, name: str | None, id_type: str | None, id_number: str | None) -> Customer | None:
        return next(
            (c for c in self.customers if c.name == name and c.id_type == id_type and c.id_number == id_number),
            None,
        )

    def find_product(self, product_name: str | None) -> LoanProduct | None:
        return next((p for p in self.products if p.product_name == product_name), None)

    def get_product(self, product_id: int) -> LoanProduct | None:
        return next((p for p in self.products if p.id == product_id), None)

    def find_credit(self, customer_id: int, product_id: int) -> CustomerCredit | None:
        return next(
            (c for c in self.credits if c.customer_id == customer_id and c.product_id == product_id),
            None,
        )

    def list_contracts(
        self, customer_id: int, product_id: int | None = None, status: str | None = None
    ) -> list[LoanContract]:
        return [
            c
            for c in self.contracts
            if c.customer_id == customer_id
            and (product_id is None or c.product_id == product_id)
            and (status is None or c.status == status)
        ]

    def list_repayment_plans(self, contract_id: int, year: int | None = None) -> list[RepaymentPlan]:
        return [
            p
            for p in self.repayment_plans
            if p.contract_id == contract_id and (year is None or p.repayment_date.year == year)
        ]

    def list_overdue_records(self, contract_id: int) -> list[OverdueRecord]:
        return [r for r in self.overdue_records if r.contract_id == contract_id]
