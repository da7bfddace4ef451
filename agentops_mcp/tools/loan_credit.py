"""Retail credit tools: credit limits, loan balances, repayment plans and overdue records."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Annotated

from pydantic import Field

from agentops_mcp.store import ACTIVE
from agentops_mcp.tools.base import DATE_FORMAT, error_response, format_amount, tool

if TYPE_CHECKING:
    from collections.abc import Callable

    from agentops_mcp.store import CreditStore, Customer, LoanProduct

logger = logging.getLogger(__name__)

CustomerName = Annotated[str, Field(description="Customer name")]
IdType = Annotated[str, Field(description="Identity document type")]
IdNumber = Annotated[str, Field(description="Identity document number")]
ProductName = Annotated[str, Field(description="Loan product name")]


def _failure(message: str) -> dict:
    logger.warning(f"Loan credit query failed: {message}")
    return error_response(message)


class LoanCreditProvider:
    """Query tools over the retail credit records."""

    def __init__(self, store: CreditStore, clock: Callable[[], date] = date.today) -> None:
        self.store = store
        self.clock = clock

    def _lookup(
        self, name: str, id_type: str, id_number: str, product_name: str
    ) -> tuple[Customer, LoanProduct] | dict:
        customer = self.store.find_customer(name, id_type, id_number)
        if customer is None:
            return _failure("Customer not found")
        product = self.store.find_product(product_name)
        if product is None:
            return _failure("Loan product not found")
        return customer, product

    @tool(description="Query a customer's credit limit for a loan product")
    def query_credit_limit(
        self, name: CustomerName, id_type: IdType, id_number: IdNumber, product_name: ProductName
    ) -> dict:
        found = self._lookup(name, id_type, id_number, product_name)
        if isinstance(found, dict):
            return found
        customer, product = found

        credit = self.store.find_credit(customer.id, product.id)
        if credit is None:
            return _failure("Customer has no credit line for this product")

        logger.info(f"Credit limit of {name} for {product_name} retrieved")
        return {
            "success": True,
            "customer_name": name,
            "product_name": product_name,
            "credit_limit": format_amount(credit.credit_limit),
            "available_limit": format_amount(credit.available_limit),
        }

    @tool(description="Query a customer's loan balance for one loan product")
    def query_loan_balance_by_product(
        self, name: CustomerName, id_type: IdType, id_number: IdNumber, product_name: ProductName
    ) -> dict:
        found = self._lookup(name, id_type, id_number, product_name)
        if isinstance(found, dict):
            return found
        customer, product = found

        contracts = self.store.list_contracts(customer.id, product.id, status=ACTIVE)
        if not contracts:
            return _failure("Customer has no loan contract for this product")

        total = sum((c.loan_balance for c in contracts), Decimal("0"))
        logger.info(f"Loan balance of {name} for {product_name} retrieved")
        return {
            "success": True,
            "customer_name": name,
            "product_name": product_name,
            "loan_balance": format_amount(total),
            "contract_count": len(contracts),
        }

    @tool(description="Query a customer's loan balances across all loan products")
    def query_loan_balances_by_customer(self, name: CustomerName, id_type: IdType, id_number: IdNumber) -> dict:
        customer = self.store.find_customer(name, id_type, id_number)
        if customer is None:
            return _failure("Customer not found")

        contracts = self.store.list_contracts(customer.id, status=ACTIVE)
        if not contracts:
            return _failure("Customer has no loan contracts")

        balances: dict[str, Decimal] = {}
        for contract in contracts:
            product = self.store.get_product(contract.product_id)
            if product is None:
                continue
            balances[product.product_name] = balances.get(product.product_name, Decimal("0")) + contract.loan_balance

        logger.info(f"All loan balances of {name} retrieved")
        return {
            "success": True,
            "customer_name": name,
            "total_loan_balance": format_amount(sum(balances.values(), Decimal("0"))),
            "product_balances": [
                {"product_name": product_name, "loan_balance": format_amount(balance)}
                for product_name, balance in balances.items()
            ],
        }

    @tool(description="Query a customer's repayment plan for the current year")
    def query_repayment_plans(
        self, name: CustomerName, id_type: IdType, id_number: IdNumber, product_name: ProductName
    ) -> dict:
        found = self._lookup(name, id_type, id_number, product_name)
        if isinstance(found, dict):
            return found
        customer, product = found

        contracts = self.store.list_contracts(customer.id, product.id, status=ACTIVE)
        if not contracts:
            return _failure("Customer has no loan contract for this product")

        year = self.clock().year
        plans = sorted(
            (plan for contract in contracts for plan in self.store.list_repayment_plans(contract.id, year=year)),
            key=lambda plan: plan.repayment_date,
        )
        if not plans:
            return _failure("No repayment plan for this year")

        logger.info(f"Repayment plans of {name} for {product_name} retrieved")
        return {
            "success": True,
            "customer_name": name,
            "product_name": product_name,
            "year": str(year),
            "repayment_plans": [
                {
                    "repayment_date": plan.repayment_date.strftime(DATE_FORMAT),
                    "repayment_amount": format_amount(plan.repayment_amount),
                    "interest_amount": format_amount(plan.interest_amount),
                    "principal_amount": format_amount(plan.principal_amount),
                    "remaining_balance": format_amount(plan.remaining_balance),
                    "status": plan.status,
                }
                for plan in plans
            ],
        }

    @tool(description="Query a customer's overdue records for a loan product")
    def query_overdue_records(
        self, name: CustomerName, id_type: IdType, id_number: IdNumber, product_name: ProductName
    ) -> dict:
        found = self._lookup(name, id_type, id_number, product_name)
        if isinstance(found, dict):
            return found
        customer, product = found

        # settled contracts still count here, only the product filter applies
        contracts = self.store.list_contracts(customer.id, product.id)
        if not contracts:
            return _failure("Customer has no loan contract for this product")

        records = sorted(
            (
                record
                for contract in contracts
                for record in self.store.list_overdue_records(contract.id)
                if record.overdue_amount > 0
            ),
            key=lambda record: record.overdue_date,
        )

        logger.info(f"Overdue records of {name} for {product_name} retrieved")
        return {
            "success": True,
            "customer_name": name,
            "product_name": product_name,
            "overdue_records": [
                {
                    "overdue_date": record.overdue_date.strftime(DATE_FORMAT),
                    "due_amount": format_amount(record.due_amount),
                    "paid_amount": format_amount(record.paid_amount),
                    "overdue_amount": format_amount(record.overdue_amount),
                    "penalty_amount": format_amount(record.penalty_amount),
                }
                for record in records
            ],
            "overdue_count": len(records),
        }
