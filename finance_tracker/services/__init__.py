"""Entity services over the hosted record service.

Every service receives the :class:`~finance_tracker.record_client.RecordClient`
it talks through; :func:`build_services` wires one set together.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..record_client import RecordClient
from .accounts import AccountService
from .bills import BillService
from .budgets import BudgetService
from .categories import CategoryResolver, CategoryService
from .savings_goals import SavingsGoalService
from .transactions import TransactionService


@dataclass
class Services:
    categories: CategoryService
    accounts: AccountService
    budgets: BudgetService
    bills: BillService
    transactions: TransactionService
    savings_goals: SavingsGoalService


def build_services(client: RecordClient) -> Services:
    categories = CategoryService(client)
    resolver = CategoryResolver(categories)
    return Services(
        categories=categories,
        accounts=AccountService(client),
        budgets=BudgetService(client, resolver),
        bills=BillService(client),
        transactions=TransactionService(client, resolver),
        savings_goals=SavingsGoalService(client),
    )


__all__ = [
    "AccountService",
    "BillService",
    "BudgetService",
    "CategoryResolver",
    "CategoryService",
    "SavingsGoalService",
    "Services",
    "TransactionService",
    "build_services",
]
