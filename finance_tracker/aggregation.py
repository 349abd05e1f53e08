"""Status derivation and summary rollups over fetched records.

Everything here is a pure computation over lists that entity services have
already fetched. Nothing in this module talks to the record service or
catches service errors.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Iterable, List, Optional

from .formatting import format_currency
from .models import Account, Bill, BillStatus, Budget, SavingsGoal


# ---------------------------------------------------------------------------
# Bills
# ---------------------------------------------------------------------------


def is_overdue(due_date: dt.date, status: BillStatus, today: Optional[dt.date] = None) -> bool:
    """A bill is overdue once its due date is strictly before today, unless paid.

    A bill due today is not yet overdue.
    """
    if status is BillStatus.PAID:
        return False
    today = today or dt.date.today()
    return due_date < today


def resolve_bill_status(bill: Bill, today: Optional[dt.date] = None) -> BillStatus:
    """Return the status to display for ``bill``.

    A stored ``paid`` always wins. Any other stored value is a write-time
    snapshot, so the date decides between ``overdue`` and ``unpaid``.
    """
    if bill.status is BillStatus.PAID:
        return BillStatus.PAID
    if is_overdue(bill.due_date, bill.status, today):
        return BillStatus.OVERDUE
    return BillStatus.UNPAID


@dataclass(frozen=True)
class BillSummary:
    total_bills: int
    unpaid_count: int
    paid_count: int
    overdue_count: int
    unpaid_amount: float
    overdue_amount: float
    paid_amount: float


def summarize_bills(bills: Iterable[Bill], today: Optional[dt.date] = None) -> BillSummary:
    counts: Dict[BillStatus, int] = {s: 0 for s in BillStatus}
    amounts: Dict[BillStatus, float] = {s: 0.0 for s in BillStatus}
    total = 0
    for bill in bills:
        status = resolve_bill_status(bill, today)
        counts[status] += 1
        amounts[status] += bill.amount
        total += 1
    return BillSummary(
        total_bills=total,
        unpaid_count=counts[BillStatus.UNPAID],
        paid_count=counts[BillStatus.PAID],
        overdue_count=counts[BillStatus.OVERDUE],
        unpaid_amount=amounts[BillStatus.UNPAID],
        overdue_amount=amounts[BillStatus.OVERDUE],
        paid_amount=amounts[BillStatus.PAID],
    )


# ---------------------------------------------------------------------------
# Budgets
# ---------------------------------------------------------------------------


class BudgetTier(str, Enum):
    ON_TRACK = "on-track"
    MONITOR = "monitor"
    APPROACHING_LIMIT = "approaching-limit"
    OVER_BUDGET = "over-budget"


# (upper bound of ratio, tier); first match wins, anything else is over budget
_TIER_THRESHOLDS = (
    (0.50, BudgetTier.ON_TRACK),
    (0.80, BudgetTier.MONITOR),
    (1.00, BudgetTier.APPROACHING_LIMIT),
)


@dataclass(frozen=True)
class BudgetBand:
    ratio: float
    tier: BudgetTier
    remaining: float
    label: str

    @property
    def percentage(self) -> float:
        return self.ratio * 100


def spend_ratio(spent: float, monthly_limit: float) -> float:
    """Spent over limit, or 0 when no positive limit is set."""
    if not monthly_limit or monthly_limit <= 0:
        return 0.0
    return spent / monthly_limit


def budget_percentage(budget: Budget) -> float:
    return spend_ratio(budget.spent, budget.monthly_limit) * 100


def remaining_label(remaining: float) -> str:
    if remaining >= 0:
        return f"Remaining: {format_currency(remaining)}"
    return f"Over by: {format_currency(abs(remaining))}"


def band(spent: float, monthly_limit: float) -> BudgetBand:
    """Classify spend against a monthly limit."""
    ratio = spend_ratio(spent, monthly_limit)
    tier = BudgetTier.OVER_BUDGET
    for upper, candidate in _TIER_THRESHOLDS:
        if ratio < upper:
            tier = candidate
            break
    remaining = (monthly_limit or 0.0) - spent
    return BudgetBand(ratio=ratio, tier=tier, remaining=remaining, label=remaining_label(remaining))


@dataclass(frozen=True)
class BudgetSummary:
    total_budget: float
    total_spent: float
    remaining: float
    percentage: float
    categories: int


def summarize_budgets(budgets: Iterable[Budget], month: Optional[str] = None) -> BudgetSummary:
    """Roll up limits and spend, optionally restricted to one ``YYYY-MM`` month."""
    selected = [b for b in budgets if month is None or b.month == month]
    total_budget = sum(b.monthly_limit for b in selected)
    total_spent = sum(b.spent for b in selected)
    percentage = (total_spent / total_budget) * 100 if total_budget > 0 else 0.0
    return BudgetSummary(
        total_budget=total_budget,
        total_spent=total_spent,
        remaining=total_budget - total_spent,
        percentage=percentage,
        categories=len(selected),
    )


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AccountSummary:
    total_balance: float
    total_debt: float
    total_accounts: int
    active_accounts: int


def summarize_accounts(accounts: Iterable[Account]) -> AccountSummary:
    """Held balances and debt are reported separately, never netted."""
    accounts = list(accounts)
    total_balance = sum(a.balance for a in accounts if a.balance >= 0)
    total_debt = abs(sum(a.balance for a in accounts if a.balance < 0))
    return AccountSummary(
        total_balance=total_balance,
        total_debt=total_debt,
        total_accounts=len(accounts),
        active_accounts=sum(1 for a in accounts if a.is_active),
    )


def filter_accounts(accounts: Iterable[Account], search: str = "", account_type: str = "all") -> List[Account]:
    """Match the search text against name or institution and filter by type."""
    needle = (search or "").strip().lower()
    matched: List[Account] = []
    for account in accounts:
        if needle and needle not in account.name.lower() and needle not in (account.institution or "").lower():
            continue
        if account_type not in ("", "all") and account.type.value != account_type:
            continue
        matched.append(account)
    return matched


# ---------------------------------------------------------------------------
# Savings goals
# ---------------------------------------------------------------------------


def is_goal_completed(goal: SavingsGoal) -> bool:
    return goal.current_amount >= goal.target_amount


def goal_progress(goal: SavingsGoal) -> float:
    """Percent of target saved; may exceed 100 after overshooting contributions."""
    if goal.target_amount <= 0:
        return 0.0
    return goal.current_amount / goal.target_amount * 100


def apply_contribution(goal: SavingsGoal, amount: float) -> SavingsGoal:
    """Return a copy of ``goal`` with ``amount`` added. No clamping at the target."""
    return replace(goal, current_amount=goal.current_amount + amount)


@dataclass(frozen=True)
class GoalSummary:
    total_target_amount: float
    total_current_amount: float
    total_remaining: float
    overall_progress: float
    active_goals_count: int
    completed_goals_count: int
    total_goals_count: int


def summarize_goals(goals: Iterable[SavingsGoal]) -> GoalSummary:
    goals = list(goals)
    total_target = sum(g.target_amount for g in goals)
    total_current = sum(g.current_amount for g in goals)
    completed = sum(1 for g in goals if is_goal_completed(g))
    return GoalSummary(
        total_target_amount=total_target,
        total_current_amount=total_current,
        total_remaining=total_target - total_current,
        overall_progress=(total_current / total_target) * 100 if total_target > 0 else 0.0,
        active_goals_count=len(goals) - completed,
        completed_goals_count=completed,
        total_goals_count=len(goals),
    )
