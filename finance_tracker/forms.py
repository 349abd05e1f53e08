"""Validation for page form input.

Each validator returns a list of human-readable problems; an empty list
means the values can be handed to the matching service. Pages show every
message with ``st.error`` and skip the service call.
"""

from __future__ import annotations

import datetime as dt
from typing import List, Optional

from .models import is_valid_month


def _require(value: Optional[str], label: str, errors: List[str]) -> None:
    if not value or not str(value).strip():
        errors.append(f"{label} is required.")


def validate_account(name: str, interest_rate: float = 0.0, minimum_balance: float = 0.0) -> List[str]:
    errors: List[str] = []
    _require(name, "Account name", errors)
    if interest_rate < 0:
        errors.append("Interest rate cannot be negative.")
    if minimum_balance < 0:
        errors.append("Minimum balance cannot be negative.")
    return errors


def validate_transaction(amount: float, date: Optional[dt.date], category: str) -> List[str]:
    errors: List[str] = []
    if amount is None or amount <= 0:
        errors.append("Amount must be greater than zero.")
    if date is None:
        errors.append("Date is required.")
    _require(category, "Category", errors)
    return errors


def validate_budget(category: str, month: str, monthly_limit: float) -> List[str]:
    errors: List[str] = []
    _require(category, "Category", errors)
    if not is_valid_month(month):
        errors.append("Month must be in YYYY-MM format.")
    if monthly_limit is None or monthly_limit < 0:
        errors.append("Monthly limit cannot be negative.")
    return errors


def validate_bill(name: str, due_date: Optional[dt.date], amount: Optional[float]) -> List[str]:
    errors: List[str] = []
    _require(name, "Bill name", errors)
    if due_date is None:
        errors.append("Due date is required.")
    if amount is None:
        errors.append("Amount is required.")
    elif amount < 0:
        errors.append("Amount cannot be negative.")
    return errors


def validate_goal(name: str, target_amount: float) -> List[str]:
    errors: List[str] = []
    _require(name, "Goal name", errors)
    if target_amount is None or target_amount <= 0:
        errors.append("Target amount must be greater than zero.")
    return errors


def validate_contribution(amount: float) -> List[str]:
    if amount is None or amount <= 0:
        return ["Contribution must be greater than zero."]
    return []


def validate_category(name: str) -> List[str]:
    errors: List[str] = []
    _require(name, "Category name", errors)
    return errors
