from __future__ import annotations

import datetime as dt

from finance_tracker import analytics
from finance_tracker.models import Transaction, TransactionType


def _txn(amount, day, kind=TransactionType.EXPENSE, category="Food"):
    return Transaction(amount=amount, date=day, type=kind, category=category)


def test_trend_fills_missing_months_with_zero():
    transactions = [
        _txn(1000.0, dt.date(2024, 4, 1), TransactionType.INCOME, "Salary"),
        _txn(200.0, dt.date(2024, 4, 3)),
    ]
    trend = analytics.income_expense_trend(transactions, ["2024-04", "2024-05"])
    assert trend["Month"].tolist() == ["2024-04", "2024-05"]
    assert trend["Net"].tolist() == [800.0, 0.0]


def test_trend_without_data():
    assert analytics.income_expense_trend([]).empty
    empty_months = analytics.income_expense_trend([], ["2024-01"])
    assert empty_months["Income"].tolist() == [0.0]


def test_category_breakdown_ignores_income_and_sorts():
    transactions = [
        _txn(30.0, dt.date(2024, 6, 1), category="Food"),
        _txn(70.0, dt.date(2024, 6, 2), category="Rent"),
        _txn(20.0, dt.date(2024, 6, 3), category="Food"),
        _txn(5000.0, dt.date(2024, 6, 4), TransactionType.INCOME, "Salary"),
        _txn(99.0, dt.date(2024, 5, 4), category="Food"),
    ]
    breakdown = analytics.category_breakdown(transactions, "2024-06")
    assert breakdown["Category"].tolist() == ["Rent", "Food"]
    assert breakdown["Amount"].tolist() == [70.0, 50.0]
    assert round(breakdown["Share"].sum(), 6) == 100.0


def test_expense_totals_by_category():
    totals = analytics.expense_totals_by_category([
        _txn(30.0, dt.date(2024, 6, 1)),
        _txn(12.0, dt.date(2024, 6, 2), category=""),
    ])
    assert totals == {"Food": 30.0, "Uncategorized": 12.0}


def test_recent_months_crosses_year_boundary():
    assert analytics.recent_months(3, "2024-02") == ["2023-12", "2024-01", "2024-02"]
