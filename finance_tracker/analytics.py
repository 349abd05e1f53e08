"""Transaction analytics backed by pandas.

Functions here take already-fetched :class:`~finance_tracker.models.Transaction`
lists and return DataFrames ready for :mod:`finance_tracker.visualization`
or ``st.dataframe``.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

import pandas as pd

from .models import Transaction, TransactionType, month_key

TREND_COLUMNS = ["Month", "Income", "Expenses", "Net"]
BREAKDOWN_COLUMNS = ["Category", "Amount", "Share"]


def transactions_frame(transactions: Iterable[Transaction]) -> pd.DataFrame:
    """Flatten transactions into a DataFrame with a ``Month`` column."""
    rows = [
        {
            "Id": t.id,
            "Date": pd.Timestamp(t.date),
            "Month": month_key(t.date),
            "Description": t.description or t.name,
            "Category": t.category or "Uncategorized",
            "Type": t.type.value,
            "Amount": float(t.amount),
        }
        for t in transactions
    ]
    if not rows:
        return pd.DataFrame(columns=["Id", "Date", "Month", "Description", "Category", "Type", "Amount"])
    return pd.DataFrame(rows)


def income_expense_trend(transactions: Iterable[Transaction], months: Optional[List[str]] = None) -> pd.DataFrame:
    """Income, expenses and net per month.

    Args:
        transactions: Transactions of any type.
        months: ``YYYY-MM`` keys to report. Months without activity are
            reported as zeros. When omitted, the months present in the data
            are used.

    Returns:
        DataFrame with ``Month``, ``Income``, ``Expenses`` and ``Net``,
        oldest month first.
    """
    df = transactions_frame(transactions)
    if months is None:
        months = sorted(df["Month"].unique().tolist())
    if not months:
        return pd.DataFrame(columns=TREND_COLUMNS)

    amounts = pd.DataFrame()
    if not df.empty:
        amounts = df.pivot_table(index="Month", columns="Type", values="Amount", aggfunc="sum", fill_value=0.0)
    trend = pd.DataFrame({"Month": sorted(set(months))})
    trend["Income"] = [_lookup(amounts, m, TransactionType.INCOME.value) for m in trend["Month"]]
    trend["Expenses"] = [_lookup(amounts, m, TransactionType.EXPENSE.value) for m in trend["Month"]]
    trend["Net"] = trend["Income"] - trend["Expenses"]
    return trend


def _lookup(table: pd.DataFrame, month: str, column: str) -> float:
    if table.empty or column not in table.columns or month not in table.index:
        return 0.0
    return float(table.at[month, column])


def category_breakdown(transactions: Iterable[Transaction], month: Optional[str] = None) -> pd.DataFrame:
    """Expense totals per category, largest first, with each category's share."""
    df = transactions_frame(transactions)
    if not df.empty:
        df = df[df["Type"] == TransactionType.EXPENSE.value]
        if month:
            df = df[df["Month"] == month]
    if df.empty:
        return pd.DataFrame(columns=BREAKDOWN_COLUMNS)

    totals = df.groupby("Category")["Amount"].sum().sort_values(ascending=False)
    result = totals.reset_index()
    result.columns = ["Category", "Amount"]
    grand_total = float(result["Amount"].sum())
    result["Share"] = result["Amount"] / grand_total * 100 if grand_total else 0.0
    return result


def expense_totals_by_category(transactions: Iterable[Transaction]) -> Dict[str, float]:
    """Map category name to summed expense amount, used to sync budget spend."""
    breakdown = category_breakdown(transactions)
    return {row.Category: float(row.Amount) for row in breakdown.itertuples(index=False)}


def recent_months(count: int, end: Optional[str] = None) -> List[str]:
    """The ``count`` month keys ending at ``end`` (default: this month), oldest first."""
    last = pd.Period(end or month_key(), freq="M")
    return [str(last - offset) for offset in range(count - 1, -1, -1)]
