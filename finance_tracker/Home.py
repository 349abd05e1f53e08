"""Main entry point for the Streamlit multi-page app.

Shows the month's overview across accounts, budgets, bills, savings goals
and transactions. Pages in the pages/ directory appear in the sidebar.
"""

from __future__ import annotations

import sys
from pathlib import Path

import streamlit as st

# Add project root to path for imports
project_root = Path(__file__).parent.parent.resolve()
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from finance_tracker import visualization as viz
from finance_tracker.aggregation import resolve_bill_status, summarize_accounts, summarize_bills
from finance_tracker.analytics import recent_months
from finance_tracker.formatting import format_currency, format_date, format_month
from finance_tracker.models import BillStatus
from finance_tracker.shared_sidebar import render_shared_sidebar
from finance_tracker.ui_components import metric_currency, run_service_call

TREND_MONTHS = 6


def main() -> None:
    st.set_page_config(page_title="Finance Tracker", page_icon="💰", layout="wide")
    sidebar_data = render_shared_sidebar()
    services = sidebar_data['services']
    month = sidebar_data['month']

    st.header(f"💰 Overview · {format_month(month)}")

    accounts = run_service_call("load accounts", services.accounts.list_all) or []
    budget_summary = run_service_call("load budgets", services.budgets.summary, month)
    bills = run_service_call("load bills", services.bills.list_all) or []
    goal_summary = run_service_call("load savings goals", services.savings_goals.summary)

    account_summary = summarize_accounts(accounts)
    bill_summary = summarize_bills(bills)

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        metric_currency("Total Balance", account_summary.total_balance)
    with col2:
        metric_currency("Total Debt", account_summary.total_debt)
    with col3:
        if budget_summary is not None:
            st.metric(
                "Budget Used",
                f"{budget_summary.percentage:.1f}%",
                help=f"{format_currency(budget_summary.total_spent)} of {format_currency(budget_summary.total_budget)}",
            )
    with col4:
        if goal_summary is not None:
            st.metric("Savings Progress", f"{goal_summary.overall_progress:.1f}%")

    st.subheader("🧾 Bills")
    col1, col2, col3 = st.columns(3)
    col1.metric("Unpaid", bill_summary.unpaid_count, help=format_currency(bill_summary.unpaid_amount))
    col2.metric("Overdue", bill_summary.overdue_count, help=format_currency(bill_summary.overdue_amount))
    col3.metric("Paid", bill_summary.paid_count, help=format_currency(bill_summary.paid_amount))
    overdue = [b for b in bills if resolve_bill_status(b) is BillStatus.OVERDUE]
    for bill in overdue:
        st.warning(f"**{bill.name}** was due {format_date(bill.due_date)} ({format_currency(bill.amount)})")

    st.subheader("📈 Income vs Expenses")
    trend = run_service_call(
        "load transactions",
        services.transactions.income_expense_trend,
        recent_months(TREND_MONTHS, month),
    )
    if trend is not None:
        st.plotly_chart(viz.create_income_expense_chart(trend), use_container_width=True)

    st.subheader("🥧 Spending by Category")
    breakdown = run_service_call("load transactions", services.transactions.category_breakdown, month)
    if breakdown is not None:
        st.plotly_chart(viz.create_category_pie_chart(breakdown), use_container_width=True)


if __name__ == "__main__":
    main()
