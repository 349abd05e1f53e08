"""Plotly figures for the finance tracker pages.

Each function takes data produced by :mod:`finance_tracker.aggregation` or
:mod:`finance_tracker.analytics` and returns a ``plotly.graph_objects.Figure``
that Streamlit renders with ``st.plotly_chart``. Empty input yields an empty
figure titled "No data to display" rather than raising.
"""

from __future__ import annotations

from typing import Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .aggregation import BudgetTier, band, goal_progress
from .models import Budget, SavingsGoal

TIER_COLORS = {
    BudgetTier.ON_TRACK: "#2e7d32",
    BudgetTier.MONITOR: "#f9a825",
    BudgetTier.APPROACHING_LIMIT: "#ef6c00",
    BudgetTier.OVER_BUDGET: "#c62828",
}


def _empty_figure(title: str = "No data to display") -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title=title)
    return fig


def create_budget_progress_chart(budgets: Sequence[Budget], title: str | None = None) -> go.Figure:
    """Horizontal bars of percent used per budget, coloured by tier.

    Parameters
    ----------
    budgets : sequence of Budget
        Budgets for a single month.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Bar chart with a reference line at 100%.
    """
    if not budgets:
        return _empty_figure()
    bands = [band(b.spent, b.monthly_limit) for b in budgets]
    df = pd.DataFrame({
        "Category": [b.category or b.name for b in budgets],
        "Used": [bd.percentage for bd in bands],
        "Tier": [bd.tier.value for bd in bands],
        "Label": [bd.label for bd in bands],
    })
    fig = px.bar(
        df,
        x="Used",
        y="Category",
        orientation="h",
        color="Tier",
        color_discrete_map={tier.value: color for tier, color in TIER_COLORS.items()},
        hover_data=["Label"],
    )
    fig.add_vline(x=100, line_dash="dash", line_color="grey")
    fig.update_layout(
        title=title or "Budget usage",
        xaxis_title="% of limit used",
        yaxis_title="",
    )
    return fig


def create_income_expense_chart(trend: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Grouped income/expense bars per month with a net line.

    ``trend`` is the frame returned by
    :func:`finance_tracker.analytics.income_expense_trend`.
    """
    if trend.empty:
        return _empty_figure()
    fig = go.Figure()
    fig.add_trace(go.Bar(x=trend["Month"], y=trend["Income"], name="Income", marker_color="#2e7d32"))
    fig.add_trace(go.Bar(x=trend["Month"], y=trend["Expenses"], name="Expenses", marker_color="#c62828"))
    fig.add_trace(go.Scatter(x=trend["Month"], y=trend["Net"], name="Net", mode="lines+markers"))
    fig.update_layout(
        title=title or "Income vs expenses",
        barmode="group",
        xaxis_title="Month",
        yaxis_title="Amount",
    )
    return fig


def create_category_pie_chart(breakdown: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Pie chart of expense totals by category."""
    if breakdown.empty:
        return _empty_figure()
    fig = px.pie(breakdown, names="Category", values="Amount")
    fig.update_layout(title=title or "Spending by category")
    return fig


def create_goal_progress_chart(goals: Sequence[SavingsGoal], title: str | None = None) -> go.Figure:
    if not goals:
        return _empty_figure("No goals to display")
    df = pd.DataFrame({
        "Goal": [g.name for g in goals],
        "Progress": [goal_progress(g) for g in goals],
        "Priority": [g.priority.value for g in goals],
    })
    fig = px.bar(df, x="Goal", y="Progress", color="Priority")
    fig.add_hline(y=100, line_dash="dash", line_color="grey")
    fig.update_layout(
        title=title or "Savings goal progress",
        xaxis_title="Goal",
        yaxis_title="% of target saved",
    )
    return fig
