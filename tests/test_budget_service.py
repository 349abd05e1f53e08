"""BudgetService against the in-memory record service."""

from __future__ import annotations

import pytest

from finance_tracker.errors import CategoryNotFoundError, RecordNotFoundError, RecordValidationError
from finance_tracker.models import Budget, BudgetStatus


def test_created_budget_reads_back_category_name(services, fake_client, food_category):
    created = services.budgets.create(Budget(category="Food", month="2024-06", monthly_limit=300.0, spent=99.0))

    assert created.category == "Food"
    assert created.name == "Food Budget"
    assert created.spent == 0.0
    assert created.rollover == 0.0
    assert created.status is BudgetStatus.PLANNED

    stored = fake_client.rows("Budget_c")[0]
    assert stored["category_c"] == food_category

    fetched = services.budgets.get(created.id)
    assert fetched.category == "Food"
    assert fetched.monthly_limit == 300.0


def test_create_with_unknown_category_sends_nothing(services, fake_client):
    with pytest.raises(CategoryNotFoundError):
        services.budgets.create(Budget(category="Travel", month="2024-06", monthly_limit=100.0))
    assert not any(call[0] == "create" for call in fake_client.calls)


def test_update_rejects_unknown_category(services, fake_client, food_category):
    created = services.budgets.create(Budget(category="Food", month="2024-06", monthly_limit=300.0))
    with pytest.raises(CategoryNotFoundError):
        services.budgets.update(created.id, Budget(category="Nope", month="2024-06", monthly_limit=300.0))


def test_update_missing_budget_is_not_found(services, food_category):
    with pytest.raises(RecordNotFoundError) as excinfo:
        services.budgets.update(404, Budget(category="Food", month="2024-06", monthly_limit=1.0))
    assert not isinstance(excinfo.value, CategoryNotFoundError)


def test_list_by_month(services, fake_client, food_category):
    fake_client.seed("Budget_c", Name="June", month_c="2024-06", monthlyLimit_c=100, spent_c=10,
                     status_c="Planned", category_c=food_category)
    fake_client.seed("Budget_c", Name="May", month_c="2024-05", monthlyLimit_c=100, spent_c=10,
                     status_c="Planned", category_c=food_category)

    budgets = services.budgets.list_by_month("2024-06")
    assert [b.name for b in budgets] == ["June"]
    assert budgets[0].category == "Food"


def test_update_spent_targets_month_and_category(services, fake_client, food_category):
    rent = fake_client.seed("Category_c", Name="Rent")
    june_food = fake_client.seed("Budget_c", month_c="2024-06", monthlyLimit_c=400, spent_c=0, category_c=food_category)
    may_food = fake_client.seed("Budget_c", month_c="2024-05", monthlyLimit_c=400, spent_c=0, category_c=food_category)
    june_rent = fake_client.seed("Budget_c", month_c="2024-06", monthlyLimit_c=900, spent_c=0, category_c=rent)

    updated = services.budgets.update_spent("Food", "2024-06", 123.45)

    assert updated.id == june_food
    assert updated.spent == 123.45
    table = fake_client.tables["Budget_c"]
    assert table[june_food]["spent_c"] == 123.45
    assert table[may_food]["spent_c"] == 0
    assert table[june_rent]["spent_c"] == 0


def test_update_spent_without_budget_is_not_found(services, food_category):
    with pytest.raises(RecordNotFoundError):
        services.budgets.update_spent("Food", "2030-01", 10.0)


def test_summary_for_month(services, fake_client, food_category):
    fake_client.seed("Budget_c", month_c="2024-06", monthlyLimit_c=200, spent_c=50, category_c=food_category)
    fake_client.seed("Budget_c", month_c="2024-06", monthlyLimit_c=0, spent_c=20, category_c=food_category)

    summary = services.budgets.summary("2024-06")
    assert summary.total_budget == 200.0
    assert summary.total_spent == 70.0
    assert summary.percentage == pytest.approx(35.0)
    assert summary.categories == 2


def test_invalid_status_is_skipped_in_lists(services, fake_client, food_category, caplog):
    fake_client.seed("Budget_c", month_c="2024-06", monthlyLimit_c=10, status_c="Archived", category_c=food_category)
    fake_client.seed("Budget_c", month_c="2024-06", monthlyLimit_c=20, status_c="Pending", category_c=food_category)

    budgets = services.budgets.list_by_month("2024-06")
    assert [b.status for b in budgets] == [BudgetStatus.PENDING]
    assert "Skipping budget" in caplog.text


def test_partial_batch_failure_reports_committed_items(services, fake_client, food_category):
    fake_client.rejections.append(
        lambda table, record: "Name is too long" if len(record.get("Name", "")) > 20 else None
    )
    with pytest.raises(RecordValidationError) as excinfo:
        services.budgets.create(Budget(category="Food", month="2024-06", monthly_limit=1.0, name="x" * 30))
    assert excinfo.value.messages == ["Name: Name is too long"]
    assert excinfo.value.committed == []
    assert fake_client.rows("Budget_c") == []


def test_set_spent_writes_only_the_given_budget(services, fake_client, food_category):
    first = fake_client.seed("Budget_c", month_c="2024-06", monthlyLimit_c=400, spent_c=5, category_c=food_category)
    second = fake_client.seed("Budget_c", month_c="2024-06", monthlyLimit_c=200, spent_c=7, category_c=food_category)

    services.budgets.set_spent(second, 40)

    table = fake_client.tables["Budget_c"]
    assert table[second]["spent_c"] == 40.0
    assert table[second]["monthlyLimit_c"] == 200
    assert table[first]["spent_c"] == 5


def test_set_spent_on_missing_budget_is_not_found(services):
    with pytest.raises(RecordNotFoundError):
        services.budgets.set_spent(999, 10.0)
