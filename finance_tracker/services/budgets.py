"""Monthly budget records.

Budgets reference their category by id on the wire; callers work with the
category name and :class:`CategoryResolver` translates on every write.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from ..aggregation import BudgetSummary, summarize_budgets
from ..config import BUDGETS_TABLE
from ..errors import RecordNotFoundError
from ..models import Budget, BudgetStatus, reference_name, to_float
from .base import EntityService, order_by, where, where_all
from .categories import CategoryResolver

logger = logging.getLogger(__name__)


class BudgetService(EntityService[Budget]):
    table = BUDGETS_TABLE
    label = "budget"
    fields = (
        "Name",
        "month_c",
        "monthlyLimit_c",
        "spent_c",
        "rollover_c",
        "description_c",
        "status_c",
    )
    reference_fields = ("category_c",)
    default_order = order_by("month_c", "DESC")

    def __init__(self, client, resolver: CategoryResolver):
        super().__init__(client)
        self.resolver = resolver

    def to_domain(self, record: Dict[str, Any]) -> Budget:
        return Budget(
            id=record.get("Id"),
            name=record.get("Name") or "",
            category=reference_name(record.get("category_c")),
            month=record.get("month_c") or "",
            monthly_limit=to_float(record.get("monthlyLimit_c")),
            spent=to_float(record.get("spent_c")),
            rollover=to_float(record.get("rollover_c")),
            description=record.get("description_c") or "",
            status=BudgetStatus.parse(record.get("status_c"), BudgetStatus.PLANNED),
        )

    def to_wire(self, budget: Budget) -> Dict[str, Any]:
        return {
            "Name": budget.name or None,
            "month_c": budget.month,
            "monthlyLimit_c": float(budget.monthly_limit),
            "spent_c": float(budget.spent),
            "rollover_c": float(budget.rollover),
            "description_c": budget.description,
            "status_c": budget.status.value,
        }

    def list_by_month(self, month: str) -> List[Budget]:
        return self._query(where=[where("month_c", "EqualTo", month)])

    def create(self, budget: Budget) -> Budget:
        """Create a budget; spend and rollover always start at zero."""
        wire = self.to_wire(budget)
        wire.update({
            "Name": budget.name or f"{budget.category} Budget",
            "spent_c": 0.0,
            "rollover_c": 0.0,
            "category_c": self.resolver.resolve(budget.category),
        })
        created = self.to_domain(self._create(wire))
        created.category = budget.category
        return created

    def update(self, record_id: int, budget: Budget) -> Budget:
        """Write every field of ``budget``; the category is re-resolved when set."""
        wire = self.to_wire(budget)
        if budget.category:
            wire["category_c"] = self.resolver.resolve(budget.category)
        updated = self.to_domain(self._update(record_id, wire))
        updated.category = budget.category or updated.category
        return updated

    def update_spent(self, category: str, month: str, amount: float) -> Budget:
        """Push a new ``spent`` total onto the budget for ``category`` in ``month``."""
        category_id = self.resolver.resolve(category)
        matches = self._query(whereGroups=where_all(
            ("month_c", "EqualTo", month),
            ("category_c", "EqualTo", category_id),
        ))
        if not matches:
            logger.warning("No %s budget for %s", category, month)
            raise RecordNotFoundError(self.table, message=f"No budget for {category} in {month}")
        budget = matches[0]
        self.set_spent(budget.id, amount)
        budget.spent = float(amount)
        budget.category = budget.category or category
        return budget

    def set_spent(self, record_id: int, amount: float) -> None:
        """Write ``spent`` onto one budget by id, leaving its other fields alone."""
        self._update(record_id, {"spent_c": float(amount)})

    def summary(self, month: str) -> BudgetSummary:
        return summarize_budgets(self.list_by_month(month), month)
