"""Savings goal records and contributions."""

from __future__ import annotations

from typing import Any, Dict, List

from ..aggregation import GoalSummary, apply_contribution, summarize_goals
from ..config import SAVINGS_GOALS_TABLE
from ..models import GoalPriority, SavingsGoal, join_tags, parse_date, parse_tags, to_float
from .base import EntityService, order_by

_PRIORITY_RANK = {GoalPriority.HIGH: 0, GoalPriority.MEDIUM: 1, GoalPriority.LOW: 2}


class SavingsGoalService(EntityService[SavingsGoal]):
    table = SAVINGS_GOALS_TABLE
    label = "savings goal"
    fields = (
        "Name",
        "targetAmount_c",
        "currentAmount_c",
        "deadline_c",
        "priority_c",
        "Tags",
        "note_c",
        "CreatedOn",
    )
    default_order = order_by("CreatedOn", "DESC")

    def to_domain(self, record: Dict[str, Any]) -> SavingsGoal:
        return SavingsGoal(
            id=record.get("Id"),
            name=record.get("Name") or "",
            target_amount=to_float(record.get("targetAmount_c")),
            current_amount=to_float(record.get("currentAmount_c")),
            deadline=parse_date(record.get("deadline_c"), required=False),
            priority=GoalPriority.parse(record.get("priority_c"), GoalPriority.MEDIUM),
            tags=parse_tags(record.get("Tags")),
            note=record.get("note_c") or "",
            created_on=record.get("CreatedOn"),
        )

    def to_wire(self, goal: SavingsGoal) -> Dict[str, Any]:
        return {
            "Name": goal.name.strip(),
            "targetAmount_c": float(goal.target_amount),
            "currentAmount_c": float(goal.current_amount),
            "deadline_c": goal.deadline.isoformat() if goal.deadline else None,
            "priority_c": goal.priority.value,
            "Tags": join_tags(goal.tags),
            "note_c": goal.note or "",
        }

    def list_all(self) -> List[SavingsGoal]:
        """Goals ordered High -> Low priority, newest first within a priority."""
        goals = super().list_all()
        return sorted(goals, key=lambda g: _PRIORITY_RANK[g.priority])

    def create(self, goal: SavingsGoal) -> SavingsGoal:
        wire = self.to_wire(goal)
        wire["currentAmount_c"] = 0.0
        return self.to_domain(self._create(wire))

    def update(self, record_id: int, goal: SavingsGoal) -> SavingsGoal:
        return self.to_domain(self._update(record_id, self.to_wire(goal)))

    def add_contribution(self, record_id: int, amount: float) -> SavingsGoal:
        """Add ``amount`` to the goal's saved total; overshooting the target is allowed."""
        goal = self.get(record_id)
        updated = apply_contribution(goal, float(amount))
        self._update(record_id, {"currentAmount_c": updated.current_amount})
        return updated

    def summary(self) -> GoalSummary:
        return summarize_goals(self.list_all())
