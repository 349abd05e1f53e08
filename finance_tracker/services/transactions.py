"""Income and expense transaction records."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List

import pandas as pd

from .. import analytics
from ..config import TRANSACTIONS_TABLE
from ..models import Transaction, TransactionType, parse_date, reference_name, to_float
from .base import EntityService, order_by, where, where_all
from .categories import CategoryResolver


class TransactionService(EntityService[Transaction]):
    table = TRANSACTIONS_TABLE
    label = "transaction"
    fields = ("Name", "amount_c", "date_c", "description_c", "notes_c", "type_c")
    reference_fields = ("category_c",)
    default_order = order_by("date_c", "DESC")

    def __init__(self, client, resolver: CategoryResolver):
        super().__init__(client)
        self.resolver = resolver

    def to_domain(self, record: Dict[str, Any]) -> Transaction:
        return Transaction(
            id=record.get("Id"),
            name=record.get("Name") or "",
            amount=to_float(record.get("amount_c")),
            date=parse_date(record.get("date_c")),
            description=record.get("description_c") or "",
            notes=record.get("notes_c") or "",
            type=TransactionType.parse(record.get("type_c")),
            category=reference_name(record.get("category_c")),
        )

    def to_wire(self, txn: Transaction) -> Dict[str, Any]:
        return {
            "Name": txn.description or "Transaction",
            "amount_c": float(txn.amount),
            # Date only; time of day is never stored
            "date_c": txn.date.isoformat(),
            "description_c": txn.description,
            "notes_c": txn.notes,
            "type_c": txn.type.value,
        }

    def list_by_month(self, month: str) -> List[Transaction]:
        return self._query(
            where=[where("date_c", "StartsWith", month)],
            orderBy=self.default_order,
        )

    def list_by_category(self, category: str) -> List[Transaction]:
        category_id = self.resolver.resolve(category)
        return self._query(whereGroups=where_all(("category_c", "EqualTo", category_id)))

    def create(self, txn: Transaction) -> Transaction:
        wire = self.to_wire(txn)
        wire["category_c"] = self.resolver.resolve(txn.category)
        created = self.to_domain(self._create(wire))
        created.category = txn.category
        return created

    def update(self, record_id: int, txn: Transaction) -> Transaction:
        wire = self.to_wire(txn)
        if txn.category:
            wire["category_c"] = self.resolver.resolve(txn.category)
        updated = self.to_domain(self._update(record_id, wire))
        updated.category = txn.category or updated.category
        return updated

    def income_expense_trend(self, months: Iterable[str]) -> pd.DataFrame:
        """Income, expenses and net for each requested ``YYYY-MM`` month."""
        months = list(months)
        fetched: List[Transaction] = []
        for month in months:
            fetched.extend(self.list_by_month(month))
        return analytics.income_expense_trend(fetched, months)

    def category_breakdown(self, month: str) -> pd.DataFrame:
        return analytics.category_breakdown(self.list_by_month(month))
