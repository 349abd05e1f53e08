"""Bill records. The displayed status is derived, see :func:`resolve_bill_status`."""

from __future__ import annotations

from typing import Any, Dict

from ..config import BILLS_TABLE
from ..models import Bill, BillStatus, join_tags, parse_date, parse_tags, to_float
from .base import EntityService, order_by


class BillService(EntityService[Bill]):
    table = BILLS_TABLE
    label = "bill"
    fields = ("Name", "Tags", "due_date_c", "amount_c", "status_c", "CreatedOn", "ModifiedOn")
    default_order = order_by("due_date_c", "ASC")

    def to_domain(self, record: Dict[str, Any]) -> Bill:
        return Bill(
            id=record.get("Id"),
            name=record.get("Name") or "",
            tags=parse_tags(record.get("Tags")),
            due_date=parse_date(record.get("due_date_c")),
            amount=to_float(record.get("amount_c")),
            status=BillStatus.parse(record.get("status_c"), BillStatus.UNPAID),
            created_on=record.get("CreatedOn"),
            modified_on=record.get("ModifiedOn"),
        )

    def to_wire(self, bill: Bill) -> Dict[str, Any]:
        return {
            "Name": bill.name.strip(),
            "Tags": join_tags(bill.tags),
            "due_date_c": bill.due_date.isoformat(),
            "amount_c": float(bill.amount),
            "status_c": bill.status.value,
        }

    def create(self, bill: Bill) -> Bill:
        return self.to_domain(self._create(self.to_wire(bill)))

    def update(self, record_id: int, bill: Bill) -> Bill:
        return self.to_domain(self._update(record_id, self.to_wire(bill)))
