"""Account records (checking, savings, investment and credit)."""

from __future__ import annotations

from typing import Any, Dict

from ..config import ACCOUNTS_TABLE
from ..models import Account, AccountType, to_float
from .base import EntityService, order_by


class AccountService(EntityService[Account]):
    table = ACCOUNTS_TABLE
    label = "account"
    fields = (
        "Name",
        "type_c",
        "balance_c",
        "institution_c",
        "interestRate_c",
        "minimumBalance_c",
        "isActive_c",
        "CreatedOn",
    )
    default_order = order_by("CreatedOn", "DESC")

    def to_domain(self, record: Dict[str, Any]) -> Account:
        is_active = record.get("isActive_c")
        return Account(
            id=record.get("Id"),
            name=record.get("Name") or "",
            type=AccountType.parse(record.get("type_c"), AccountType.CHECKING),
            balance=to_float(record.get("balance_c")),
            institution=record.get("institution_c") or "",
            interest_rate=to_float(record.get("interestRate_c")),
            minimum_balance=to_float(record.get("minimumBalance_c")),
            # Records written before the flag existed count as active
            is_active=is_active is not False,
            created_on=record.get("CreatedOn"),
        )

    def to_wire(self, account: Account) -> Dict[str, Any]:
        # Only updateable fields with a value are sent
        return {
            "Name": account.name.strip() or None,
            "type_c": account.type.value,
            "balance_c": float(account.balance),
            "institution_c": account.institution.strip() or None,
            "interestRate_c": float(account.interest_rate),
            "minimumBalance_c": float(account.minimum_balance),
            "isActive_c": bool(account.is_active),
        }

    def create(self, account: Account) -> Account:
        return self.to_domain(self._create(self.to_wire(account)))

    def update(self, record_id: int, account: Account) -> Account:
        return self.to_domain(self._update(record_id, self.to_wire(account)))
