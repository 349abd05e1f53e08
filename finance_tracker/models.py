"""Domain records for accounts, budgets, bills, transactions, goals and categories.

Entity services translate wire records into these dataclasses, so nothing
above the service layer sees the record service's ``*_c`` field names.
Enumerated fields are closed sets; unknown values are rejected with
:class:`~finance_tracker.errors.InvalidRecordError` when a record is read.
"""

from __future__ import annotations

import datetime as dt
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, List, Optional, Type, TypeVar

from .errors import InvalidRecordError

E = TypeVar("E", bound="ChoiceEnum")

_MONTH_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


class ChoiceEnum(str, Enum):
    """String enum with strict parsing of values coming off the wire."""

    @classmethod
    def parse(cls: Type[E], value: Any, default: Optional[E] = None) -> E:
        if isinstance(value, cls):
            return value
        if value is None or (isinstance(value, str) and not value.strip()):
            if default is not None:
                return default
            raise InvalidRecordError(f"{cls.__name__} value is missing")
        text = str(value).strip()
        for member in cls:
            if member.value.lower() == text.lower():
                return member
        allowed = ", ".join(m.value for m in cls)
        raise InvalidRecordError(f"Unknown {cls.__name__} {text!r} (expected one of: {allowed})")

    @classmethod
    def values(cls) -> List[str]:
        return [m.value for m in cls]


class AccountType(ChoiceEnum):
    CHECKING = "checking"
    SAVINGS = "savings"
    INVESTMENT = "investment"
    CREDIT = "credit"


class BudgetStatus(ChoiceEnum):
    PLANNED = "Planned"
    PENDING = "Pending"
    COMPLETED = "Completed"
    OVERDUE = "Overdue"


class BillStatus(ChoiceEnum):
    UNPAID = "unpaid"
    PAID = "paid"
    OVERDUE = "overdue"


class TransactionType(ChoiceEnum):
    INCOME = "income"
    EXPENSE = "expense"


class GoalPriority(ChoiceEnum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


@dataclass
class Account:
    name: str
    type: AccountType = AccountType.CHECKING
    balance: float = 0.0
    institution: str = ""
    interest_rate: float = 0.0
    minimum_balance: float = 0.0
    is_active: bool = True
    created_on: Optional[str] = None
    id: Optional[int] = None


@dataclass
class Category:
    name: str
    color: str = ""
    icon: str = ""
    is_custom: bool = False
    id: Optional[int] = None


@dataclass
class Budget:
    category: str
    month: str
    monthly_limit: float = 0.0
    spent: float = 0.0
    rollover: float = 0.0
    description: str = ""
    status: BudgetStatus = BudgetStatus.PLANNED
    name: str = ""
    id: Optional[int] = None


@dataclass
class Bill:
    name: str
    due_date: dt.date
    amount: float = 0.0
    status: BillStatus = BillStatus.UNPAID
    tags: List[str] = field(default_factory=list)
    created_on: Optional[str] = None
    modified_on: Optional[str] = None
    id: Optional[int] = None


@dataclass
class Transaction:
    amount: float
    date: dt.date
    type: TransactionType
    category: str = ""
    description: str = ""
    notes: str = ""
    name: str = ""
    id: Optional[int] = None


@dataclass
class SavingsGoal:
    name: str
    target_amount: float = 0.0
    current_amount: float = 0.0
    deadline: Optional[dt.date] = None
    priority: GoalPriority = GoalPriority.MEDIUM
    tags: List[str] = field(default_factory=list)
    note: str = ""
    created_on: Optional[str] = None
    id: Optional[int] = None

    @property
    def remaining(self) -> float:
        return self.target_amount - self.current_amount


# ---------------------------------------------------------------------------
# Value parsing
# ---------------------------------------------------------------------------


def parse_date(value: Any, *, required: bool = True) -> Optional[dt.date]:
    """Parse a wire date (``YYYY-MM-DD`` or an ISO timestamp) into a date.

    The time-of-day component of timestamps is discarded.
    """
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            raise InvalidRecordError("date value is missing")
        return None
    text = str(value).strip()
    try:
        return dt.date.fromisoformat(text[:10])
    except ValueError as exc:
        raise InvalidRecordError(f"Unrecognized date: {text!r}") from exc


def to_float(value: Any, default: float = 0.0) -> float:
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidRecordError(f"Invalid number: {value!r}") from exc


def parse_tags(value: Any) -> List[str]:
    """Split a comma-separated tag string, trimming blanks."""
    if not value:
        return []
    if isinstance(value, (list, tuple)):
        parts: Iterable[Any] = value
    else:
        parts = str(value).split(",")
    return [str(p).strip() for p in parts if str(p).strip()]


def join_tags(tags: Iterable[str]) -> str:
    return ",".join(t.strip() for t in tags if t and t.strip())


def is_valid_month(value: Optional[str]) -> bool:
    return bool(value) and bool(_MONTH_RE.match(value))


def month_key(value: Optional[dt.date] = None) -> str:
    value = value or dt.date.today()
    return f"{value.year:04d}-{value.month:02d}"


def reference_name(value: Any) -> str:
    """Extract the display name from a lookup field (``{"Id": .., "Name": ..}``)."""
    if isinstance(value, dict):
        return str(value.get("Name") or "")
    return ""
