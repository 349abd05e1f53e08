"""Exception types raised by the record client boundary and entity services."""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class FinanceServiceError(Exception):
    """Base exception for record service operations."""


class RecordServiceError(FinanceServiceError):
    """The record service rejected the call or could not be reached."""


class RecordValidationError(FinanceServiceError):
    """One or more records in a batch were rejected.

    Items that succeeded in the same batch are still committed by the
    service and are exposed on ``committed``.
    """

    def __init__(
        self,
        action: str,
        failures: List[Dict[str, Any]],
        committed: Optional[List[Dict[str, Any]]] = None,
    ):
        self.action = action
        self.failures = failures
        self.committed = committed or []
        super().__init__(f"Failed to {action}: " + "; ".join(self.messages))

    @property
    def messages(self) -> List[str]:
        """Flatten each failure's message and field errors into display strings."""
        lines: List[str] = []
        for failure in self.failures:
            if failure.get("message"):
                lines.append(str(failure["message"]))
            for error in failure.get("errors") or []:
                if isinstance(error, dict):
                    label = error.get("fieldLabel") or error.get("field") or "field"
                    lines.append(f"{label}: {error.get('message', 'invalid value')}")
                else:
                    lines.append(str(error))
        return lines or ["record was rejected"]


class RecordNotFoundError(FinanceServiceError):
    """The record targeted by a read, update or delete does not exist."""

    def __init__(self, table: str, record_id: Any = None, message: Optional[str] = None):
        self.table = table
        self.record_id = record_id
        super().__init__(message or f"{table} record {record_id} not found")


class CategoryNotFoundError(RecordNotFoundError):
    """A category name could not be resolved to a category record."""

    def __init__(self, name: str):
        self.name = name
        super().__init__("Category_c", message=f"Category not found: {name!r}")


class InvalidRecordError(FinanceServiceError):
    """A record returned by the service failed domain validation."""
