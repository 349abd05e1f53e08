"""Shared create/read/update/delete plumbing for entity services.

Each entity service names its table and wire fields and supplies the two
translations (``to_domain`` / ``to_wire``); everything that deals with the
record service envelope lives here so failures are handled one way:

* ``success: false`` on the envelope -> :class:`RecordServiceError`
* failed items inside ``results`` -> :class:`RecordValidationError`
* missing target on get/update/delete, or an HTTP 404 envelope for one
  record -> :class:`RecordNotFoundError`
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Generic, List, Optional, Sequence, Tuple, TypeVar

from ..errors import (
    InvalidRecordError,
    RecordNotFoundError,
    RecordServiceError,
    RecordValidationError,
)
from ..record_client import Envelope, RecordClient

logger = logging.getLogger(__name__)

T = TypeVar("T")


def where(field: str, operator: str, *values: Any) -> Dict[str, Any]:
    """Build a single ``where`` condition."""
    return {"FieldName": field, "Operator": operator, "Values": list(values)}


def where_all(*conditions: Tuple[str, str, Any]) -> List[Dict[str, Any]]:
    """Build a ``whereGroups`` clause AND-ing ``(field, operator, value)`` triples."""
    return [{
        "operator": "AND",
        "subGroups": [{
            "conditions": [
                {"fieldName": f, "operator": op, "values": [v]}
                for f, op, v in conditions
            ],
        }],
    }]


def order_by(field: str, direction: str = "ASC") -> List[Dict[str, str]]:
    return [{"fieldName": field, "sorttype": direction}]


def compact(record: Dict[str, Any]) -> Dict[str, Any]:
    """Drop unset values so partial writes leave other columns alone."""
    return {k: v for k, v in record.items() if v is not None}


class EntityService(Generic[T]):
    """Base class binding a record table to a domain dataclass."""

    table: str = ""
    label: str = "record"
    fields: Sequence[str] = ()
    reference_fields: Sequence[str] = ()
    default_order: Optional[List[Dict[str, str]]] = None

    def __init__(self, client: RecordClient):
        self.client = client

    # Translation hooks -----------------------------------------------------

    def to_domain(self, record: Dict[str, Any]) -> T:
        raise NotImplementedError

    def to_wire(self, entity: T) -> Dict[str, Any]:
        raise NotImplementedError

    # Reads -----------------------------------------------------------------

    def field_params(self) -> List[Dict[str, Any]]:
        params: List[Dict[str, Any]] = [{"field": {"Name": "Id"}}]
        params.extend({"field": {"Name": name}} for name in self.fields)
        params.extend(
            {"field": {"Name": name}, "referenceField": {"field": {"Name": "Name"}}}
            for name in self.reference_fields
        )
        return params

    def list_all(self) -> List[T]:
        return self._query(orderBy=self.default_order)

    def get(self, record_id: int) -> T:
        response = self.client.get_record_by_id(self.table, int(record_id), {"fields": self.field_params()})
        self._check(response, f"fetch {self.label} {record_id}", record_id)
        data = response.get("data")
        if not data:
            logger.warning("%s %s not found", self.label.capitalize(), record_id)
            raise RecordNotFoundError(self.table, record_id)
        return self.to_domain(data)

    def _query(self, **params: Any) -> List[T]:
        payload = {"fields": self.field_params()}
        payload.update({k: v for k, v in params.items() if v})
        response = self.client.fetch_records(self.table, payload)
        self._check(response, f"fetch {self.label}s")
        items: List[T] = []
        for record in response.get("data") or []:
            try:
                items.append(self.to_domain(record))
            except InvalidRecordError as exc:
                logger.warning("Skipping %s %s: %s", self.label, record.get("Id"), exc)
        logger.debug("Retrieved %d records from %s", len(items), self.table)
        return items

    # Writes ----------------------------------------------------------------

    def _create(self, wire: Dict[str, Any]) -> Dict[str, Any]:
        response = self.client.create_record(self.table, {"records": [compact(wire)]})
        data = self._single_result(response, f"create {self.label}")
        logger.info("Created %s %s", self.label, data.get("Id"))
        return data

    def _update(self, record_id: int, wire: Dict[str, Any]) -> Dict[str, Any]:
        record = compact(wire)
        record["Id"] = int(record_id)
        response = self.client.update_record(self.table, {"records": [record]})
        data = self._single_result(response, f"update {self.label}", record_id)
        logger.info("Updated %s %s", self.label, record_id)
        return data

    def delete(self, record_id: int) -> None:
        response = self.client.delete_record(self.table, {"RecordIds": [int(record_id)]})
        self._single_result(response, f"delete {self.label}", record_id)
        logger.info("Deleted %s %s", self.label, record_id)

    # Envelope handling -----------------------------------------------------

    def _check(self, response: Envelope, action: str, record_id: Optional[int] = None) -> None:
        if not response.get("success"):
            message = response.get("message") or f"Failed to {action}"
            if record_id is not None and response.get("statusCode") == 404:
                logger.warning("%s %s not found: %s", self.label.capitalize(), record_id, message)
                raise RecordNotFoundError(self.table, record_id)
            logger.error("Failed to %s: %s", action, message)
            raise RecordServiceError(message)

    def _single_result(
        self, response: Envelope, action: str, record_id: Optional[int] = None
    ) -> Dict[str, Any]:
        self._check(response, action, record_id)
        results = response.get("results") or []
        if not results:
            if record_id is not None:
                raise RecordNotFoundError(self.table, record_id)
            raise RecordServiceError(f"Failed to {action}: the service returned no results")

        succeeded = [r for r in results if r.get("success")]
        failed = [r for r in results if not r.get("success")]
        if failed:
            if record_id is not None and all(r.get("statusCode") == 404 for r in failed):
                logger.warning("%s %s not found", self.label.capitalize(), record_id)
                raise RecordNotFoundError(self.table, record_id)
            error = RecordValidationError(
                action, failed, committed=[r.get("data") or {} for r in succeeded]
            )
            logger.error("%s", error)
            raise error
        return succeeded[0].get("data") or {}
