"""Shared fixtures: an in-memory record service and a wired service bundle."""

from __future__ import annotations

import datetime as dt
from typing import Any, Callable, Dict, List, Optional

import pytest

from finance_tracker.services import build_services

# Lookup fields and the table they point at
REFERENCE_TABLES = {"category_c": "Category_c"}


def _matches(value: Any, operator: str, expected: Any) -> bool:
    if operator == "EqualTo":
        return str(value) == str(expected)
    if operator == "StartsWith":
        return value is not None and str(value).startswith(str(expected))
    raise AssertionError(f"unsupported operator {operator}")


class FakeRecordClient:
    """Implements the record client contract against dictionaries.

    ``rejections`` holds callables ``(table, record) -> Optional[str]``; a
    returned message fails that item the way the service reports a field
    validation error. Setting ``outage`` makes every call fail at the
    envelope level.
    """

    def __init__(self) -> None:
        self.tables: Dict[str, Dict[int, Dict[str, Any]]] = {}
        self.calls: List[tuple] = []
        self.rejections: List[Callable[[str, Dict[str, Any]], Optional[str]]] = []
        self.outage: Optional[str] = None
        self._next_id = 1
        self._clock = dt.datetime(2024, 1, 1, 9, 0, 0)

    # Test helpers ----------------------------------------------------------

    def seed(self, table: str, **fields: Any) -> int:
        record_id = self._next_id
        self._next_id += 1
        record = {"Id": record_id}
        record.update(self._stamp())
        record.update(fields)
        self.tables.setdefault(table, {})[record_id] = record
        return record_id

    def rows(self, table: str) -> List[Dict[str, Any]]:
        return list(self.tables.get(table, {}).values())

    def _stamp(self) -> Dict[str, str]:
        self._clock += dt.timedelta(minutes=1)
        stamp = self._clock.isoformat()
        return {"CreatedOn": stamp, "ModifiedOn": stamp}

    # Contract --------------------------------------------------------------

    def fetch_records(self, table: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        params = params or {}
        self.calls.append(("fetch", table, params))
        if self.outage:
            return {"success": False, "message": self.outage}
        rows = [r for r in self.rows(table) if self._selected(r, params)]
        for order in reversed(params.get("orderBy") or []):
            name = order["fieldName"]
            rows.sort(
                key=lambda r: (r.get(name) is None, str(r.get(name) or "")),
                reverse=order.get("sorttype") == "DESC",
            )
        return {"success": True, "data": [self._project(r, params) for r in rows]}

    def get_record_by_id(self, table: str, record_id: int, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        self.calls.append(("get", table, record_id))
        if self.outage:
            return {"success": False, "message": self.outage}
        record = self.tables.get(table, {}).get(int(record_id))
        return {"success": True, "data": self._project(record, params or {}) if record else None}

    def create_record(self, table: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        self.calls.append(("create", table, payload))
        if self.outage:
            return {"success": False, "message": self.outage}
        results = []
        for record in payload["records"]:
            problem = self._rejected(table, record)
            if problem:
                results.append({"success": False, "errors": [{"fieldLabel": "Name", "message": problem}]})
                continue
            record_id = self.seed(table, **record)
            results.append({"success": True, "data": dict(self.tables[table][record_id])})
        return {"success": True, "results": results}

    def update_record(self, table: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        self.calls.append(("update", table, payload))
        if self.outage:
            return {"success": False, "message": self.outage}
        results = []
        for record in payload["records"]:
            stored = self.tables.get(table, {}).get(record["Id"])
            if stored is None:
                results.append({"success": False, "statusCode": 404, "message": "Record does not exist"})
                continue
            problem = self._rejected(table, record)
            if problem:
                results.append({"success": False, "errors": [{"fieldLabel": "Name", "message": problem}]})
                continue
            stored.update(record)
            stored["ModifiedOn"] = self._stamp()["ModifiedOn"]
            results.append({"success": True, "data": dict(stored)})
        return {"success": True, "results": results}

    def delete_record(self, table: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        self.calls.append(("delete", table, payload))
        if self.outage:
            return {"success": False, "message": self.outage}
        results = []
        for record_id in payload["RecordIds"]:
            if self.tables.get(table, {}).pop(record_id, None) is None:
                results.append({"success": False, "statusCode": 404, "message": "Record does not exist"})
            else:
                results.append({"success": True, "data": {"Id": record_id}})
        return {"success": True, "results": results}

    # Internals -------------------------------------------------------------

    def _rejected(self, table: str, record: Dict[str, Any]) -> Optional[str]:
        for rule in self.rejections:
            message = rule(table, record)
            if message:
                return message
        return None

    def _selected(self, record: Dict[str, Any], params: Dict[str, Any]) -> bool:
        for cond in params.get("where") or []:
            if not any(_matches(record.get(cond["FieldName"]), cond["Operator"], v) for v in cond["Values"]):
                return False
        for group in params.get("whereGroups") or []:
            for sub in group["subGroups"]:
                for cond in sub["conditions"]:
                    if not any(_matches(record.get(cond["fieldName"]), cond["operator"], v) for v in cond["values"]):
                        return False
        return True

    def _project(self, record: Dict[str, Any], params: Dict[str, Any]) -> Dict[str, Any]:
        fields = params.get("fields")
        if not fields:
            return dict(record)
        projected: Dict[str, Any] = {}
        for spec in fields:
            name = spec["field"]["Name"]
            if name not in record:
                continue
            value = record[name]
            if "referenceField" in spec and value is not None:
                target = self.tables.get(REFERENCE_TABLES[name], {}).get(int(value))
                value = {"Id": int(value), "Name": target.get("Name") if target else None}
            projected[name] = value
        return projected


@pytest.fixture
def fake_client() -> FakeRecordClient:
    return FakeRecordClient()


@pytest.fixture
def services(fake_client):
    return build_services(fake_client)


@pytest.fixture
def food_category(fake_client) -> int:
    return fake_client.seed("Category_c", Name="Food", color_c="#ff0000", icon_c="🍔", isCustom_c=False)
