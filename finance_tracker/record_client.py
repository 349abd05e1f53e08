"""HTTP client for the hosted record service.

The service stores named tables of records and answers every call with an
envelope::

    {"success": bool, "data": [...] | {...} | None, "results": [...], "message": str}

:class:`RecordClient` only moves envelopes back and forth. It never raises for
a failed call: transport errors and malformed bodies are folded into a
``{"success": False, "message": ...}`` envelope so entity services have a
single failure path to handle.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from .config import RecordServiceSettings

logger = logging.getLogger(__name__)

Envelope = Dict[str, Any]


class RecordClient:
    """Generic create/read/update/delete over named record tables."""

    def __init__(
        self,
        settings: RecordServiceSettings,
        *,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.settings = settings
        headers = {"Content-Type": "application/json"}
        if settings.project_id:
            headers["X-Project-Id"] = settings.project_id
        if settings.public_key:
            headers["X-Public-Key"] = settings.public_key
        self._http = httpx.Client(base_url=settings.base_url, headers=headers, transport=transport)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "RecordClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # Public API -------------------------------------------------------------

    def fetch_records(self, table: str, params: Optional[Dict[str, Any]] = None) -> Envelope:
        """Query a table. ``params`` may hold fields, where, whereGroups, orderBy and pagingInfo."""
        return self._send("POST", f"/tables/{table}/records/query", params or {})

    def get_record_by_id(
        self, table: str, record_id: int, params: Optional[Dict[str, Any]] = None
    ) -> Envelope:
        return self._send("POST", f"/tables/{table}/records/{int(record_id)}/query", params or {})

    def create_record(self, table: str, payload: Dict[str, Any]) -> Envelope:
        return self._send("POST", f"/tables/{table}/records", payload)

    def update_record(self, table: str, payload: Dict[str, Any]) -> Envelope:
        return self._send("PATCH", f"/tables/{table}/records", payload)

    def delete_record(self, table: str, payload: Dict[str, Any]) -> Envelope:
        return self._send("DELETE", f"/tables/{table}/records", payload)

    # Internals --------------------------------------------------------------

    def _send(self, method: str, path: str, body: Dict[str, Any]) -> Envelope:
        try:
            response = self._http.request(method, path, json=body)
        except httpx.HTTPError as exc:
            logger.error("Record service %s %s failed: %s", method, path, exc)
            return {"success": False, "message": f"Could not reach the record service: {exc}"}

        try:
            payload = response.json()
        except ValueError:
            logger.error("Record service %s %s returned non-JSON body (HTTP %s)", method, path, response.status_code)
            return {"success": False, "message": f"Record service returned HTTP {response.status_code}"}

        if not isinstance(payload, dict):
            return {"success": False, "message": "Record service returned an unexpected payload"}

        if response.is_error:
            payload.setdefault("message", f"Record service returned HTTP {response.status_code}")
            payload["success"] = False
            payload.setdefault("statusCode", response.status_code)
        return payload
