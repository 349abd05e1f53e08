"""RecordClient against an httpx.MockTransport."""

from __future__ import annotations

import json

import httpx

from finance_tracker.config import load_record_settings
from finance_tracker.record_client import RecordClient


def _client(handler) -> RecordClient:
    settings = load_record_settings(base_url="https://records.test/api", project_id="proj-1", public_key="pk-1")
    return RecordClient(settings, transport=httpx.MockTransport(handler))


def test_fetch_records_posts_query_with_headers():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen['method'] = request.method
        seen['path'] = request.url.path
        seen['project'] = request.headers.get('X-Project-Id')
        seen['key'] = request.headers.get('X-Public-Key')
        seen['body'] = json.loads(request.content)
        return httpx.Response(200, json={'success': True, 'data': [{'Id': 1, 'Name': 'Checking'}]})

    with _client(handler) as client:
        response = client.fetch_records('accounts_c', {'fields': [{'field': {'Name': 'Name'}}]})

    assert response == {'success': True, 'data': [{'Id': 1, 'Name': 'Checking'}]}
    assert seen['method'] == 'POST'
    assert seen['path'] == '/api/tables/accounts_c/records/query'
    assert seen['project'] == 'proj-1'
    assert seen['key'] == 'pk-1'
    assert seen['body'] == {'fields': [{'field': {'Name': 'Name'}}]}


def test_write_routes_use_expected_methods():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.method, request.url.path, json.loads(request.content)))
        return httpx.Response(200, json={'success': True, 'results': []})

    with _client(handler) as client:
        client.get_record_by_id('bills_c', 7, {})
        client.create_record('bills_c', {'records': [{'Name': 'Rent'}]})
        client.update_record('bills_c', {'records': [{'Id': 7, 'Name': 'Rent'}]})
        client.delete_record('bills_c', {'RecordIds': [7]})

    assert [(m, p) for m, p, _ in seen] == [
        ('POST', '/api/tables/bills_c/records/7/query'),
        ('POST', '/api/tables/bills_c/records'),
        ('PATCH', '/api/tables/bills_c/records'),
        ('DELETE', '/api/tables/bills_c/records'),
    ]
    assert seen[-1][2] == {'RecordIds': [7]}


def test_transport_error_becomes_failed_envelope():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with _client(handler) as client:
        response = client.fetch_records('accounts_c')

    assert response['success'] is False
    assert 'Could not reach the record service' in response['message']


def test_non_json_body_becomes_failed_envelope():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="<html>Bad gateway</html>")

    with _client(handler) as client:
        response = client.fetch_records('accounts_c')

    assert response == {'success': False, 'message': 'Record service returned HTTP 502'}


def test_error_status_marks_envelope_failed():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(403, json={'message': 'Invalid public key'})

    with _client(handler) as client:
        response = client.create_record('accounts_c', {'records': []})

    assert response['success'] is False
    assert response['message'] == 'Invalid public key'
    assert response['statusCode'] == 403
