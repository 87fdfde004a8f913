"""
Tests for the Google Sheets persistence sink (HTTP mocked with httpx.MockTransport).
"""

from __future__ import annotations

import json
from datetime import datetime
from types import SimpleNamespace

import httpx
import pytest

from app.application.exceptions import PersistenceSinkError
from app.infrastructure.sheets.google_sheets_sink import GoogleSheetsSink
from app.infrastructure.sheets.logging_sink import LoggingSink


class RefreshingCredentials:
    def __init__(self) -> None:
        self.valid = False
        self.token = None
        self.refreshes = 0

    def refresh(self, request) -> None:
        self.refreshes += 1
        self.valid = True
        self.token = "fresh-token"


def _sink(handler, credentials=None) -> GoogleSheetsSink:
    return GoogleSheetsSink(
        spreadsheet_id="sheet-123",
        credentials=credentials or SimpleNamespace(valid=True, token="tok"),
        client=httpx.Client(transport=httpx.MockTransport(handler)),
        now=lambda: datetime(2026, 10, 19, 9, 5, 7),
    )


def test_save_support_appends_row_to_support_tab():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"updates": {"updatedRows": 1}})

    _sink(handler).save_support("Maria", "Sem internet", "Sem internet desde ontem", "Resolved by assistant")

    request = seen[0]
    assert request.method == "POST"
    assert request.url.path == "/v4/spreadsheets/sheet-123/values/Página2!A:E:append"
    assert request.url.params["valueInputOption"] == "RAW"
    assert request.headers["Authorization"] == "Bearer tok"
    assert json.loads(request.content)["values"] == [
        ["19/10/2026 09:05:07", "Maria", "Sem internet", "Sem internet desde ontem", "Resolved by assistant"]
    ]


def test_plans_and_feedback_use_their_own_tabs():
    paths: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.path)
        return httpx.Response(200, json={})

    sink = _sink(handler)
    sink.save_plans("Ana", "New Customer", "None", "QI FIBRA BASIC", "44999990000", "Interesse em: QI FIBRA BASIC")
    sink.save_feedback("Ana", "Plans", "Bom", "")

    assert paths[0].endswith("/values/Página3!A:G:append")
    assert paths[1].endswith("/values/Página1!A:E:append")


def test_ensure_headers_writes_each_tab():
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={})

    _sink(handler).ensure_headers()

    assert [r.method for r in requests] == ["PUT", "PUT", "PUT"]
    assert requests[2].url.path.endswith("/values/Página3!A1:G1")
    assert json.loads(requests[0].content)["values"][0][0] == "DATA/HORA"


def test_http_error_raises_sink_error():
    sink = _sink(lambda request: httpx.Response(403, json={"error": {"message": "denied"}}))

    with pytest.raises(PersistenceSinkError):
        sink.save_feedback("Ana", "Plans", "Bom", "")


def test_transport_error_raises_sink_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("no route", request=request)

    with pytest.raises(PersistenceSinkError):
        _sink(handler).save_feedback("Ana", "Plans", "Bom", "")


def test_expired_credentials_are_refreshed():
    credentials = RefreshingCredentials()
    auth_headers: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        auth_headers.append(request.headers["Authorization"])
        return httpx.Response(200, json={})

    _sink(handler, credentials=credentials).save_feedback("Ana", "Plans", "Bom", "")

    assert credentials.refreshes == 1
    assert auth_headers == ["Bearer fresh-token"]


def test_logging_sink_accepts_every_intent():
    sink = LoggingSink()

    sink.save_support("Ana", "Lento", "Lento", "Escalated to human technician")
    sink.save_plans("Ana", "New Customer", "None", "QI FIBRA BASIC", "44999990000", "notes")
    sink.save_feedback("Ana", "Plans", "Bom", "")
