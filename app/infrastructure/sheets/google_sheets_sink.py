from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable
from urllib.parse import quote

import httpx
from google.auth.transport.requests import Request
from google.oauth2 import service_account

from app.application.exceptions import PersistenceSinkError
from app.application.ports.persistence_sink import PersistenceSinkPort

SHEETS_API_BASE = "https://sheets.googleapis.com/v4/spreadsheets"
SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
TIMESTAMP_FORMAT = "%d/%m/%Y %H:%M:%S"

FEEDBACK_TAB = "Página1"
SUPPORT_TAB = "Página2"
PLANS_TAB = "Página3"

HEADERS: dict[str, list[str]] = {
    FEEDBACK_TAB: ["DATA/HORA", "NOME COMPLETO", "TIPO DE ATENDIMENTO", "AVALIAÇÃO", "SUGESTÕES/OBSERVAÇÕES"],
    SUPPORT_TAB: ["DATA/HORA", "NOME COMPLETO", "PROBLEMA RELATADO", "DESCRIÇÃO DETALHADA", "STATUS RESOLUÇÃO"],
    PLANS_TAB: [
        "DATA/HORA",
        "NOME COMPLETO",
        "SITUAÇÃO CLIENTE",
        "PLANO ATUAL",
        "PLANO DESEJADO",
        "TELEFONE",
        "OBSERVAÇÕES",
    ],
}


def _column_letter(count: int) -> str:
    return chr(ord("A") + count - 1)


class GoogleSheetsSink(PersistenceSinkPort):
    """
    Appends one row per finished conversation to a Google Sheets spreadsheet.

    Each intent kind has its own tab. Rows start with a local timestamp.
    """

    def __init__(
        self,
        spreadsheet_id: str,
        credentials: Any,
        timeout_seconds: float = 10.0,
        client: httpx.Client | None = None,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._spreadsheet_id = spreadsheet_id
        self._credentials = credentials
        self._client = client or httpx.Client(timeout=timeout_seconds)
        self._now = now
        self._logger = logging.getLogger(__name__)

    @classmethod
    def from_service_account_file(
        cls, spreadsheet_id: str, key_path: str, timeout_seconds: float = 10.0
    ) -> "GoogleSheetsSink":
        credentials = service_account.Credentials.from_service_account_file(key_path, scopes=SCOPES)
        return cls(spreadsheet_id=spreadsheet_id, credentials=credentials, timeout_seconds=timeout_seconds)

    def ensure_headers(self) -> None:
        """Write the header row of every tab."""
        for tab, headers in HEADERS.items():
            cell_range = f"{tab}!A1:{_column_letter(len(headers))}1"
            self._request("PUT", cell_range, "", [headers])
            self._logger.info("Sheet headers written", extra={"reason": tab})

    def save_support(self, name: str, problem: str, description: str, status: str) -> None:
        self._append(SUPPORT_TAB, [name, problem, description, status])

    def save_plans(
        self,
        name: str,
        situation: str,
        current_plan: str,
        desired_plan: str,
        phone: str,
        notes: str,
    ) -> None:
        self._append(PLANS_TAB, [name, situation, current_plan, desired_plan, phone, notes])

    def save_feedback(self, name: str, service_type: str, rating: str, comment: str) -> None:
        self._append(FEEDBACK_TAB, [name, service_type, rating, comment])

    def _append(self, tab: str, values: list[str]) -> None:
        row = [self._now().strftime(TIMESTAMP_FORMAT), *values]
        cell_range = f"{tab}!A:{_column_letter(len(row))}"
        self._request("POST", cell_range, ":append", [row])
        self._logger.info("Row appended to sheet", extra={"reason": tab})

    def _request(self, method: str, cell_range: str, suffix: str, values: list[list[str]]) -> None:
        url = f"{SHEETS_API_BASE}/{self._spreadsheet_id}/values/{quote(cell_range, safe='!:')}{suffix}"
        try:
            resp = self._client.request(
                method,
                url,
                params={"valueInputOption": "RAW"},
                headers={"Authorization": f"Bearer {self._access_token()}"},
                json={"range": cell_range, "values": values},
            )
        except httpx.HTTPError as e:
            raise PersistenceSinkError(f"Sheets request failed: {e}") from e

        if resp.status_code >= 400:
            self._logger.error(
                "Sheets write failed",
                extra={"status": resp.status_code, "reason": cell_range, "error": resp.text[:300]},
            )
            raise PersistenceSinkError(f"Sheets API returned {resp.status_code} for {cell_range}")

    def _access_token(self) -> str:
        if not self._credentials.valid:
            try:
                self._credentials.refresh(Request())
            except Exception as e:
                raise PersistenceSinkError(f"Could not refresh Google credentials: {e}") from e
        return self._credentials.token
