from __future__ import annotations

import json
from dataclasses import fields
from typing import Any

from app.application.exceptions import SessionStoreError
from app.domain.entities.dialog_state import DialogState
from app.domain.entities.session_record import SessionRecord

_RECORD_FIELDS = tuple(f.name for f in fields(SessionRecord) if f.name != "state")


def serialize_record(record: SessionRecord) -> str:
    """JSON for the data key. The state tag is stored separately."""
    data: dict[str, Any] = {name: getattr(record, name) for name in _RECORD_FIELDS}
    return json.dumps(data, ensure_ascii=False)


def deserialize_record(raw: str | bytes, state_tag: str | bytes | None) -> SessionRecord:
    """Rebuild a record; unknown keys are ignored, missing keys take defaults."""
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8")
    if isinstance(state_tag, bytes):
        state_tag = state_tag.decode("utf-8")

    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        raise SessionStoreError(f"Corrupted session record: {e}") from e
    if not isinstance(data, dict):
        raise SessionStoreError("Corrupted session record: expected a JSON object")

    defaults = SessionRecord()
    return SessionRecord(
        state=DialogState.parse(state_tag),
        full_name=str(data.get("full_name") or ""),
        phone=str(data.get("phone") or ""),
        current_plan=str(data.get("current_plan") or ""),
        desired_plan=str(data.get("desired_plan") or ""),
        situation=str(data.get("situation") or ""),
        problem=str(data.get("problem") or ""),
        description=str(data.get("description") or ""),
        rating=str(data.get("rating") or ""),
        ai_attempts=_as_int(data.get("ai_attempts"), defaults.ai_attempts),
        service_type=str(data.get("service_type") or ""),
        awaiting_followup_comment=bool(data.get("awaiting_followup_comment", False)),
        last_activity_at=_as_int(data.get("last_activity_at"), defaults.last_activity_at),
    )


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default
