from __future__ import annotations

from dataclasses import dataclass

from app.domain.entities.dialog_state import DialogState


@dataclass(frozen=True)
class SessionRecord:
    state: DialogState = DialogState.MENU
    full_name: str = ""
    phone: str = ""
    current_plan: str = ""
    desired_plan: str = ""
    situation: str = ""
    problem: str = ""  # short problem label, "PROBLEMA RELATADO" column
    description: str = ""  # verbatim problem text
    rating: str = ""
    ai_attempts: int = 0
    service_type: str = ""
    awaiting_followup_comment: bool = False
    last_activity_at: int = 0

    @staticmethod
    def fresh(last_activity_at: int = 0) -> "SessionRecord":
        return SessionRecord(last_activity_at=last_activity_at)
