from __future__ import annotations

from dataclasses import dataclass

from app.domain.entities.dialog_state import DialogState
from app.domain.entities.intents import SideEffectIntent
from app.domain.entities.session_record import SessionRecord


@dataclass(frozen=True)
class DialogTurn:
    record: SessionRecord
    text: str
    intents: tuple[SideEffectIntent, ...] = ()

    @property
    def state(self) -> DialogState:
        return self.record.state


@dataclass(frozen=True)
class TurnResult:
    reply: str
    session_key: str
    state: DialogState | None
    intents: tuple[SideEffectIntent, ...] = ()
    error: str | None = None  # None | "rate_limited"
