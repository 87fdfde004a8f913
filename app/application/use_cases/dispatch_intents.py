from __future__ import annotations

import logging
from typing import Iterable

from app.application.exceptions import PersistenceSinkError
from app.application.ports.persistence_sink import PersistenceSinkPort
from app.domain.entities.intents import FeedbackEntry, PlanInquiry, SideEffectIntent, SupportOutcome


class IntentDispatcher:
    """Best-effort delivery of side-effect intents to the persistence sink."""

    def __init__(self, sink: PersistenceSinkPort) -> None:
        self._sink = sink
        self._logger = logging.getLogger(__name__)

    def dispatch(self, intents: Iterable[SideEffectIntent]) -> int:
        """Deliver every intent; returns how many were written."""
        delivered = 0
        for intent in intents:
            try:
                self._deliver(intent)
                delivered += 1
            except PersistenceSinkError as e:
                self._logger.error(
                    "Persistence sink write failed",
                    extra={"intent": type(intent).__name__, "error": str(e)},
                )
            except Exception as e:
                self._logger.exception(
                    "Unexpected persistence sink failure",
                    extra={"intent": type(intent).__name__, "error": str(e)},
                )
        return delivered

    def _deliver(self, intent: SideEffectIntent) -> None:
        if isinstance(intent, SupportOutcome):
            self._sink.save_support(intent.name, intent.problem, intent.description, intent.status)
        elif isinstance(intent, PlanInquiry):
            self._sink.save_plans(
                intent.name,
                intent.situation,
                intent.current_plan,
                intent.desired_plan,
                intent.phone,
                intent.notes,
            )
        elif isinstance(intent, FeedbackEntry):
            self._sink.save_feedback(intent.name, intent.service_type, intent.rating, intent.comment)
        else:
            raise TypeError(f"Unsupported intent: {intent!r}")
