from __future__ import annotations

import logging

from app.application.ports.persistence_sink import PersistenceSinkPort


class LoggingSink(PersistenceSinkPort):
    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def save_support(self, name: str, problem: str, description: str, status: str) -> None:
        self._logger.info(
            "Support outcome recorded: %s | %s",
            name,
            problem,
            extra={"intent": "SupportOutcome", "status": status},
        )

    def save_plans(
        self,
        name: str,
        situation: str,
        current_plan: str,
        desired_plan: str,
        phone: str,
        notes: str,
    ) -> None:
        self._logger.info(
            "Plan inquiry recorded: %s | %s",
            name,
            situation,
            extra={"intent": "PlanInquiry", "reason": notes},
        )

    def save_feedback(self, name: str, service_type: str, rating: str, comment: str) -> None:
        self._logger.info(
            "Feedback recorded: %s",
            name,
            extra={"intent": "FeedbackEntry", "service": service_type, "reason": f"rating={rating}"},
        )
