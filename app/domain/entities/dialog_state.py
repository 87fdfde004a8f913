from __future__ import annotations

from enum import Enum


class DialogState(str, Enum):
    MENU = "menu"
    SUPPORT_NAME = "support_name"
    SUPPORT_PROBLEM = "support_problem"
    SUPPORT_DIAGNOSIS = "support_diagnosis"
    SUPPORT_FEEDBACK_RATING = "support_feedback_rating"
    SUPPORT_FEEDBACK_COMMENT = "support_feedback_comment"
    PLANS_CLIENT_CHECK = "plans_client_check"
    PLANS_CURRENT_PLAN = "plans_current_plan"
    PLANS_SELECTION = "plans_selection"
    PLANS_NAME = "plans_name"
    PLANS_PHONE = "plans_phone"
    FREE_ASSISTANT = "free_assistant"

    @classmethod
    def parse(cls, value: str | None) -> "DialogState":
        """Map a stored tag to a state. Missing or unknown tags mean the menu."""
        if not value:
            return cls.MENU
        try:
            return cls(value)
        except ValueError:
            return cls.MENU
