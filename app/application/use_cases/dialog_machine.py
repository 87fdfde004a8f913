from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable

from app.application.use_cases import replies
from app.application.use_cases.remediation import MAX_ATTEMPTS, RemediationEngine
from app.application.utils.message_rules import (
    is_global_command,
    is_keep_current_plan,
    is_no,
    is_phone_like,
    is_yes,
    strip_whitespace,
)
from app.domain.entities.dialog_state import DialogState
from app.domain.entities.intents import FeedbackEntry, PlanInquiry, SupportOutcome
from app.domain.entities.reply import DialogTurn
from app.domain.entities.session_record import SessionRecord

SERVICE_SUPPORT = "Technical Support"
SERVICE_PLANS = "Plans"
SERVICE_FREE_ASSISTANT = "Free Assistant"

STATUS_RESOLVED = "Resolved by assistant"
STATUS_ESCALATED = "Escalated to human technician"

SITUATION_CURRENT = "Current Customer"
SITUATION_NEW = "New Customer"
NO_CURRENT_PLAN = "None"

_Handler = Callable[[SessionRecord, str, str], DialogTurn]


class DialogStateMachine:
    """
    Transition function for one inbound text.

    step() never touches storage: it takes the loaded record and returns
    the next record, the reply and any side-effect intents. The only
    outbound call is the generative backend, through RemediationEngine,
    which never raises.
    """

    def __init__(self, remediation: RemediationEngine) -> None:
        self._remediation = remediation
        self._logger = logging.getLogger(__name__)
        self._handlers: dict[DialogState, _Handler] = {
            DialogState.MENU: self._menu,
            DialogState.SUPPORT_NAME: self._support_name,
            DialogState.SUPPORT_PROBLEM: self._support_problem,
            DialogState.SUPPORT_DIAGNOSIS: self._support_diagnosis,
            DialogState.SUPPORT_FEEDBACK_RATING: self._support_feedback_rating,
            DialogState.SUPPORT_FEEDBACK_COMMENT: self._support_feedback_comment,
            DialogState.PLANS_CLIENT_CHECK: self._plans_client_check,
            DialogState.PLANS_CURRENT_PLAN: self._plans_current_plan,
            DialogState.PLANS_SELECTION: self._plans_selection,
            DialogState.PLANS_NAME: self._plans_name,
            DialogState.PLANS_PHONE: self._plans_phone,
            DialogState.FREE_ASSISTANT: self._free_assistant,
        }

    def step(self, record: SessionRecord, text: str, session_key: str) -> DialogTurn:
        if is_global_command(text):
            return self.restart(record)

        handler = self._handlers.get(record.state)
        if handler is None:
            self._logger.warning(
                "Unknown dialog state, resetting session",
                extra={"session_key": session_key, "state": record.state},
            )
            return self.restart(record)
        return handler(record, text, session_key)

    def restart(self, record: SessionRecord) -> DialogTurn:
        """Main menu with every collected field discarded."""
        return DialogTurn(record=SessionRecord.fresh(record.last_activity_at), text=replies.MAIN_MENU)

    # --- menu -----------------------------------------------------------

    def _menu(self, record: SessionRecord, text: str, session_key: str) -> DialogTurn:
        option = text.strip()
        fresh = SessionRecord.fresh(record.last_activity_at)

        if option == "1":
            return DialogTurn(
                record=replace(fresh, state=DialogState.SUPPORT_NAME, service_type=SERVICE_SUPPORT),
                text=replies.SUPPORT_SELECTED,
            )
        if option == "2":
            return DialogTurn(
                record=replace(fresh, state=DialogState.PLANS_CLIENT_CHECK, service_type=SERVICE_PLANS),
                text=replies.PLANS_SELECTED,
            )
        if option == "3":
            return DialogTurn(record=replace(record, state=DialogState.MENU), text=replies.BILLING_INFO)
        if option == "4":
            return DialogTurn(
                record=replace(fresh, state=DialogState.FREE_ASSISTANT, service_type=SERVICE_FREE_ASSISTANT),
                text=replies.FREE_ASSISTANT_SELECTED,
            )
        return self.restart(record)

    # --- technical support ---------------------------------------------

    def _support_name(self, record: SessionRecord, text: str, session_key: str) -> DialogTurn:
        full_name = text.strip()
        return DialogTurn(
            record=replace(record, full_name=full_name, state=DialogState.SUPPORT_PROBLEM),
            text=replies.ask_problem(full_name),
        )

    def _support_problem(self, record: SessionRecord, text: str, session_key: str) -> DialogTurn:
        updated = replace(
            record,
            problem=text.strip(),
            description=text,
            ai_attempts=1,
            state=DialogState.SUPPORT_DIAGNOSIS,
        )
        reply = self._remediation.diagnose(1, updated.full_name, updated.problem)
        return DialogTurn(record=updated, text=reply)

    def _support_diagnosis(self, record: SessionRecord, text: str, session_key: str) -> DialogTurn:
        if is_yes(text):
            outcome = SupportOutcome(
                name=record.full_name,
                problem=record.problem,
                description=record.description,
                status=STATUS_RESOLVED,
            )
            return DialogTurn(
                record=replace(record, awaiting_followup_comment=False, state=DialogState.SUPPORT_FEEDBACK_RATING),
                text=replies.PROBLEM_RESOLVED,
                intents=(outcome,),
            )

        if is_no(text):
            attempt = min(record.ai_attempts + 1, MAX_ATTEMPTS)
            updated = replace(record, ai_attempts=attempt)
            if attempt >= MAX_ATTEMPTS:
                outcome = SupportOutcome(
                    name=record.full_name,
                    problem=record.problem,
                    description=record.description,
                    status=STATUS_ESCALATED,
                )
                return DialogTurn(
                    record=replace(
                        updated, awaiting_followup_comment=False, state=DialogState.SUPPORT_FEEDBACK_RATING
                    ),
                    text=replies.ESCALATED,
                    intents=(outcome,),
                )

            return DialogTurn(record=updated, text=self._remediation.diagnose(attempt, record.full_name, record.problem))

        return DialogTurn(record=record, text=replies.DIAGNOSIS_REPROMPT)

    def _support_feedback_rating(self, record: SessionRecord, text: str, session_key: str) -> DialogTurn:
        rating = text.strip()
        if not rating:
            return DialogTurn(record=record, text=replies.RATING_REPROMPT)
        return DialogTurn(
            record=replace(
                record,
                rating=rating,
                awaiting_followup_comment=True,
                state=DialogState.SUPPORT_FEEDBACK_COMMENT,
            ),
            text=replies.ASK_COMMENT,
        )

    def _support_feedback_comment(self, record: SessionRecord, text: str, session_key: str) -> DialogTurn:
        comment = "" if is_no(text) else text.strip()
        entry = FeedbackEntry(
            name=record.full_name,
            service_type=record.service_type,
            rating=record.rating,
            comment=comment,
        )
        return DialogTurn(
            record=replace(record, awaiting_followup_comment=False, state=DialogState.MENU),
            text=replies.FEEDBACK_RECORDED,
            intents=(entry,),
        )

    # --- plans ------------------------------------------------------------

    def _plans_client_check(self, record: SessionRecord, text: str, session_key: str) -> DialogTurn:
        if is_yes(text):
            return DialogTurn(
                record=replace(record, situation=SITUATION_CURRENT, state=DialogState.PLANS_CURRENT_PLAN),
                text=replies.CURRENT_CUSTOMER,
            )
        if is_no(text):
            return DialogTurn(
                record=replace(
                    record,
                    situation=SITUATION_NEW,
                    current_plan=NO_CURRENT_PLAN,
                    state=DialogState.PLANS_SELECTION,
                ),
                text=replies.NEW_CUSTOMER,
            )
        return DialogTurn(record=record, text=replies.YES_NO_REPROMPT)

    def _plans_current_plan(self, record: SessionRecord, text: str, session_key: str) -> DialogTurn:
        current_plan = text.strip()
        return DialogTurn(
            record=replace(record, current_plan=current_plan, state=DialogState.PLANS_SELECTION),
            text=replies.upgrade_options(current_plan),
        )

    def _plans_selection(self, record: SessionRecord, text: str, session_key: str) -> DialogTurn:
        desired_plan = text.strip()
        if is_keep_current_plan(desired_plan):
            return DialogTurn(
                record=replace(record, desired_plan=desired_plan, state=DialogState.MENU),
                text=replies.KEEP_PLAN,
            )
        return DialogTurn(
            record=replace(record, desired_plan=desired_plan, state=DialogState.PLANS_NAME),
            text=replies.ASK_CONTACT_NAME,
        )

    def _plans_name(self, record: SessionRecord, text: str, session_key: str) -> DialogTurn:
        phone = record.phone
        if not phone and is_phone_like(session_key):
            phone = session_key
        updated = replace(record, full_name=text.strip(), phone=phone)

        if updated.phone:
            return self._finish_plans(updated)
        return DialogTurn(record=replace(updated, state=DialogState.PLANS_PHONE), text=replies.ASK_PHONE)

    def _plans_phone(self, record: SessionRecord, text: str, session_key: str) -> DialogTurn:
        return self._finish_plans(replace(record, phone=strip_whitespace(text)))

    def _finish_plans(self, record: SessionRecord) -> DialogTurn:
        inquiry = PlanInquiry(
            name=record.full_name,
            situation=record.situation,
            current_plan=record.current_plan,
            desired_plan=record.desired_plan,
            phone=record.phone,
            notes=replies.plans_notes(record.desired_plan, record.current_plan),
        )
        return DialogTurn(
            record=replace(record, state=DialogState.MENU),
            text=replies.plans_registered(record.full_name, record.situation, record.desired_plan, record.phone),
            intents=(inquiry,),
        )

    # --- free assistant -------------------------------------------------

    def _free_assistant(self, record: SessionRecord, text: str, session_key: str) -> DialogTurn:
        # "menu" is intercepted by step() as a global command
        return DialogTurn(record=record, text=self._remediation.answer_free_question(text))
