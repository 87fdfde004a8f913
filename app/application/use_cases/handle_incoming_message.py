from __future__ import annotations

import logging
import time
from dataclasses import replace
from typing import Callable, Iterable

from app.application.exceptions import SessionStoreError
from app.application.ports.session_store import SessionStorePort
from app.application.use_cases.dialog_machine import DialogStateMachine
from app.application.use_cases.dispatch_intents import IntentDispatcher
from app.application.use_cases.send_reply import SendReplyUseCase
from app.application.utils.input_validation import sanitize_for_log
from app.application.utils.keyed_locks import KeyedLocks
from app.application.utils.rate_limiter import TokenBucketRateLimiter
from app.application.utils.recent_ids import RecentIds
from app.domain.entities.intents import SideEffectIntent
from app.domain.entities.message import Message
from app.domain.entities.reply import TurnResult
from app.domain.entities.session_record import SessionRecord

RATE_LIMITED = "rate_limited"
RATE_LIMITED_REPLY = "⏳ Muitas mensagens em pouco tempo. Aguarde alguns segundos e tente novamente."


class HandleIncomingMessageUseCase:
    def __init__(
        self,
        store: SessionStorePort,
        machine: DialogStateMachine,
        dispatcher: IntentDispatcher,
        send_reply: SendReplyUseCase | None,
        rate_limiter: TokenBucketRateLimiter | None,
        session_ttl_seconds: int,
        inactivity_timeout_seconds: int,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._store = store
        self._machine = machine
        self._dispatcher = dispatcher
        self._send_reply = send_reply
        self._rate_limiter = rate_limiter
        self._session_ttl_seconds = session_ttl_seconds
        self._inactivity_timeout_seconds = inactivity_timeout_seconds
        self._clock = clock
        self._locks = KeyedLocks()
        self._seen_message_ids = RecentIds()
        self._logger = logging.getLogger(__name__)

    def handle(self, message: Message) -> TurnResult:
        """
        Run one inbound text through the conversation.

        The record is saved before returning, so intents handed back in the
        result can be dispatched later without racing the next message.
        """
        client_key = message.client_key or message.session_key
        if self._rate_limiter is not None and not self._rate_limiter.allow(client_key):
            self._logger.warning(
                "Rate limit exceeded",
                extra={"session_key": message.session_key, "channel": message.platform, "reason": client_key},
            )
            return TurnResult(
                reply=RATE_LIMITED_REPLY,
                session_key=message.session_key,
                state=None,
                error=RATE_LIMITED,
            )

        with self._locks.hold(message.session_key):
            now = int(self._clock())
            record = self._load(message.session_key, now)
            record = replace(record, last_activity_at=max(now, record.last_activity_at))

            turn = self._machine.step(record, message.text, message.session_key)
            self._save(message.session_key, turn.record)

        self._logger.info(
            "Message handled",
            extra={
                "session_key": message.session_key,
                "channel": message.platform,
                "state": record.state.value,
                "next_state": turn.state.value,
                "intent": ",".join(type(i).__name__ for i in turn.intents) or None,
                "message_text": sanitize_for_log(message.text),
            },
        )
        return TurnResult(
            reply=turn.text,
            session_key=message.session_key,
            state=turn.state,
            intents=turn.intents,
        )

    def dispatch(self, intents: Iterable[SideEffectIntent]) -> int:
        return self._dispatcher.dispatch(intents)

    def handle_and_reply(self, message: Message) -> None:
        """Messaging gateway path: dedupe, handle, record intents, send the reply."""
        try:
            if not self._seen_message_ids.claim(message.id):
                self._logger.info("Duplicate message ignored", extra={"message_id": message.id})
                return

            result = self.handle(message)
            if result.intents:
                self.dispatch(result.intents)

            if self._send_reply is None:
                return
            try:
                self._send_reply.execute(recipient_id=message.session_key, text=result.reply)
            except Exception as e:
                self._logger.exception(
                    "Failed to send reply",
                    extra={"session_key": message.session_key, "channel": message.platform, "error": str(e)},
                )
        except Exception as e:
            self._logger.exception("Error handling message", extra={"message_id": message.id, "error": str(e)})

    def _load(self, session_key: str, now: int) -> SessionRecord:
        try:
            record = self._store.get(session_key)
        except SessionStoreError as e:
            self._logger.warning(
                "Session store read failed, starting fresh session",
                extra={"session_key": session_key, "error": str(e)},
            )
            return SessionRecord.fresh()

        if record is None:
            return SessionRecord.fresh()

        idle = now - record.last_activity_at
        if record.last_activity_at > 0 and idle > self._inactivity_timeout_seconds:
            self._logger.info(
                "Session expired by inactivity",
                extra={"session_key": session_key, "state": record.state.value, "reason": f"idle={idle}s"},
            )
            self._delete(session_key)
            return SessionRecord.fresh()

        return record

    def _save(self, session_key: str, record: SessionRecord) -> None:
        try:
            self._store.set(session_key, record, ttl_seconds=self._session_ttl_seconds)
        except SessionStoreError as e:
            self._logger.warning("Session store write failed", extra={"session_key": session_key, "error": str(e)})

    def _delete(self, session_key: str) -> None:
        try:
            self._store.delete(session_key)
        except SessionStoreError as e:
            self._logger.warning("Session store delete failed", extra={"session_key": session_key, "error": str(e)})
