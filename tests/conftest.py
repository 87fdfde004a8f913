from __future__ import annotations

import pytest

from app.application.use_cases.dialog_machine import DialogStateMachine
from app.application.use_cases.dispatch_intents import IntentDispatcher
from app.application.use_cases.handle_incoming_message import HandleIncomingMessageUseCase
from app.application.use_cases.remediation import RemediationEngine
from app.infrastructure.store.memory_store import MemorySessionStore
from tests.fakes import FailingLLM, FakeClock, RecordingSink


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def failing_llm() -> FailingLLM:
    return FailingLLM()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def machine(failing_llm: FailingLLM) -> DialogStateMachine:
    return DialogStateMachine(remediation=RemediationEngine(llm=failing_llm))


@pytest.fixture
def store(clock: FakeClock) -> MemorySessionStore:
    return MemorySessionStore(clock=clock)


@pytest.fixture
def use_case(store, machine, sink, clock) -> HandleIncomingMessageUseCase:
    return HandleIncomingMessageUseCase(
        store=store,
        machine=machine,
        dispatcher=IntentDispatcher(sink=sink),
        send_reply=None,
        rate_limiter=None,
        session_ttl_seconds=3600,
        inactivity_timeout_seconds=600,
        clock=clock,
    )
