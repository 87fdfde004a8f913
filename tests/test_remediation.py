"""
Tests for the retry/fallback engine around the generative backend.
"""

from __future__ import annotations

import pytest

from app.application.exceptions import LLMContractError
from app.application.ports.llm import LLMPort
from app.application.use_cases.remediation import (
    FALLBACK_LADDER,
    FIRST_ATTEMPT_FALLBACK,
    FREE_ASSISTANT_FALLBACK,
    RESOLVED_QUESTION,
    RemediationEngine,
    fallback_for_attempt,
    ladder_index,
)
from tests.fakes import FailingLLM, ScriptedLLM


class EmptyLLM(LLMPort):
    def generate(self, prompt: str) -> str:
        return "   "


class ContractBreakingLLM(LLMPort):
    def generate(self, prompt: str) -> str:
        raise LLMContractError("no choices")


class BrokenLLM(LLMPort):
    def generate(self, prompt: str) -> str:
        raise RuntimeError("unexpected")


@pytest.mark.parametrize("attempt,expected", [(2, 0), (3, 1), (4, 2), (5, 0)])
def test_ladder_index(attempt, expected):
    assert ladder_index(attempt) == expected


def test_fallback_for_first_attempt():
    assert fallback_for_attempt(1) == FIRST_ATTEMPT_FALLBACK
    assert "Tentativa 1/5" in FIRST_ATTEMPT_FALLBACK


def test_fallback_for_later_attempts_ends_with_question():
    text = fallback_for_attempt(3)

    assert text.startswith(FALLBACK_LADDER[1])
    assert text.endswith(RESOLVED_QUESTION)


@pytest.mark.parametrize("llm", [FailingLLM(), EmptyLLM(), ContractBreakingLLM(), BrokenLLM()])
def test_diagnose_never_raises(llm):
    engine = RemediationEngine(llm=llm)

    assert engine.diagnose(1, "Maria", "Sem internet") == FIRST_ATTEMPT_FALLBACK
    assert engine.diagnose(4, "Maria", "Sem internet") == fallback_for_attempt(4)


def test_diagnose_frames_backend_text():
    llm = ScriptedLLM("Troque o cabo.")
    engine = RemediationEngine(llm=llm)

    first = engine.diagnose(1, "Maria", "Sem internet")
    later = engine.diagnose(3, "Maria", "Sem internet")

    assert "Tentativa 1/5" in first
    assert "Troque o cabo." in first
    assert first.endswith(RESOLVED_QUESTION)
    assert "Nova Análise Técnica - Tentativa 3/5" in later
    assert "Maria" in llm.prompts[0]
    assert "tentativa 3/5" in llm.prompts[1]


def test_diagnose_clamps_attempt():
    engine = RemediationEngine(llm=ScriptedLLM("ok"))

    assert "Tentativa 5/5" in engine.diagnose(9, "Ana", "Lento")


def test_free_question_answer_and_fallback():
    answered = RemediationEngine(llm=ScriptedLLM("Curitiba.")).answer_free_question("Capital do Paraná?")
    fallback = RemediationEngine(llm=FailingLLM()).answer_free_question("Capital do Paraná?")

    assert "Curitiba." in answered
    assert "MENU" in answered
    assert fallback == FREE_ASSISTANT_FALLBACK


def test_fallback_ladder_for_attempts_two_to_five():
    """With the backend down, attempts 2, 3, 4, 5 walk ladder items 0, 1, 2, 0."""
    engine = RemediationEngine(llm=FailingLLM())

    texts = [engine.diagnose(attempt, "Maria", "Sem internet") for attempt in range(2, 6)]

    assert [t.split("\n\n" + RESOLVED_QUESTION)[0] for t in texts] == [
        FALLBACK_LADDER[0],
        FALLBACK_LADDER[1],
        FALLBACK_LADDER[2],
        FALLBACK_LADDER[0],
    ]
