from __future__ import annotations

from app.application.exceptions import LLMUpstreamError, PersistenceSinkError
from app.application.ports.llm import LLMPort
from app.application.ports.persistence_sink import PersistenceSinkPort


class FakeClock:
    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FailingLLM(LLMPort):
    def __init__(self) -> None:
        self.prompts: list[str] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        raise LLMUpstreamError("backend down")


class ScriptedLLM(LLMPort):
    def __init__(self, answer: str = "Reinicie o roteador.") -> None:
        self.answer = answer
        self.prompts: list[str] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.answer


class RecordingSink(PersistenceSinkPort):
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.support: list[tuple[str, ...]] = []
        self.plans: list[tuple[str, ...]] = []
        self.feedback: list[tuple[str, ...]] = []

    def _check(self) -> None:
        if self.fail:
            raise PersistenceSinkError("sheet unavailable")

    def save_support(self, name: str, problem: str, description: str, status: str) -> None:
        self._check()
        self.support.append((name, problem, description, status))

    def save_plans(self, name, situation, current_plan, desired_plan, phone, notes) -> None:
        self._check()
        self.plans.append((name, situation, current_plan, desired_plan, phone, notes))

    def save_feedback(self, name: str, service_type: str, rating: str, comment: str) -> None:
        self._check()
        self.feedback.append((name, service_type, rating, comment))
