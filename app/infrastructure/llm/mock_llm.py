from __future__ import annotations

from app.application.exceptions import LLMUpstreamError
from app.application.ports.llm import LLMPort


class UnavailableLLM(LLMPort):
    """Stand-in when no provider is configured: every call fails so callers use their fallbacks."""

    def generate(self, prompt: str) -> str:
        raise LLMUpstreamError("No LLM provider configured")
