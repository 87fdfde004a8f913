from __future__ import annotations

import logging

from app.application.exceptions import LLMContractError, LLMUpstreamError
from app.application.ports.llm import LLMPort
from app.infrastructure.llm.prompts import build_diagnosis_prompt, build_followup_prompt, build_free_prompt

MAX_ATTEMPTS = 5

RESOLVED_QUESTION = "*Isso resolveu seu problema?*\n- Digite *SIM* se resolveu\n- Digite *NÃO* se não resolveu"

FIRST_ATTEMPT_FALLBACK = (
    "🔧 *Análise Técnica - Tentativa 1/5*\n"
    "\n"
    "Vamos diagnosticar seu problema passo a passo:\n"
    "\n"
    "1️⃣ Verifique as conexões - Confirme se todos os cabos estão bem conectados\n"
    "2️⃣ Reinicie o modem - Desligue por 30 segundos e ligue novamente\n"
    "3️⃣ Teste a velocidade - Use speedtest.net para verificar\n"
    "\n" + RESOLVED_QUESTION
)

FALLBACK_LADDER = (
    "🔧 *Verificação de DNS*\n\n"
    "1️⃣ Altere o DNS para 177.39.208.2 e 177.39.208.3\n"
    "2️⃣ Limpe o cache DNS: `ipconfig /flushdns`\n"
    "3️⃣ Teste novamente",
    "🔧 *Verificação de Portas*\n\n"
    "1️⃣ Teste diferentes portas Ethernet\n"
    "2️⃣ Verifique se o cabo não está danificado\n"
    "3️⃣ Teste com outro dispositivo",
    "🔧 *Verificação de Sinal*\n\n"
    "1️⃣ Verifique atenuação da linha\n"
    "2️⃣ Confirme se não há interferências\n"
    "3️⃣ Teste isoladamente sem outros equipamentos",
)

FREE_ASSISTANT_FALLBACK = (
    "🤖 Desculpe, não consegui processar sua pergunta no momento. "
    "Tente novamente ou digite *MENU* para voltar ao menu principal."
)


def ladder_index(attempt: int) -> int:
    return (attempt - 2) % len(FALLBACK_LADDER)


def fallback_for_attempt(attempt: int) -> str:
    if attempt <= 1:
        return FIRST_ATTEMPT_FALLBACK
    return f"{FALLBACK_LADDER[ladder_index(attempt)]}\n\n{RESOLVED_QUESTION}"


class RemediationEngine:
    """Asks the generative backend for troubleshooting steps; falls back to canned text."""

    def __init__(self, llm: LLMPort) -> None:
        self._llm = llm
        self._logger = logging.getLogger(__name__)

    def diagnose(self, attempt: int, full_name: str, problem: str) -> str:
        attempt = max(1, min(attempt, MAX_ATTEMPTS))
        if attempt == 1:
            prompt = build_diagnosis_prompt(full_name=full_name, problem=problem)
        else:
            prompt = build_followup_prompt(attempt=attempt, max_attempts=MAX_ATTEMPTS, problem=problem)

        text = self._generate(prompt, purpose="diagnosis", attempt=attempt)
        if text is None:
            return fallback_for_attempt(attempt)

        header = "🔧 *Análise Técnica" if attempt == 1 else "🔧 *Nova Análise Técnica"
        return f"{header} - Tentativa {attempt}/{MAX_ATTEMPTS}*\n\n{text}\n\n---\n{RESOLVED_QUESTION}"

    def answer_free_question(self, question: str) -> str:
        text = self._generate(build_free_prompt(question), purpose="free_assistant")
        if text is None:
            return FREE_ASSISTANT_FALLBACK
        return f"🤖 {text}\n\n---\n*Digite MENU para voltar ao menu principal*"

    def _generate(self, prompt: str, purpose: str, attempt: int | None = None) -> str | None:
        try:
            text = self._llm.generate(prompt).strip()
        except (LLMUpstreamError, LLMContractError) as e:
            self._logger.warning(
                "LLM unavailable, using fallback",
                extra={"intent": purpose, "reason": type(e).__name__, "error": str(e), "attempt": attempt},
            )
            return None
        except Exception as e:
            self._logger.exception("LLM adapter failed unexpectedly", extra={"intent": purpose, "error": str(e)})
            return None
        return text or None
