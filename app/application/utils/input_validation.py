from __future__ import annotations

import re

from app.application.exceptions import InvalidMessageError

SUSPICIOUS_PATTERNS = (
    "' or '1'='1",
    "' or 1=1",
    "union select",
    "drop table",
    "delete from",
    "insert into",
    "update set",
    "<script",
    "javascript:",
    "data:text/html",
    "eval(",
    "expression(",
    "@import",
)

MAX_CONSECUTIVE_REPEATS = 10

_USER_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]+$")
_CONTROL_CHARS = re.compile(r"[\x00-\x1f]")


def validate_message(text: str | None, max_length: int) -> str:
    """Return the trimmed message or raise InvalidMessageError."""
    if text is None or not text.strip():
        raise InvalidMessageError("Mensagem não pode estar vazia")

    if len(text) > max_length:
        raise InvalidMessageError(f"Mensagem muito longa (máximo {max_length} caracteres)")

    message = text.strip()
    lowered = message.lower()
    for pattern in SUSPICIOUS_PATTERNS:
        if pattern in lowered:
            raise InvalidMessageError("Mensagem contém conteúdo não permitido")

    if has_excessive_repetition(message):
        raise InvalidMessageError("Mensagem contém repetição excessiva de caracteres")

    return message


def validate_user_id(value: str | None, max_length: int) -> str | None:
    """Return the cleaned identifier, None when absent, or raise InvalidMessageError."""
    cleaned = (value or "").strip()
    if not cleaned:
        return None
    if len(cleaned) > max_length:
        raise InvalidMessageError(f"Identificador muito longo (máximo {max_length} caracteres)")
    if not _USER_ID_PATTERN.match(cleaned):
        raise InvalidMessageError("Identificador contém caracteres inválidos")
    return cleaned


def has_excessive_repetition(text: str) -> bool:
    if len(text) < MAX_CONSECUTIVE_REPEATS:
        return False

    run = 1
    for previous, current in zip(text, text[1:]):
        if current == previous:
            run += 1
            if run > MAX_CONSECUTIVE_REPEATS:
                return True
        else:
            run = 1
    return False


def sanitize_for_log(text: str) -> str:
    cleaned = _CONTROL_CHARS.sub(" ", text or "")
    if len(cleaned) > 100:
        cleaned = cleaned[:97] + "..."
    return cleaned
