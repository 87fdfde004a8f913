from __future__ import annotations

import re

GLOBAL_COMMANDS = frozenset({"oi", "menu"})
YES_ANSWERS = frozenset({"sim"})
NO_ANSWERS = frozenset({"não", "nao"})
KEEP_CURRENT_PLAN = "manter atual"

_PHONE_LIKE = re.compile(r"^\d{10,15}$")
_WHITESPACE = re.compile(r"\s+")


def normalize_command(text: str) -> str:
    return (text or "").strip().casefold()


def is_global_command(text: str) -> bool:
    return normalize_command(text) in GLOBAL_COMMANDS


def is_yes(text: str) -> bool:
    return normalize_command(text) in YES_ANSWERS


def is_no(text: str) -> bool:
    return normalize_command(text) in NO_ANSWERS


def is_keep_current_plan(text: str) -> bool:
    return normalize_command(text) == KEEP_CURRENT_PLAN


def is_phone_like(value: str | None) -> bool:
    """Session keys from the messaging gateway are the caller's phone number."""
    return bool(value) and bool(_PHONE_LIKE.match(value))


def strip_whitespace(text: str) -> str:
    return _WHITESPACE.sub("", text or "")
