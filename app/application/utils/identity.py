from __future__ import annotations

import uuid
from dataclasses import dataclass


@dataclass(frozen=True)
class SessionIdentity:
    session_key: str
    generated: bool  # True when a new key must be handed back to the caller


def resolve_session_key(
    explicit_id: str | None,
    header_value: str | None,
    cookie_value: str | None,
) -> SessionIdentity:
    """
    First non-empty hint wins: explicit field, then header, then cookie.

    With no hint a random UUID4 is generated (os.urandom backed), so two
    concurrent first contacts never share a session.
    """
    for candidate in (explicit_id, header_value, cookie_value):
        value = (candidate or "").strip()
        if value:
            return SessionIdentity(session_key=value, generated=False)
    return SessionIdentity(session_key=str(uuid.uuid4()), generated=True)
