"""
Tests for the log line context suffix.
"""

from __future__ import annotations

import logging

from app.main import ContextFormatter


def _format(**extra) -> str:
    record = logging.makeLogRecord({"levelname": "INFO", "name": "app.test", "msg": "Message handled", **extra})
    return ContextFormatter("%(levelname)s:%(name)s:%(message)s").format(record)


def test_turn_context_is_rendered():
    line = _format(
        session_key="s1",
        message_id="wamid.1",
        state="menu",
        next_state="support_name",
        attempt=3,
        status=403,
        message_text="oi",
    )

    assert line.startswith("INFO:app.test:Message handled | ")
    for part in (
        "session_key=s1",
        "message_id=wamid.1",
        "next_state=support_name",
        "attempt=3",
        "status=403",
        "message_text=oi",
    ):
        assert part in line


def test_empty_context_is_omitted():
    assert _format(session_key="", intent=None) == "INFO:app.test:Message handled"
