from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from app.domain.entities.message import Message


class WebhookEventDTO(BaseModel):
    """WhatsApp Cloud API notification: entry[].changes[].value.messages[]."""

    object: str | None = None
    entry: list[dict[str, Any]] = Field(default_factory=list)

    def extract_messages(self) -> list[Message]:
        messages: list[Message] = []
        for entry in self.entry or []:
            for change in entry.get("changes", []) or []:
                value = change.get("value") or {}
                for msg in value.get("messages", []) or []:
                    if msg.get("type") != "text":
                        continue
                    body = (msg.get("text") or {}).get("body")
                    sender = msg.get("from")
                    mid = msg.get("id")
                    if not (sender and mid and body and str(body).strip()):
                        continue

                    try:
                        timestamp = int(msg.get("timestamp") or 0)
                    except (TypeError, ValueError):
                        timestamp = 0

                    messages.append(
                        Message(
                            id=str(mid),
                            session_key=str(sender),
                            text=str(body),
                            timestamp=timestamp,
                            platform="whatsapp",
                            client_key=str(sender),
                        )
                    )

        return messages
