from dataclasses import dataclass


@dataclass(frozen=True)
class Message:
    id: str
    session_key: str
    text: str
    timestamp: int
    platform: str  # "web" | "whatsapp"
    client_key: str | None = None  # rate-limit key, defaults to session_key
