from abc import ABC, abstractmethod


class MessagePlatformPort(ABC):
    """Outbound channel for gateway replies; recipient_id is the caller's address (WhatsApp number)."""

    @abstractmethod
    def send_text(self, recipient_id: str, text: str) -> None:
        raise NotImplementedError
