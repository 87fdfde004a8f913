from abc import ABC, abstractmethod

from app.domain.entities.session_record import SessionRecord


class SessionStorePort(ABC):
    """
    Typed access to per-caller session records.

    Adapters raise SessionStoreError on backend failure. A missing or
    expired record is not an error: get() returns None.
    """

    @abstractmethod
    def get(self, session_key: str) -> SessionRecord | None:
        raise NotImplementedError

    @abstractmethod
    def set(self, session_key: str, record: SessionRecord, ttl_seconds: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, session_key: str) -> None:
        raise NotImplementedError
