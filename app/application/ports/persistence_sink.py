from abc import ABC, abstractmethod


class PersistenceSinkPort(ABC):
    """Append-only sink for finished conversations. Raises PersistenceSinkError."""

    @abstractmethod
    def save_support(self, name: str, problem: str, description: str, status: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def save_plans(
        self,
        name: str,
        situation: str,
        current_plan: str,
        desired_plan: str,
        phone: str,
        notes: str,
    ) -> None:
        raise NotImplementedError

    @abstractmethod
    def save_feedback(self, name: str, service_type: str, rating: str, comment: str) -> None:
        raise NotImplementedError
