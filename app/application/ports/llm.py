from abc import ABC, abstractmethod


class LLMPort(ABC):
    @abstractmethod
    def generate(self, prompt: str) -> str:
        """
        Generate a text completion for `prompt`.

        Raises:
            LLMUpstreamError: provider unreachable, timed out or not configured
            LLMContractError: provider answered with empty or unusable text
        """
        raise NotImplementedError
