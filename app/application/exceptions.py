class InvalidMessageError(ValueError):
    """Raised when an inbound message or identifier fails validation."""
    pass


class LLMUpstreamError(RuntimeError):
    """Raised when LLM provider fails (timeouts, network errors, service unavailable)."""
    pass


class LLMContractError(RuntimeError):
    """Raised when LLM adapter violates contract (empty or malformed response)."""
    pass


class SessionStoreError(RuntimeError):
    """Raised when the session store backend cannot be reached or returns garbage."""
    pass


class PersistenceSinkError(RuntimeError):
    """Raised when a record could not be written to the persistence sink."""
    pass
