from __future__ import annotations

import logging

import redis

from app.application.exceptions import SessionStoreError
from app.application.ports.session_store import SessionStorePort
from app.domain.entities.session_record import SessionRecord
from app.infrastructure.store.serialization import deserialize_record, serialize_record

STATE_KEY_PREFIX = "chat:"
DATA_KEY_PREFIX = "data:"


class RedisSessionStore(SessionStorePort):
    """
    Two keys per caller, written together with the same TTL:
    `chat:<key>` holds the state tag, `data:<key>` the JSON record.
    """

    def __init__(self, client: redis.Redis) -> None:
        self._client = client
        self._logger = logging.getLogger(__name__)

    @classmethod
    def from_url(cls, url: str, socket_timeout: float, connect_timeout: float) -> "RedisSessionStore":
        client = redis.Redis.from_url(
            url,
            decode_responses=True,
            socket_timeout=socket_timeout,
            socket_connect_timeout=connect_timeout,
        )
        return cls(client)

    def get(self, session_key: str) -> SessionRecord | None:
        try:
            state_tag, raw = self._client.mget(_state_key(session_key), _data_key(session_key))
        except redis.RedisError as e:
            raise SessionStoreError(f"Redis read failed: {e}") from e

        if raw is None:
            return None
        return deserialize_record(raw, state_tag)

    def set(self, session_key: str, record: SessionRecord, ttl_seconds: int) -> None:
        try:
            pipe = self._client.pipeline(transaction=True)
            pipe.set(_state_key(session_key), record.state.value, ex=ttl_seconds)
            pipe.set(_data_key(session_key), serialize_record(record), ex=ttl_seconds)
            pipe.execute()
        except redis.RedisError as e:
            raise SessionStoreError(f"Redis write failed: {e}") from e

    def delete(self, session_key: str) -> None:
        try:
            self._client.delete(_state_key(session_key), _data_key(session_key))
        except redis.RedisError as e:
            raise SessionStoreError(f"Redis delete failed: {e}") from e

    def ping(self) -> bool:
        try:
            return bool(self._client.ping())
        except redis.RedisError as e:
            self._logger.warning("Redis not available", extra={"error": str(e)})
            return False


def _state_key(session_key: str) -> str:
    return f"{STATE_KEY_PREFIX}{session_key}"


def _data_key(session_key: str) -> str:
    return f"{DATA_KEY_PREFIX}{session_key}"
