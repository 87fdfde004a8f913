"""
Tests for session store adapters and record serialization.
"""

from __future__ import annotations

import json
from dataclasses import replace
from unittest.mock import MagicMock

import pytest
import redis

from app.application.exceptions import SessionStoreError
from app.domain.entities.dialog_state import DialogState
from app.domain.entities.session_record import SessionRecord
from app.infrastructure.store.memory_store import MemorySessionStore
from app.infrastructure.store.redis_store import RedisSessionStore
from app.infrastructure.store.serialization import deserialize_record, serialize_record


def _record() -> SessionRecord:
    return SessionRecord(
        state=DialogState.SUPPORT_DIAGNOSIS,
        full_name="Maria Silva",
        problem="Sem internet",
        description="Sem internet desde ontem",
        ai_attempts=3,
        service_type="Technical Support",
        last_activity_at=1_700_000_000,
    )


def test_serialization_keeps_every_field():
    record = _record()

    restored = deserialize_record(serialize_record(record), record.state.value)

    assert restored == record


def test_serialized_payload_excludes_state_and_keeps_accents():
    payload = json.loads(serialize_record(replace(_record(), full_name="João")))

    assert "state" not in payload
    assert payload["full_name"] == "João"


def test_missing_and_unknown_keys_are_tolerated():
    restored = deserialize_record('{"full_name": "Ana", "legacy_field": 1}', b"plans_name")

    assert restored.full_name == "Ana"
    assert restored.ai_attempts == 0
    assert restored.state == DialogState.PLANS_NAME


@pytest.mark.parametrize("tag", [None, "", "aguardando_algo"])
def test_unknown_state_tag_means_menu(tag):
    assert deserialize_record("{}", tag).state == DialogState.MENU


@pytest.mark.parametrize("raw", ["not json", "[1, 2]"])
def test_corrupted_payload_raises_store_error(raw):
    with pytest.raises(SessionStoreError):
        deserialize_record(raw, "menu")


def test_memory_store_round_trip_and_delete(clock):
    store = MemorySessionStore(clock=clock)
    store.set("s1", _record(), ttl_seconds=60)

    assert store.get("s1") == _record()

    store.delete("s1")
    assert store.get("s1") is None
    store.delete("s1")


def test_memory_store_expires_entries(clock):
    store = MemorySessionStore(clock=clock)
    store.set("s1", _record(), ttl_seconds=60)

    clock.advance(59)
    assert store.get("s1") is not None
    clock.advance(1)
    assert store.get("s1") is None
    assert len(store) == 0


def test_redis_store_writes_both_keys_with_ttl():
    client = MagicMock()
    pipe = client.pipeline.return_value
    store = RedisSessionStore(client)

    store.set("s1", _record(), ttl_seconds=3600)

    client.pipeline.assert_called_once_with(transaction=True)
    pipe.set.assert_any_call("chat:s1", "support_diagnosis", ex=3600)
    data_call = [c for c in pipe.set.call_args_list if c.args[0] == "data:s1"][0]
    assert json.loads(data_call.args[1])["ai_attempts"] == 3
    assert data_call.kwargs == {"ex": 3600}
    pipe.execute.assert_called_once()


def test_redis_store_get():
    client = MagicMock()
    client.mget.return_value = ["plans_phone", serialize_record(_record())]
    store = RedisSessionStore(client)

    record = store.get("s1")

    client.mget.assert_called_once_with("chat:s1", "data:s1")
    assert record.state == DialogState.PLANS_PHONE
    assert record.full_name == "Maria Silva"


def test_redis_store_get_without_data_is_none():
    client = MagicMock()
    client.mget.return_value = ["menu", None]

    assert RedisSessionStore(client).get("s1") is None


def test_redis_store_wraps_backend_errors():
    client = MagicMock()
    client.mget.side_effect = redis.ConnectionError("refused")
    client.pipeline.return_value.execute.side_effect = redis.TimeoutError("slow")
    client.delete.side_effect = redis.ConnectionError("refused")
    store = RedisSessionStore(client)

    with pytest.raises(SessionStoreError):
        store.get("s1")
    with pytest.raises(SessionStoreError):
        store.set("s1", _record(), ttl_seconds=10)
    with pytest.raises(SessionStoreError):
        store.delete("s1")


def test_redis_ping_reports_unavailable():
    client = MagicMock()
    client.ping.side_effect = redis.ConnectionError("refused")

    assert RedisSessionStore(client).ping() is False
