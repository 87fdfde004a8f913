"""
Tests for the WhatsApp client, webhook verification and the OpenAI adapter.
"""

from __future__ import annotations

import hashlib
import hmac
import json
from types import SimpleNamespace
from unittest.mock import MagicMock

import httpx
import pytest

from app.application.exceptions import LLMContractError, LLMUpstreamError
from app.application.use_cases.send_reply import SendReplyUseCase
from app.infrastructure.llm.mock_llm import UnavailableLLM
from app.infrastructure.llm.openai_llm import OpenAILLM
from app.infrastructure.whatsapp.mock_platform import MockWhatsAppPlatform
from app.infrastructure.whatsapp.webhook_verify import verify_get_request, verify_post_signature
from app.infrastructure.whatsapp.whatsapp_client import WhatsAppClient


def test_whatsapp_client_posts_text_message():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"messages": [{"id": "wamid.1"}]})

    client = WhatsAppClient(
        access_token="token",
        phone_number_id="1234",
        client=httpx.Client(transport=httpx.MockTransport(handler)),
    )
    client.send_text("5544999990000", "Olá")

    request = seen[0]
    assert str(request.url) == "https://graph.facebook.com/v19.0/1234/messages"
    assert request.headers["Authorization"] == "Bearer token"
    assert json.loads(request.content) == {
        "messaging_product": "whatsapp",
        "to": "5544999990000",
        "type": "text",
        "text": {"body": "Olá"},
    }


def test_whatsapp_client_raises_on_error_status():
    client = WhatsAppClient(
        access_token="token",
        phone_number_id="1234",
        client=httpx.Client(
            transport=httpx.MockTransport(
                lambda request: httpx.Response(401, json={"error": {"code": 190, "message": "expired"}})
            )
        ),
    )

    with pytest.raises(httpx.HTTPStatusError):
        client.send_text("5544999990000", "Olá")


def test_send_reply_respects_auto_reply_flag():
    platform = MockWhatsAppPlatform()

    assert SendReplyUseCase(platform, auto_reply_enabled=False).execute("5544", "oi") is False
    assert SendReplyUseCase(platform, auto_reply_enabled=True).execute("5544", "oi") is True
    assert platform.sent == [("5544", "oi")]


def test_verify_get_request():
    params = {"hub.mode": "subscribe", "hub.verify_token": "secret", "hub.challenge": "42"}

    assert verify_get_request(params, "secret") == "42"
    assert verify_get_request({**params, "hub.verify_token": "wrong"}, "secret") is None
    assert verify_get_request({**params, "hub.mode": "unsubscribe"}, "secret") is None
    assert verify_get_request(params, "") is None


def test_verify_post_signature():
    body = b'{"entry": []}'
    good = "sha256=" + hmac.new(b"app-secret", body, hashlib.sha256).hexdigest()

    assert verify_post_signature(body, good, "app-secret", allow_unsigned=False) is True
    assert verify_post_signature(body, "sha256=deadbeef", "app-secret", allow_unsigned=False) is False
    assert verify_post_signature(body, "md5=abc", "app-secret", allow_unsigned=False) is False
    assert verify_post_signature(body, None, "app-secret", allow_unsigned=False) is False
    assert verify_post_signature(body, None, None, allow_unsigned=True) is True
    assert verify_post_signature(body, good, None, allow_unsigned=False) is False


def _completion(content: str | None) -> SimpleNamespace:
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def _openai_llm(client: MagicMock) -> OpenAILLM:
    return OpenAILLM(
        api_key="sk-test",
        model="gpt-4o-mini",
        temperature=0.3,
        max_tokens=600,
        timeout_seconds=15,
        client=client,
    )


def test_openai_llm_returns_stripped_content():
    client = MagicMock()
    client.chat.completions.create.return_value = _completion("  Reinicie o modem.  ")

    assert _openai_llm(client).generate("prompt") == "Reinicie o modem."
    kwargs = client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "gpt-4o-mini"
    assert kwargs["messages"][-1] == {"role": "user", "content": "prompt"}


def test_openai_llm_error_mapping():
    empty = MagicMock()
    empty.chat.completions.create.return_value = _completion(None)
    failing = MagicMock()
    failing.chat.completions.create.side_effect = TimeoutError("slow")

    with pytest.raises(LLMContractError):
        _openai_llm(empty).generate("prompt")
    with pytest.raises(LLMUpstreamError):
        _openai_llm(failing).generate("prompt")


def test_unavailable_llm_always_raises():
    with pytest.raises(LLMUpstreamError):
        UnavailableLLM().generate("prompt")
