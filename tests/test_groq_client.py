# ===============================================
# tests/test_groq_client.py
# Wire contract of the Groq chat-completions client,
# with requests.post replaced by a recorder.
# ===============================================

import pytest
import requests

from src.generate.clients import groq_client
from src.generate.clients.groq_client import GroqClient
from src.generate.errors import MissingCredentialError, ProviderError
from src.generate.types import Message, ModelParams


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        self._body = body
        self._text = text

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._body is None:
            raise ValueError("no json")
        return self._body


@pytest.fixture
def recorder(monkeypatch):
    calls = []
    state = {"response": FakeResponse(200, {"choices": [{"message": {"content": "hello"}}]})}

    def fake_post(url, json=None, headers=None, timeout=None):
        calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        if isinstance(state["response"], Exception):
            raise state["response"]
        return state["response"]

    monkeypatch.setattr(groq_client.requests, "post", fake_post)
    return calls, state


def test_missing_key_fails_before_network(recorder, monkeypatch):
    calls, _ = recorder
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    client = GroqClient(api_key="")
    with pytest.raises(MissingCredentialError):
        client.generate([Message(role="user", content="hi")], ModelParams())
    assert calls == []


def test_request_shape(recorder):
    calls, _ = recorder
    client = GroqClient(api_key="sk-test", base_url="https://example.test/v1/")
    text, meta = client.generate(
        [Message(role="user", content="hi")],
        ModelParams(model="llama-3.3-70b-versatile", temperature=0.6, max_tokens=512),
    )
    assert text == "hello"
    assert meta == {"engine": "groq", "model": "llama-3.3-70b-versatile"}

    call = calls[0]
    assert call["url"] == "https://example.test/v1/chat/completions"
    assert call["headers"]["Authorization"] == "Bearer sk-test"
    assert call["headers"]["Content-Type"] == "application/json"
    assert call["json"] == {
        "model": "llama-3.3-70b-versatile",
        "messages": [{"role": "user", "content": "hi"}],
        "max_tokens": 512,
        "temperature": 0.6,
    }
    assert call["timeout"] is None


def test_defaults_when_params_missing(recorder):
    calls, _ = recorder
    GroqClient(api_key="k", model="some-model").generate([Message(role="user", content="x")], ModelParams())
    body = calls[0]["json"]
    assert body["model"] == "some-model"
    assert body["temperature"] == 0.35
    assert body["max_tokens"] == 1024


def test_zero_temperature_is_kept(recorder):
    calls, _ = recorder
    GroqClient(api_key="k").generate([Message(role="user", content="x")], ModelParams(temperature=0))
    assert calls[0]["json"]["temperature"] == 0.0


def test_multipart_content_is_sent_as_is(recorder):
    calls, _ = recorder
    parts = [
        {"type": "text", "text": "describe"},
        {"type": "image_url", "image_url": {"url": "data:image/png;base64,AAAA"}},
    ]
    GroqClient(api_key="k").generate([Message(role="user", content=parts)], ModelParams())
    assert calls[0]["json"]["messages"][0]["content"] == parts


def test_provider_error_message_is_surfaced(recorder):
    _, state = recorder
    state["response"] = FakeResponse(429, {"error": {"message": "rate limited"}})
    with pytest.raises(ProviderError) as exc:
        GroqClient(api_key="k").generate([Message(role="user", content="x")], ModelParams())
    assert "rate limited" in str(exc.value)
    assert exc.value.status_code == 429


def test_provider_error_without_body(recorder):
    _, state = recorder
    state["response"] = FakeResponse(500, None)
    with pytest.raises(ProviderError) as exc:
        GroqClient(api_key="k").generate([Message(role="user", content="x")], ModelParams())
    assert str(exc.value) == "Groq API Error: Unknown error"


def test_transport_failure_becomes_provider_error(recorder):
    _, state = recorder
    state["response"] = requests.ConnectionError("connection refused")
    with pytest.raises(ProviderError) as exc:
        GroqClient(api_key="k").generate([Message(role="user", content="x")], ModelParams())
    assert "connection refused" in str(exc.value)
    assert exc.value.status_code is None


def test_empty_choices_return_empty_text(recorder):
    _, state = recorder
    state["response"] = FakeResponse(200, {"choices": []})
    text, _ = GroqClient(api_key="k").generate([Message(role="user", content="x")], ModelParams())
    assert text == ""

    state["response"] = FakeResponse(200, {"choices": [{"message": {"content": None}}]})
    text, _ = GroqClient(api_key="k").generate([Message(role="user", content="x")], ModelParams())
    assert text == ""
