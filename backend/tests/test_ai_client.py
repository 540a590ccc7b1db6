"""Tests for the Groq completion client: request shape, errors, streaming."""

import asyncio
import json
from contextlib import aclosing

import groq
import httpx
import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from hirely.config import settings
from hirely.services import ai_client
from hirely.services.ai_client import (
    AccessDeniedError,
    AuthError,
    CompletionError,
    EmptyResponseError,
    InvalidJSONError,
)

GROQ_URL = "https://api.groq.com/openai/v1/chat/completions"


def status_error(code: int) -> groq.APIStatusError:
    response = httpx.Response(code, request=httpx.Request("POST", GROQ_URL))
    return groq.APIStatusError(f"HTTP {code}", response=response, body=None)


class TestTextCompletion:

    def test_returns_content_and_sends_defaults(self, fake_groq):
        fake = fake_groq("Hello there")
        reply = asyncio.run(ai_client.text_completion("sys", "user"))
        assert reply == "Hello there"

        call = fake.calls[0]
        assert call["model"] == settings.GROQ_MODEL
        assert call["messages"] == [
            {"role": "system", "content": "sys"},
            {"role": "user", "content": "user"},
        ]
        assert call["temperature"] == 0.7
        assert call["max_tokens"] == 2048
        assert call["top_p"] == 0.95
        assert "response_format" not in call

    def test_overrides_are_forwarded(self, fake_groq):
        fake = fake_groq("ok")
        asyncio.run(ai_client.text_completion("s", "u", temperature=0.1, max_tokens=16))
        assert fake.calls[0]["temperature"] == 0.1
        assert fake.calls[0]["max_tokens"] == 16

    def test_empty_content_raises(self, fake_groq):
        fake_groq(None)
        with pytest.raises(EmptyResponseError):
            asyncio.run(ai_client.text_completion("s", "u"))


class TestJsonCompletion:

    def test_json_mode_and_instruction(self, fake_groq):
        fake = fake_groq(json.dumps({"matchScore": 88}))
        result = asyncio.run(ai_client.json_completion("Be precise.", "Analyze"))
        assert result == {"matchScore": 88}

        call = fake.calls[0]
        assert call["response_format"] == {"type": "json_object"}
        assert call["messages"][0]["content"].startswith("Be precise.")
        assert call["messages"][0]["content"].endswith(ai_client.JSON_ONLY_INSTRUCTION)
        assert call["temperature"] == 0.3

    def test_truncated_body_is_invalid_json(self, fake_groq):
        fake_groq("{not json")
        with pytest.raises(InvalidJSONError):
            asyncio.run(ai_client.json_completion("s", "u"))

    def test_invalid_json_raises_without_retry(self, fake_groq):
        fake = fake_groq("not json at all")
        with pytest.raises(InvalidJSONError) as excinfo:
            asyncio.run(ai_client.json_completion("s", "u"))
        assert excinfo.value.raw == "not json at all"
        assert isinstance(excinfo.value, ValueError)
        assert fake.call_count == 1


class TestErrorMapping:

    def test_401_is_auth_error(self, fake_groq):
        fake_groq(status_error(401))
        with pytest.raises(AuthError) as excinfo:
            asyncio.run(ai_client.text_completion("s", "u"))
        assert excinfo.value.status_code == 401

    def test_401_is_auth_error_in_json_mode_too(self, fake_groq):
        fake_groq(status_error(401))
        with pytest.raises(AuthError):
            asyncio.run(ai_client.json_completion("s", "u"))

    def test_403_is_access_denied(self, fake_groq):
        fake_groq(status_error(403))
        with pytest.raises(AccessDeniedError) as excinfo:
            asyncio.run(ai_client.text_completion("s", "u"))
        assert settings.GROQ_MODEL in str(excinfo.value)

    def test_other_status_is_generic(self, fake_groq):
        fake_groq(status_error(500))
        with pytest.raises(CompletionError) as excinfo:
            asyncio.run(ai_client.text_completion("s", "u"))
        assert type(excinfo.value) is CompletionError
        assert excinfo.value.status_code == 500

    def test_connection_error_is_generic(self, fake_groq):
        fake_groq(groq.APIConnectionError(request=httpx.Request("POST", GROQ_URL)))
        with pytest.raises(CompletionError):
            asyncio.run(ai_client.text_completion("s", "u"))

    def test_missing_key_fails_before_any_call(self, monkeypatch):
        monkeypatch.setattr(settings, "GROQ_API_KEY", "")
        with pytest.raises(AuthError):
            asyncio.run(ai_client.text_completion("s", "u"))

    def test_placeholder_key_fails_before_any_call(self, monkeypatch):
        monkeypatch.setattr(settings, "GROQ_API_KEY", "gsk_your_api_key_here")
        with pytest.raises(AuthError):
            asyncio.run(ai_client.json_completion("s", "u"))


class TestStreaming:

    def test_yields_non_empty_chunks_and_closes(self, fake_groq):
        fake = fake_groq(["Tell ", "", "me ", None, "more."])

        async def collect():
            return [c async for c in ai_client.stream_completion("s", "u")]

        assert asyncio.run(collect()) == ["Tell ", "me ", "more."]
        assert fake.calls[0]["stream"] is True
        assert fake.streams[0].closed

    def test_early_exit_closes_provider_stream(self, fake_groq):
        fake = fake_groq(["one", "two", "three"])

        async def first_only():
            async with aclosing(ai_client.stream_completion("s", "u")) as chunks:
                async for chunk in chunks:
                    return chunk

        assert asyncio.run(first_only()) == "one"
        assert fake.streams[0].closed


class TestStatusHelpers:

    def test_provider_name_unconfigured(self, monkeypatch):
        monkeypatch.setattr(settings, "GROQ_API_KEY", "")
        assert ai_client.ai_provider_name() == "none"
        assert asyncio.run(ai_client.ai_health_check())["status"] == "unconfigured"

    def test_health_check_ok(self, monkeypatch, fake_groq):
        monkeypatch.setattr(settings, "GROQ_API_KEY", "gsk_live_test")
        fake_groq("OK")
        result = asyncio.run(ai_client.ai_health_check())
        assert result["status"] == "ok"
        assert result["test_reply"] == "OK"

    def test_health_check_error(self, monkeypatch, fake_groq):
        monkeypatch.setattr(settings, "GROQ_API_KEY", "gsk_live_test")
        fake_groq(status_error(401))
        assert asyncio.run(ai_client.ai_health_check())["status"] == "error"
